"""Logging configuration for the application."""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from fastapi import Request, Response
from fastapi.routing import APIRoute

from ..config import LOGS_DIR, settings

LOG_FILE_NAME = "skillpath.log"
SENSITIVE_HEADERS = ("authorization", "cookie")

# Initialize logger
logger = logging.getLogger(__name__)


def _cleanup_old_logs(log_dir: Path, base_name: str, max_files: int, logger: logging.Logger):
    """Delete the oldest rotated log files beyond ``max_files``.

    Args:
        log_dir: Directory containing log files
        base_name: Base name of the log file
        max_files: Maximum number of rotated files to keep
        logger: Logger used to report the cleanup
    """
    try:
        log_files = sorted(
            [f for f in log_dir.glob(f"{base_name}.*") if f.is_file()],
            key=lambda x: x.stat().st_mtime,
            reverse=True,
        )
        for old_file in log_files[max_files:]:
            try:
                old_file.unlink()
                logger.debug(f"Deleted old log file: {old_file}")
            except OSError as e:
                logger.error(f"Failed to delete old log file {old_file}: {e}")
    except OSError as e:
        logger.error(f"Error during log cleanup: {e}")


def _file_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.TimedRotatingFileHandler(
        LOGS_DIR / LOG_FILE_NAME,
        when="midnight",
        interval=1,
        backupCount=settings.logging.backup_count,
        encoding="utf-8",
        delay=True,
    )
    handler.suffix = "%Y-%m-%d"
    handler.setLevel(settings.logging.file_log_level)
    handler.setFormatter(formatter)
    return handler


def setup_logging():
    """Set up logging configuration."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Handlers do the filtering

    # Remove existing handlers to prevent duplicates on reload
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(settings.logging.log_level)
    console_handler.setFormatter(logging.Formatter(settings.logging.format))
    root_logger.addHandler(console_handler)

    if settings.logging.log_to_file:
        os.makedirs(LOGS_DIR, exist_ok=True)
        root_logger.addHandler(_file_handler(logging.Formatter(settings.logging.file_format)))
        _cleanup_old_logs(LOGS_DIR, LOG_FILE_NAME, settings.logging.backup_count, root_logger)

    for logger_name, level in settings.logging.noisy_loggers.items():
        logging.getLogger(logger_name).setLevel(level)


class EndpointLoggingRoute(APIRoute):
    """API route that logs the incoming call before handling it."""

    def get_route_handler(self) -> Callable:
        original_route_handler = super().get_route_handler()

        async def custom_route_handler(request: Request) -> Response:
            endpoint_logger = logging.getLogger("endpoint")
            headers = {k: v for k, v in request.headers.items() if k.lower() not in SENSITIVE_HEADERS}

            endpoint_logger.debug(
                "Endpoint called",
                extra={
                    "request": {
                        "method": request.method,
                        "path": request.url.path,
                        "path_params": request.path_params,
                        "query_params": dict(request.query_params),
                        "headers": headers,
                        "body": await self._get_request_body(request),
                    }
                },
            )
            return await original_route_handler(request)

        return custom_route_handler

    @staticmethod
    async def _get_request_body(request: Request) -> Optional[Dict[str, Any]]:
        """Get the request body if it exists and is JSON."""
        try:
            return await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None


class EndpointLogFormatter(logging.Formatter):
    """Renders the captured request as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        request_info = getattr(record, "request", None)
        if request_info is None:
            return super().format(record)

        record_copy = logging.makeLogRecord(record.__dict__)
        record_copy.msg = f"{request_info['method']} {request_info['path']} {json.dumps(request_info, default=str)}"
        record_copy.args = None
        return super().format(record_copy)


def setup_endpoint_logging():
    """Route endpoint logs to the application log file only."""
    endpoint_logger = logging.getLogger("endpoint")
    endpoint_logger.handlers.clear()
    endpoint_logger.propagate = False
    endpoint_logger.setLevel(settings.logging.file_log_level)

    if not settings.logging.log_to_file:
        return

    os.makedirs(LOGS_DIR, exist_ok=True)
    endpoint_logger.addHandler(
        _file_handler(EndpointLogFormatter("%(asctime)s - endpoint - %(levelname)s - %(message)s"))
    )
