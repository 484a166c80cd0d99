"""Middleware for request handling and error processing."""

import logging
import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..config import settings
from .errors import SkillpathError, convert_exception

# Configure logger
logger = logging.getLogger(__name__)


def error_response(error: SkillpathError) -> JSONResponse:
    """Render an application error as a JSON response."""
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def skillpath_error_handler(request: Request, exc: SkillpathError) -> JSONResponse:
    """Exception handler for errors raised inside route handlers."""
    exc.log(logging.WARNING if exc.status_code < 500 else logging.ERROR)
    return error_response(exc)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for global error handling."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and turn any escaped exception into JSON.

        Args:
            request: The incoming request
            call_next: The next middleware or route handler

        Returns:
            The response
        """
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            error = convert_exception(exc)
            return error_response(error)


def _status_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request with its status and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        logger.log(
            _status_level(response.status_code),
            f"{request.method} {target} -> {response.status_code} ({elapsed_ms} ms)",
            extra={
                "client": request.client.host if request.client else "unknown",
                "status_code": response.status_code,
                "process_time_ms": elapsed_ms,
            },
        )
        return response


def setup_middleware(app: FastAPI) -> None:
    """Set up error handling and request logging for the application.

    Args:
        app: The FastAPI application
    """
    app.add_exception_handler(SkillpathError, skillpath_error_handler)  # type: ignore[arg-type]
    app.add_middleware(ErrorHandlingMiddleware)
    if settings.logging.enable_endpoint_logging:
        app.add_middleware(RequestLoggingMiddleware)
