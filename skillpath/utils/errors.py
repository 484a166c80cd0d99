"""Standardized error handling for the application."""

import logging
from typing import Any, Dict, Optional

from ..config import settings

# Configure logger
logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class SkillpathError(Exception):
    """Base exception class for all application errors."""

    def __init__(
        self,
        message: str = "An error occurred",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the error.

        Args:
            message: Human-readable error message
            status_code: HTTP status code
            details: Additional error details
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary for API responses.

        Returns:
            Dict containing error details
        """
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
        }

    def log(self, level: int = logging.ERROR) -> None:
        """Log the error with appropriate level and context.

        Args:
            level: Logging level to use
        """
        log_context = {
            "error_type": self.__class__.__name__,
            "status_code": self.status_code,
            "error_details": self.details,
        }
        logger.log(level, f"{self.message}", extra=log_context)


class NotFoundError(SkillpathError):
    """Referenced user, roadmap or saved item does not exist."""

    def __init__(self, resource: str, identifier: Optional[str] = None):
        message = f"{resource} not found"
        details = {"resource": resource}
        if identifier is not None:
            details["id"] = identifier
        super().__init__(message=message, status_code=404, details=details)


class ValidationFailure(SkillpathError):
    """Request is missing required fields or carries invalid values."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, status_code=400, details=details)


class QuotaExceededError(SkillpathError):
    """Daily usage cap for a feature has been reached."""

    def __init__(self, feature: str, usage_count: int, status_code: int = 429):
        self.feature = feature
        self.usage_count = usage_count
        super().__init__(
            message="Daily limit reached",
            status_code=status_code,
            details={"feature": feature, "usageCount": usage_count, "remainingCount": 0},
        )


# Upstream errors
class UpstreamFailure(SkillpathError):
    """An external service failed or timed out."""

    def __init__(self, message: str = "Upstream service failed", status_code: int = 502, details=None):
        super().__init__(message=message, status_code=status_code, details=details)


class UpstreamFormatError(UpstreamFailure):
    """An external service answered, but not in the expected shape."""

    def __init__(self, message: str = "Unexpected response format", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, status_code=502, details=details)


class ContentSourceError(UpstreamFailure):
    """An article feed could not be fetched."""

    def __init__(self, source: str, message: str):
        super().__init__(message=message, details={"source": source})


# AI Provider Errors
class ProviderError(UpstreamFailure):
    """Base class for AI provider errors."""

    pass


class RateLimitError(ProviderError):
    """Provider rate limit exceeded."""

    retry_after: float = 0

    def __init__(self, provider: str, retry_after: Optional[float] = None):
        """Initialize rate limit error.

        Args:
            provider: Name of the AI provider
            retry_after: Seconds to wait before retrying
        """
        message = f"Rate limit exceeded for provider {provider}"
        self.retry_after = retry_after or 0

        super().__init__(message=message, details={"provider": provider, "retry_after": self.retry_after})
        self.status_code = 429


def convert_exception(exc: Exception) -> SkillpathError:
    """Map any exception to an application error.

    Unknown exceptions become a generic 500; their text only reaches the
    client outside production.
    """
    if isinstance(exc, SkillpathError):
        return exc

    if settings.api.is_production:
        return SkillpathError(message=GENERIC_ERROR_MESSAGE, status_code=500)
    return SkillpathError(
        message=GENERIC_ERROR_MESSAGE,
        status_code=500,
        details={"exception": exc.__class__.__name__, "reason": str(exc)},
    )
