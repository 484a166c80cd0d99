from .base import AIModel, validate_response

__all__ = ["AIModel", "validate_response"]
