"""
Error handling utilities for Lambda functions.

Provides standardized errors with error codes.
"""

from typing import Any, Dict, Optional


class AppError(Exception):
    """
    Application error with error code and message.

    Raised inside handlers and converted to a safe payload at the edge of
    each resolver.
    """

    def __init__(self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for an API response body."""
        return {
            "errorCode": self.error_code,
            "message": self.message,
            **self.details,
        }


class ErrorCode:
    """Standard error codes for the application."""

    # Request errors
    INVALID_INPUT = "INVALID_INPUT"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    UNSUPPORTED_MODEL = "UNSUPPORTED_MODEL"

    # Integration errors
    MODEL_ERROR = "MODEL_ERROR"
