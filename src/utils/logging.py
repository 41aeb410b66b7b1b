"""
Logging utilities for Lambda functions.

Provides structured JSON logging with correlation IDs for tracing requests
through the edge function and the AppSync resolvers.
"""

import json
import logging
import os
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}


class StructuredLogger:
    """
    JSON logger for Lambda functions with correlation ID support.

    Example:
        logger = StructuredLogger(__name__)
        logger.info("Fetching recruiter profile", link_id="abc-123")
        logger.error("Bedrock call failed", extra={"modelId": model_id}, exc_info=True)
    """

    def __init__(self, name: str, correlation_id: Optional[str] = None) -> None:
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))
        self.correlation_id = correlation_id or str(uuid.uuid4())

    def set_correlation_id(self, correlation_id: str) -> None:
        """Bind a new correlation ID, usually once per invocation."""
        self.correlation_id = correlation_id

    def _enabled(self, level: str) -> bool:
        threshold = _LEVELS.get(os.getenv("LOG_LEVEL", "INFO").upper(), 20)
        return _LEVELS[level] >= threshold

    def _log(
        self,
        level: str,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False,
        **kwargs: Any,
    ) -> None:
        """Internal method to emit structured JSON logs."""
        if not self._enabled(level):
            return

        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "logger": self.name,
            "message": message,
            "correlationId": self.correlation_id,
            **(extra or {}),
            **kwargs,
        }

        if exc_info:
            log_entry["exception"] = traceback.format_exc()

        # Remove None values
        log_entry = {k: v for k, v in log_entry.items() if v is not None}

        print(json.dumps(log_entry, default=str))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info level message."""
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning level message."""
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error level message."""
        self._log("ERROR", message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug level message."""
        self._log("DEBUG", message, **kwargs)


def get_logger(name: str) -> StructuredLogger:
    """Module-level logger factory used by every handler."""
    return StructuredLogger(name)


def get_correlation_id(event: Dict[str, Any]) -> str:
    """
    Extract or generate correlation ID from Lambda event.

    Checks for correlation ID in:
    1. event['requestContext']['requestId'] (AppSync / API Gateway)
    2. event['request']['headers']['x-correlation-id']
    3. Generates new UUID if not found
    """
    request_context = event.get("requestContext") or {}
    if "requestId" in request_context:
        return str(request_context["requestId"])

    headers = (event.get("request") or {}).get("headers") or {}
    if "x-correlation-id" in headers:
        return str(headers["x-correlation-id"])

    return str(uuid.uuid4())
