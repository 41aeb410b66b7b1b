"""Tests for logging utilities."""

import json
from typing import Any, Dict

import pytest

from src.utils.logging import StructuredLogger, get_correlation_id, get_logger


def _last_entry(capsys: Any) -> Dict[str, Any]:
    captured = capsys.readouterr()
    return json.loads(captured.out.strip().splitlines()[-1])


class TestStructuredLogger:
    """Tests for StructuredLogger class."""

    def test_logger_initialization(self) -> None:
        """Test logger initializes with correlation ID."""
        logger = StructuredLogger("test", "test-id-123")

        assert logger.correlation_id == "test-id-123"

    def test_logger_generates_correlation_id(self) -> None:
        """Test logger generates correlation ID if not provided."""
        logger = StructuredLogger("test")

        assert logger.correlation_id
        assert get_logger("other").correlation_id != logger.correlation_id

    def test_set_correlation_id(self, capsys: Any) -> None:
        logger = StructuredLogger("test", "first")

        logger.set_correlation_id("second")
        logger.info("Bound")

        assert _last_entry(capsys)["correlationId"] == "second"

    def test_info_logs_json(self, capsys: Any) -> None:
        """Test info logging outputs JSON."""
        logger = StructuredLogger("test", "test-id")

        logger.info("Fetching recruiter profile", link_id="abc")

        log_entry = _last_entry(capsys)
        assert log_entry["level"] == "INFO"
        assert log_entry["logger"] == "test"
        assert log_entry["message"] == "Fetching recruiter profile"
        assert log_entry["correlationId"] == "test-id"
        assert log_entry["link_id"] == "abc"
        assert "timestamp" in log_entry

    def test_warning_and_error_levels(self, capsys: Any) -> None:
        logger = StructuredLogger("test", "test-id")

        logger.warning("Warning message", code=123)
        assert _last_entry(capsys)["level"] == "WARNING"

        logger.error("Error message", error="details")
        entry = _last_entry(capsys)
        assert entry["level"] == "ERROR"
        assert entry["error"] == "details"

    def test_extra_fields_merged(self, capsys: Any) -> None:
        logger = StructuredLogger("test", "test-id")

        logger.info("With extra", extra={"modelId": "ollama"})

        assert _last_entry(capsys)["modelId"] == "ollama"

    def test_exc_info_adds_traceback(self, capsys: Any) -> None:
        logger = StructuredLogger("test", "test-id")

        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger.error("Failed", exc_info=True)

        assert "RuntimeError: boom" in _last_entry(capsys)["exception"]

    def test_debug_suppressed_at_info(self, capsys: Any, monkeypatch: pytest.MonkeyPatch) -> None:
        """Debug output is filtered unless LOG_LEVEL allows it."""
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        logger = StructuredLogger("test", "test-id")

        logger.debug("Hidden")

        assert capsys.readouterr().out == ""

    def test_debug_emitted_at_debug(self, capsys: Any, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        logger = StructuredLogger("test", "test-id")

        logger.debug("Debug message", data={"key": "value"})

        log_entry = _last_entry(capsys)
        assert log_entry["level"] == "DEBUG"
        assert log_entry["data"] == {"key": "value"}

    def test_none_values_filtered(self, capsys: Any) -> None:
        """Test that None values are filtered from logs."""
        logger = StructuredLogger("test", "test-id")

        logger.info("Test", value=None, other="present")

        log_entry = _last_entry(capsys)
        assert "value" not in log_entry
        assert log_entry["other"] == "present"


class TestGetCorrelationId:
    """Tests for get_correlation_id function."""

    def test_extract_from_appsync_request_context(self) -> None:
        event = {"requestContext": {"requestId": "appsync-request-123"}}

        assert get_correlation_id(event) == "appsync-request-123"

    def test_extract_from_custom_header(self) -> None:
        event = {"request": {"headers": {"x-correlation-id": "custom-id-456"}}}

        assert get_correlation_id(event) == "custom-id-456"

    def test_generate_new_id_if_not_found(self) -> None:
        assert get_correlation_id({})

    def test_appsync_context_takes_precedence(self) -> None:
        """Test that AppSync request context takes precedence."""
        event = {
            "requestContext": {"requestId": "appsync-123"},
            "request": {"headers": {"x-correlation-id": "header-456"}},
        }

        assert get_correlation_id(event) == "appsync-123"
