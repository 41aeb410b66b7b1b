"""Tests for error handling utilities."""

from src.utils.errors import AppError, ErrorCode


class TestAppError:
    """Tests for AppError class."""

    def test_app_error_with_message(self) -> None:
        """Test creating AppError with message."""
        error = AppError(ErrorCode.INVALID_INPUT, "Invalid linkId: a;b")

        assert error.error_code == ErrorCode.INVALID_INPUT
        assert error.message == "Invalid linkId: a;b"
        assert error.details == {}
        assert str(error) == "Invalid linkId: a;b"

    def test_app_error_with_details(self) -> None:
        """Test creating AppError with details."""
        details = {"linkId": "link-123"}
        error = AppError(ErrorCode.CONFIGURATION_ERROR, "Recruiter table missing", details)

        assert error.details == details

    def test_app_error_to_dict(self) -> None:
        """Test converting AppError to dict."""
        error = AppError(ErrorCode.UNSUPPORTED_MODEL, "Unsupported model", {"modelId": "x"})

        result = error.to_dict()

        assert result == {"errorCode": "UNSUPPORTED_MODEL", "message": "Unsupported model", "modelId": "x"}


class TestErrorCode:
    """Tests for ErrorCode constants."""

    def test_error_codes_defined(self) -> None:
        """Test that all expected error codes are defined."""
        assert ErrorCode.INVALID_INPUT == "INVALID_INPUT"
        assert ErrorCode.CONFIGURATION_ERROR == "CONFIGURATION_ERROR"
        assert ErrorCode.UNSUPPORTED_MODEL == "UNSUPPORTED_MODEL"
        assert ErrorCode.MODEL_ERROR == "MODEL_ERROR"
