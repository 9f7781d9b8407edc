"""Tests for centralized error handling utilities."""

import pytest

from procprofile.utils.errors import (
    AppError,
    FileIOError,
    ConfigurationError,
    MalformedDocumentError,
    FieldParseError,
    ErrorCategory,
    ProfileStatus,
    log_and_continue,
    format_user_error,
)


class TestAppError:
    """Tests for AppError base class."""

    def test_basic_error(self):
        """Basic error creation should work."""
        error = AppError("Test error")
        assert str(error) == "Test error"
        assert error.category == ErrorCategory.RECOVERABLE
        assert error.user_message == "Test error"

    def test_error_with_category(self):
        """Error with specific category should work."""
        error = AppError("Test error", category=ErrorCategory.FATAL)
        assert error.category == ErrorCategory.FATAL

    def test_error_with_original(self):
        """Error wrapping original exception should work."""
        original = ValueError("Original error")
        error = AppError("Wrapped error", original_error=original)
        assert error.original_error is original
        assert "ValueError" in str(error)

    def test_error_with_user_message(self):
        """Error with custom user message should work."""
        error = AppError(
            "Technical error details",
            user_message="The profile could not be saved."
        )
        assert error.user_message == "The profile could not be saved."


class TestSpecificErrors:
    """Tests for specific error types."""

    def test_file_io_error(self):
        """FileIOError should include file path."""
        error = FileIOError("Cannot write", file_path="/path/to/img.pp3")
        assert error.category == ErrorCategory.FILE_IO
        assert error.file_path == "/path/to/img.pp3"

    def test_configuration_error(self):
        """ConfigurationError should include setting name."""
        error = ConfigurationError("Field has no section", setting_name="amount")
        assert error.category == ErrorCategory.CONFIGURATION
        assert error.setting_name == "amount"

    def test_malformed_document_error(self):
        """MalformedDocumentError should include location."""
        error = MalformedDocumentError("No sections", file_path="/p.pp3", line=3)
        assert error.category == ErrorCategory.PARSE
        assert error.file_path == "/p.pp3"
        assert error.line == 3

    def test_field_parse_error(self):
        """FieldParseError should include section, key and raw value."""
        error = FieldParseError("bad value", section="Exposure", key="Compensation", value="x")
        assert error.category == ErrorCategory.PARSE
        assert (error.section, error.key, error.value) == ("Exposure", "Compensation", "x")

    def test_all_are_app_errors(self):
        """Specific errors can be caught as AppError."""
        with pytest.raises(AppError):
            raise FieldParseError("bad")


class TestProfileStatus:
    """Tests for the persistence status codes."""

    @pytest.mark.parametrize("status", [
        ProfileStatus.NOT_FOUND,
        ProfileStatus.UNREADABLE,
        ProfileStatus.MALFORMED,
        ProfileStatus.WRITE_FAILURE,
    ])
    def test_fatal(self, status):
        """Failures that produce no usable result are fatal."""
        assert status.is_fatal

    @pytest.mark.parametrize("status", [
        ProfileStatus.OK,
        ProfileStatus.PARTIAL_DEFAULTS,
        ProfileStatus.NEWER_SCHEMA,
    ])
    def test_not_fatal(self, status):
        """Loads with a usable result are not fatal."""
        assert not status.is_fatal


class TestFormatUserError:
    """Tests for format_user_error function."""

    def test_format_app_error(self):
        """Should use user_message from AppError."""
        error = AppError("Technical details", user_message="User friendly message")
        result = format_user_error(error)
        assert result == "User friendly message"

    def test_format_file_not_found(self):
        """Should format file not found errors nicely."""
        error = FileNotFoundError("No such file or directory: '/path/to/file'")
        result = format_user_error(error, context="loading profile")
        assert "File not found" in result
        assert "loading profile" in result

    def test_format_permission_denied(self):
        """Should format permission errors nicely."""
        error = PermissionError("Permission denied: '/path/to/file'")
        result = format_user_error(error)
        assert "Permission denied" in result

    def test_format_generic_error(self):
        """Should format generic errors with context."""
        error = RuntimeError("Something went wrong")
        result = format_user_error(error, context="saving")
        assert "saving" in result
        assert "Something went wrong" in result

    def test_format_string(self):
        """Plain strings are accepted."""
        assert format_user_error("oops") == "An error occurred: oops"


class TestLogAndContinue:
    """Tests for log_and_continue function."""

    def test_does_not_raise(self):
        """Function should not raise exceptions."""
        log_and_continue("Test message", ErrorCategory.RECOVERABLE)

    def test_accepts_all_categories(self):
        """Should accept all error categories."""
        for category in ErrorCategory:
            log_and_continue(f"Test {category.value}", category)

    def test_unknown_level_falls_back(self):
        """An unknown level name logs as a warning."""
        log_and_continue("Test message", level="loud")


class TestErrorCategoryEnum:
    """Tests for ErrorCategory enum."""

    def test_all_categories_defined(self):
        """All expected categories should be defined."""
        assert ErrorCategory.RECOVERABLE is not None
        assert ErrorCategory.FILE_IO is not None
        assert ErrorCategory.PARSE is not None
        assert ErrorCategory.CONFIGURATION is not None
        assert ErrorCategory.FATAL is not None

    def test_category_values(self):
        """Categories should have string values."""
        for category in ErrorCategory:
            assert isinstance(category.value, str)
