# Centralized error handling utilities
"""
Provides consistent error handling patterns across the package.

This module defines:
- Custom exception classes raised inside the profile codec
- The status codes returned by the public save/load operations
- Utility functions for error logging and user messaging

Exceptions never cross the persistence boundary: ``save_profile`` and
``load_profile`` catch them and report a ``ProfileStatus`` instead.
"""

from typing import Any, Optional, Union
from enum import Enum

from .logger import get_logger

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Categories of errors for consistent handling."""
    RECOVERABLE = "recoverable"      # Can continue with fallback
    FILE_IO = "file_io"              # File system errors
    PARSE = "parse"                  # Profile text could not be decoded
    CONFIGURATION = "configuration"  # Settings/config errors
    FATAL = "fatal"                  # Unrecoverable errors


class ProfileStatus(Enum):
    """Outcome of a profile save or load."""
    OK = "ok"
    PARTIAL_DEFAULTS = "partial_defaults"  # some fields fell back to their defaults
    NEWER_SCHEMA = "newer_schema"          # file written by a newer schema, unknown keys dropped
    NOT_FOUND = "not_found"
    UNREADABLE = "unreadable"
    MALFORMED = "malformed"
    WRITE_FAILURE = "write_failure"

    @property
    def is_fatal(self) -> bool:
        return self in (
            ProfileStatus.NOT_FOUND,
            ProfileStatus.UNREADABLE,
            ProfileStatus.MALFORMED,
            ProfileStatus.WRITE_FAILURE,
        )


class AppError(Exception):
    """Base exception for application-specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.RECOVERABLE,
        original_error: Optional[Exception] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.category = category
        self.original_error = original_error
        self.user_message = user_message or message

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.args[0]} (caused by: {type(self.original_error).__name__})"
        return self.args[0]


class FileIOError(AppError):
    """File I/O related errors."""

    def __init__(self, message: str, file_path: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.FILE_IO, **kwargs)
        self.file_path = file_path


class ConfigurationError(AppError):
    """Configuration/settings errors."""

    def __init__(self, message: str, setting_name: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)
        self.setting_name = setting_name


class MalformedDocumentError(AppError):
    """The profile text has no recognisable section structure."""

    def __init__(self, message: str, file_path: Optional[str] = None, line: Optional[int] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.PARSE, **kwargs)
        self.file_path = file_path
        self.line = line


class FieldParseError(AppError):
    """A single key's value does not match the shape its field expects."""

    def __init__(
        self,
        message: str,
        section: Optional[str] = None,
        key: Optional[str] = None,
        value: Any = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.PARSE, **kwargs)
        self.section = section
        self.key = key
        self.value = value


def log_and_continue(
    message: str,
    category: ErrorCategory = ErrorCategory.RECOVERABLE,
    level: str = "warning",
) -> None:
    """
    Log an error and continue execution.

    Use this for non-critical errors that shouldn't stop processing.

    Args:
        message: Error message to log.
        category: Error category for context.
        level: Log level.
    """
    log_func = getattr(logger, level, logger.warning)
    log_func("[%s] %s", category.value, message)


def format_user_error(error: Union[Exception, str], context: Optional[str] = None) -> str:
    """
    Format an error message for user display.

    Args:
        error: The error or error message.
        context: Optional context about what operation failed.

    Returns:
        User-friendly error message.
    """
    if isinstance(error, AppError):
        return error.user_message

    error_str = str(error)

    # Clean up common technical error messages
    if "No such file or directory" in error_str:
        return f"File not found{f' while {context}' if context else ''}"
    if "Permission denied" in error_str:
        return f"Permission denied{f' while {context}' if context else ''}"

    # Generic fallback
    if context:
        return f"Error {context}: {error_str}"
    return f"An error occurred: {error_str}"
