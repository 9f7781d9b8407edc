# This file makes the 'utils' directory a Python package.

from .errors import (
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
from .logger import get_logger

__all__ = [
    # Errors
    'AppError',
    'FileIOError',
    'ConfigurationError',
    'MalformedDocumentError',
    'FieldParseError',
    'ErrorCategory',
    'ProfileStatus',
    'log_and_continue',
    'format_user_error',
    # Logging
    'get_logger',
]
