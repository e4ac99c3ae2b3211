"""Error handling - structured failures with context."""

from .errors import ErrorCategory, ErrorTemplate, MoodleError
from .factory import ErrorFactory, create_error, from_exception, get_error_factory
from .registry import (
    CONFIG_INVALID,
    INVALID_ARGUMENTS,
    NETWORK_ERROR,
    UNKNOWN_ERROR,
    UNKNOWN_TOOL,
    ErrorRegistry,
)

__all__ = [
    # Core error types
    "MoodleError",
    "ErrorCategory",
    "ErrorTemplate",
    # Registry and factory
    "ErrorRegistry",
    "ErrorFactory",
    # Error kinds
    "NETWORK_ERROR",
    "UNKNOWN_ERROR",
    "UNKNOWN_TOOL",
    "INVALID_ARGUMENTS",
    "CONFIG_INVALID",
    # Convenience functions
    "get_error_factory",
    "create_error",
    "from_exception",
]
