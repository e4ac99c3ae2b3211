"""Shared enumerations for moodle-mcp."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class ToolCategory(str, Enum):
    """Feature area a tool belongs to."""

    BASIC = "basic"
    EXTENDED = "extended"
    ANALYTICS = "analytics"
    ADMINISTRATION = "administration"
