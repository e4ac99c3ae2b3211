"""Colored / JSON component logging (stderr)."""

from .colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    RED,
    RESET,
    YELLOW,
)
from .logger import (
    LogConfig,
    MoodleLogger,
    RemoteCallLogger,
    ToolLogger,
)

__all__ = [
    # Logger classes
    "MoodleLogger",
    "ToolLogger",
    "RemoteCallLogger",
    "LogConfig",
    # Colors
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
