"""Shared types for moodle-mcp.

Import from here rather than submodules:
    from moodle_mcp.types import LogLevel, ToolCategory
"""

from .enums import LogFormat, LogLevel, ToolCategory

__all__ = [
    "LogLevel",
    "LogFormat",
    "ToolCategory",
]
