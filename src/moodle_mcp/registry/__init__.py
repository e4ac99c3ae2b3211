"""Tool Registry - declarative catalog of exposed tools."""

from .formatters import format_tool_detail, format_tool_list
from .mapping import assign_wire_path, default_wire_name, nest_fields
from .registry import ToolRegistry
from .types import ToolArgs, ToolDefinition

__all__ = [
    # Registry
    "ToolRegistry",
    # Types
    "ToolArgs",
    "ToolDefinition",
    # Wire mapping
    "assign_wire_path",
    "default_wire_name",
    "nest_fields",
    # Formatters
    "format_tool_list",
    "format_tool_detail",
]
