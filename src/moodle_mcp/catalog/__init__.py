"""The exposed tool catalog, grouped by feature area.

Every tool is a row of data (name, schema, remote function, field map);
dispatch logic lives in ``moodle_mcp.dispatch``.
"""

from moodle_mcp.registry import ToolDefinition, ToolRegistry

from . import administration, analytics, basic, extended


def all_tools() -> list[ToolDefinition]:
    """Every catalog tool, basic tools first."""
    return [*basic.TOOLS, *extended.TOOLS, *analytics.TOOLS, *administration.TOOLS]


def build_registry() -> ToolRegistry:
    """Registry holding the full catalog."""
    return ToolRegistry(all_tools())


__all__ = ["all_tools", "build_registry"]
