"""Tool Registry - the static catalog consulted at dispatch time."""

from collections.abc import Iterable, Iterator
from typing import Any

from moodle_mcp.types import ToolCategory

from .types import ToolDefinition


class ToolRegistry:
    """Read-only lookup of tool definitions by name.

    Built once at startup from the catalog; nothing is added or removed
    afterwards.
    """

    def __init__(self, tools: Iterable[ToolDefinition] = ()):
        """Initialize tool registry.

        Args:
            tools: Tool definitions to register

        Raises:
            ValueError: If two tools share a name
        """
        self._tools: dict[str, ToolDefinition] = {}
        for tool in tools:
            if tool.name in self._tools:
                msg = f"Duplicate tool name: {tool.name}"
                raise ValueError(msg)
            self._tools[tool.name] = tool

    def get(self, name: str) -> ToolDefinition | None:
        """Get tool by name.

        Args:
            name: Tool name

        Returns:
            ToolDefinition if registered, None otherwise
        """
        return self._tools.get(name)

    def list_tools(self, category: ToolCategory | None = None) -> list[ToolDefinition]:
        """List tools in registration order.

        Args:
            category: Optional filter by feature area

        Returns:
            Tool definitions
        """
        tools = list(self._tools.values())
        if category is not None:
            tools = [tool for tool in tools if tool.category == category]
        return tools

    def get_for_mcp_exposure(self) -> list[dict[str, Any]]:
        """All tools in MCP ``tools/list`` format."""
        return [tool.to_mcp_tool() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
