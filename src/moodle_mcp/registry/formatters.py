"""CLI formatters for the tool registry."""

import json

from .types import ToolDefinition


def format_tool_list(tools: list[ToolDefinition]) -> str:
    """Format tool list for CLI display.

    Args:
        tools: List of tools to format

    Returns:
        Formatted string for CLI output
    """
    if not tools:
        return "No tools found."

    lines = []
    lines.append(f"Found {len(tools)} tool(s):\n")

    for tool in tools:
        category = f"[{tool.category.value}]"
        lines.append(f"  {tool.name:36} {category:18} {tool.description}")

    return "\n".join(lines)


def format_tool_detail(tool: ToolDefinition) -> str:
    """Format tool detail for CLI display.

    Args:
        tool: Tool to format

    Returns:
        Formatted string for CLI output
    """
    lines = []

    lines.append(f"Tool: {tool.name}")
    lines.append("=" * 60)

    lines.append(f"Description: {tool.description}")
    lines.append(f"Category:    {tool.category.value}")
    if tool.function_selector:
        lines.append(f"Function:    {tool.wire_function} (chosen from arguments)")
    else:
        lines.append(f"Function:    {tool.wire_function}")

    lines.append("\nField Map:")
    for field_name, path in tool.field_map.items():
        target = "(not sent)" if path is None else (path or "(merged into root)")
        lines.append(f"  {field_name:24} -> {target}")

    if tool.constants:
        lines.append("\nConstants:")
        for path, value in tool.constants.items():
            lines.append(f"  {path:24} =  {value!r}")

    lines.append("\nInput Schema:")
    lines.append(json.dumps(tool.input_schema, indent=2))

    return "\n".join(lines)
