"""MCP Frontend - expose the tool catalog as an MCP server."""

from .server import MCPFrontend, render_result
from .stdio import read_message, write_message

__all__ = [
    "MCPFrontend",
    "render_result",
    "read_message",
    "write_message",
]
