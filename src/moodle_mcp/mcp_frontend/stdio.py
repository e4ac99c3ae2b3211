"""stdio I/O helpers for the MCP protocol (one JSON object per line)."""

import asyncio
import json
import sys
from typing import Any, TextIO

PARSE_ERROR = -32700
INVALID_REQUEST = -32600


async def read_message(stream: TextIO | None = None) -> dict[str, Any] | None:
    """Read one JSON-RPC message from stdin.

    Blank lines are skipped.

    Args:
        stream: Input stream (defaults to sys.stdin)

    Returns:
        Parsed JSON message, an error response for malformed JSON or a
        non-object message, or None at EOF
    """
    loop = asyncio.get_event_loop()
    source = stream or sys.stdin

    while True:
        line = await loop.run_in_executor(None, source.readline)
        if not line:
            return None
        if line.strip():
            break

    try:
        message = json.loads(line)
    except json.JSONDecodeError:
        return _read_error(PARSE_ERROR, "Parse error: Invalid JSON")

    if not isinstance(message, dict):
        return _read_error(INVALID_REQUEST, "Invalid Request: message must be a JSON object")
    return message


async def write_message(message: dict[str, Any], stream: TextIO | None = None) -> None:
    """Write one JSON-RPC message to stdout.

    Args:
        message: JSON-RPC message to write
        stream: Output stream (defaults to sys.stdout)
    """
    loop = asyncio.get_event_loop()
    target = stream or sys.stdout

    line = json.dumps(message) + "\n"
    await loop.run_in_executor(None, target.write, line)
    await loop.run_in_executor(None, target.flush)


def _read_error(code: int, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": None,
        "error": {"code": code, "message": message},
    }
