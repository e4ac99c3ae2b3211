"""MCP Frontend - exposes the tool catalog as an MCP server over stdio."""

import asyncio
import json
from typing import TYPE_CHECKING, Any, TextIO

from moodle_mcp.config import ServerConfig
from moodle_mcp.invoker import CallResult

from .stdio import INVALID_REQUEST, PARSE_ERROR, read_message, write_message

if TYPE_CHECKING:
    from moodle_mcp.dispatch import ToolDispatcher
    from moodle_mcp.logging import MoodleLogger

PROTOCOL_VERSION = "2024-11-05"

METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def render_result(result: CallResult) -> dict[str, Any]:
    """Render a CallResult as an MCP ``tools/call`` result.

    Args:
        result: Outcome of a tool invocation

    Returns:
        MCP content envelope with ``isError`` set
    """
    if result.error is not None:
        return {
            "content": [
                {
                    "type": "text",
                    "text": f"Error: {result.error.message or result.error.exception}",
                }
            ],
            "isError": True,
        }

    return {
        "content": [
            {
                "type": "text",
                "text": json.dumps(result.data, indent=2, ensure_ascii=False),
            }
        ],
        "isError": False,
    }


class MCPFrontend:
    """
    MCP server over line-delimited JSON-RPC on stdio.

    Handles initialize, tools/list, tools/call and ping. Each request runs
    in its own task so a slow remote call does not hold up the others.
    """

    def __init__(
        self,
        dispatcher: "ToolDispatcher",
        config: ServerConfig | None = None,
        logger: "MoodleLogger | None" = None,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
    ):
        """Initialize MCP frontend.

        Args:
            dispatcher: Tool dispatcher for listing and invoking tools
            config: Server identity
            logger: Logger instance
            input_stream: Request stream (defaults to stdin)
            output_stream: Response stream (defaults to stdout)
        """
        self._dispatcher = dispatcher
        self._config = config or ServerConfig()
        self._logger = logger
        self._input = input_stream
        self._output = output_stream
        self._running = False
        self._write_lock = asyncio.Lock()
        self._pending: set[asyncio.Task[None]] = set()

    async def start(self) -> None:
        """Serve requests until EOF or a failed write; waits for in-flight requests."""
        self._running = True
        if self._logger:
            self._logger.info(
                "server",
                f"{self._config.name} {self._config.version} running on stdio",
                tools=len(self._dispatcher.list_tools()),
            )

        while self._running:
            message = await read_message(self._input)
            if message is None:
                break

            if "method" not in message:
                # Malformed input comes back as a ready-made error response;
                # anything else without a method is a stray response and is dropped
                if _is_read_error(message):
                    await self._write(message)
                continue

            task = asyncio.create_task(self._process(message))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        if self._pending:
            await asyncio.gather(*self._pending)

        if self._logger:
            self._logger.info("server", "Input closed, server stopped")

    async def _process(self, message: dict[str, Any]) -> None:
        response = await self._handle_message(message)
        if response is not None:
            await self._write(response)

    async def _write(self, message: dict[str, Any]) -> None:
        async with self._write_lock:
            try:
                await write_message(message, self._output)
            except OSError as e:
                # Host went away; nothing left to answer
                self._running = False
                if self._logger:
                    self._logger.error("server", f"Failed to write response: {e}")

    async def _handle_message(self, message: dict[str, Any]) -> dict[str, Any] | None:
        """Route message to appropriate handler.

        Args:
            message: JSON-RPC message

        Returns:
            JSON-RPC response or None (None for notifications)
        """
        method = message.get("method")
        msg_id = message.get("id")
        params = message.get("params") or {}

        # JSON-RPC 2.0: Notifications (no id) should not receive a response
        is_notification = "id" not in message

        if not isinstance(params, dict):
            if is_notification:
                return None
            return self._error_response(msg_id, INVALID_PARAMS, "Params must be an object")

        try:
            if method == "initialize":
                result = await self._handle_initialize(params)
            elif method == "tools/list":
                result = await self._handle_tools_list(params)
            elif method == "tools/call":
                if not params.get("name"):
                    if is_notification:
                        return None
                    return self._error_response(msg_id, INVALID_PARAMS, "Tool name is required")
                result = await self._handle_tools_call(params)
            elif method == "ping":
                result = {}
            elif method and method.startswith("notifications/"):
                return None
            else:
                if is_notification:
                    return None
                return self._error_response(msg_id, METHOD_NOT_FOUND, f"Method not found: {method}")

            if is_notification:
                return None
            return self._success_response(msg_id, result)

        except Exception as e:
            if self._logger:
                self._logger.error("server", f"Request '{method}' failed: {e}")
            if is_notification:
                return None
            return self._error_response(msg_id, INTERNAL_ERROR, str(e))

    async def _handle_initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle initialize request."""
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "serverInfo": {
                "name": self._config.name,
                "version": self._config.version,
            },
            "capabilities": {
                "tools": {},
            },
        }

    async def _handle_tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle tools/list request."""
        return {"tools": [tool.to_mcp_tool() for tool in self._dispatcher.list_tools()]}

    async def _handle_tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle tools/call request.

        Args:
            params: Call parameters (name, arguments)

        Returns:
            MCP content envelope
        """
        result = await self._dispatcher.invoke(params["name"], params.get("arguments"))
        return render_result(result)

    def _success_response(self, msg_id: Any, result: Any) -> dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "id": msg_id,
            "result": result,
        }

    def _error_response(
        self,
        msg_id: Any,
        code: int,
        message: str,
        data: Any = None,
    ) -> dict[str, Any]:
        error: dict[str, Any] = {"code": code, "message": message}
        if data:
            error["data"] = data
        return {
            "jsonrpc": "2.0",
            "id": msg_id,
            "error": error,
        }


def _is_read_error(message: dict[str, Any]) -> bool:
    error = message.get("error")
    return isinstance(error, dict) and error.get("code") in (PARSE_ERROR, INVALID_REQUEST)
