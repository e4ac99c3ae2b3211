"""Tool dispatch: look up, validate, translate, invoke."""

import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from moodle_mcp.errors import (
    INVALID_ARGUMENTS,
    UNKNOWN_TOOL,
    ErrorFactory,
    MoodleError,
)
from moodle_mcp.invoker import CallResult

if TYPE_CHECKING:
    from moodle_mcp.invoker import FunctionInvoker
    from moodle_mcp.logging import MoodleLogger, ToolLogger
    from moodle_mcp.registry import ToolDefinition, ToolRegistry


class ToolDispatcher:
    """Generic dispatch over the declarative tool registry.

    ``invoke`` never raises: unknown tools, bad arguments, transport
    failures, remote faults and unexpected errors all come back as a
    failed CallResult.
    """

    def __init__(
        self,
        tool_registry: "ToolRegistry",
        invoker: "FunctionInvoker",
        logger: "MoodleLogger | None" = None,
        error_factory: ErrorFactory | None = None,
    ):
        """Initialize dispatcher.

        Args:
            tool_registry: Registry of exposed tools
            invoker: Invoker used for every remote call
            logger: Optional logger
            error_factory: Optional error factory
        """
        self._registry = tool_registry
        self._invoker = invoker
        self._logger = logger
        self._errors = error_factory or ErrorFactory()

    def list_tools(self) -> list["ToolDefinition"]:
        """All registered tools."""
        return self._registry.list_tools()

    async def invoke(self, name: str, arguments: Mapping[str, Any] | None = None) -> CallResult:
        """Invoke a tool by name.

        Args:
            name: Tool name
            arguments: Tool arguments (camelCase keys)

        Returns:
            CallResult from the remote call, or a dispatch failure
        """
        start = time.time()
        tool_log = self._logger.tool(name) if self._logger else None

        try:
            tool = self._registry.get(name)
            if tool is None:
                return self._reject(self._errors.create(UNKNOWN_TOOL, tool_name=name), tool_log)

            if arguments is None:
                arguments = {}
            if not isinstance(arguments, Mapping):
                error = self._errors.create(
                    INVALID_ARGUMENTS,
                    tool_name=name,
                    field="arguments",
                    reason="Arguments must be an object",
                )
                return self._reject(error, tool_log)

            try:
                call = tool.build_call(arguments)
            except ValidationError as e:
                return self._reject(self._invalid_arguments(name, e), tool_log)

            if tool_log:
                tool_log.started(dict(arguments))
            result = await self._invoker.call(call.function_name, call.parameters)

        except Exception as e:
            result = CallResult.fail(
                self._errors.from_exception(e, tool_name=name),
                duration_ms=_elapsed_ms(start),
            )

        if result.error is not None:
            error = result.error.with_context(tool_name=name)
            result = CallResult.fail(error, result.function_name, result.duration_ms)
            if tool_log:
                tool_log.failed(error, _elapsed_ms(start))
        elif tool_log:
            tool_log.completed(_elapsed_ms(start))
        return result

    def _invalid_arguments(self, tool_name: str, error: ValidationError) -> MoodleError:
        """Report the first violating field, named as the caller sent it."""
        first = error.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "arguments"
        return self._errors.create(
            INVALID_ARGUMENTS,
            tool_name=tool_name,
            field=field,
            reason=first["msg"],
            detail=f"{error.error_count()} validation error(s)",
        )

    def _reject(self, error: MoodleError, tool_log: "ToolLogger | None") -> CallResult:
        if tool_log:
            tool_log.rejected(error)
        return CallResult.fail(error)


def _elapsed_ms(start: float) -> int:
    return int((time.time() - start) * 1000)
