"""Component logger for the adapter.

Everything goes to stderr by default: stdout is the protocol channel.
"""

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, TextIO

from moodle_mcp.logging.colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    RED,
    RESET,
    YELLOW,
)
from moodle_mcp.types import LogFormat, LogLevel

if TYPE_CHECKING:
    from moodle_mcp.errors import MoodleError


@dataclass
class LogConfig:
    """Logger configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_params: bool = True
    truncate_at: int = 200
    components: dict[str, bool] = field(default_factory=dict)
    output: TextIO = field(default=sys.stderr)

    def __post_init__(self) -> None:
        """Initialize default components if not provided."""
        if not self.components:
            self.components = {
                "server": True,
                "dispatch": True,
                "remote": True,
                "config": True,
            }


class MoodleLogger:
    """Main logger facade. Creates component-specific loggers."""

    def __init__(self, config: LogConfig | None = None):
        """Initialize logger with configuration.

        Args:
            config: Logger configuration (defaults to LogConfig())
        """
        self.config = config or LogConfig()
        self._level_order = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }

    def tool(self, tool_name: str) -> "ToolLogger":
        """Get a logger scoped to one tool invocation.

        Args:
            tool_name: Tool being invoked

        Returns:
            ToolLogger instance
        """
        return ToolLogger(self, tool_name)

    def remote(self) -> "RemoteCallLogger":
        """Get a logger for outbound web-service calls."""
        return RemoteCallLogger(self)

    def info(self, component: str, message: str, **context: Any) -> None:
        """Log an INFO line for a component."""
        self._log(LogLevel.INFO, component, message, context or None)

    def warn(self, component: str, message: str, **context: Any) -> None:
        """Log a WARN line for a component."""
        self._log(LogLevel.WARN, component, message, context or None)

    def error(self, component: str, message: str, **context: Any) -> None:
        """Log an ERROR line for a component."""
        self._log(LogLevel.ERROR, component, message, context or None)

    def debug(self, component: str, message: str, **context: Any) -> None:
        """Log a DEBUG line for a component."""
        self._log(LogLevel.DEBUG, component, message, context or None)

    def configure(self, config: LogConfig) -> None:
        """Replace configuration.

        Args:
            config: New logger configuration
        """
        self.config = config

    def _should_log(self, level: LogLevel) -> bool:
        """Check if a log level should be logged.

        Args:
            level: Log level to check

        Returns:
            True if should log, False otherwise
        """
        return self._level_order.get(level, 0) >= self._level_order.get(self.config.level, 1)

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level
            component: Component name (server, dispatch, remote, config)
            message: Log message
            context: Additional context data
        """
        if not self._should_log(level):
            return

        if not self.config.components.get(component, True):
            return

        if self.config.format == LogFormat.JSON:
            self._log_json(level, component, message, context)
        else:
            self._log_colored(level, component, message, context)

    def _log_json(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Log in JSON format."""
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level.value,
            "component": component,
            "message": message,
        }
        if context:
            log_entry.update(context)

        print(json.dumps(log_entry, default=str), file=self.config.output)

    def _log_colored(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Log in colored format."""
        level_colors = {
            LogLevel.DEBUG: LIGHT_BLUE,
            LogLevel.INFO: CYAN,
            LogLevel.WARN: YELLOW,
            LogLevel.ERROR: RED,
        }

        color = level_colors.get(level, RESET)
        component_color = {
            "server": MAGENTA,
            "dispatch": CYAN,
            "remote": GREEN,
            "config": YELLOW,
        }.get(component, RESET)

        # Format: [COMPONENT] message
        output = f"{component_color}[{component.upper()}]{RESET} {color}{message}{RESET}"

        if context and self.config.show_params:
            context_str = str(context)
            if len(context_str) > self.config.truncate_at:
                context_str = context_str[: self.config.truncate_at] + "..."
            output += f" {LIGHT_BLUE}{context_str}{RESET}"

        print(output, file=self.config.output)


class ToolLogger:
    """Logger for tool invocation events."""

    def __init__(self, parent: MoodleLogger, tool_name: str):
        """Initialize tool logger.

        Args:
            parent: Parent MoodleLogger instance
            tool_name: Tool being invoked
        """
        self.parent = parent
        self.tool_name = tool_name

    def started(self, arguments: dict[str, Any] | None = None) -> None:
        """Log tool invocation start."""
        context: dict[str, Any] = {"event": "tool_started", "tool_name": self.tool_name}
        if arguments:
            context["arguments"] = sorted(arguments)

        self.parent._log(LogLevel.INFO, "dispatch", f"Invoking tool '{self.tool_name}'", context)

    def completed(self, duration_ms: int) -> None:
        """Log successful completion."""
        context = {
            "event": "tool_completed",
            "tool_name": self.tool_name,
            "duration_ms": duration_ms,
        }

        duration_s = duration_ms / 1000
        message = f"Tool '{self.tool_name}' completed ({duration_s:.2f}s) ✓"

        self.parent._log(LogLevel.INFO, "dispatch", message, context)

    def failed(self, error: "MoodleError", duration_ms: int) -> None:
        """Log a failed invocation."""
        context = {
            "event": "tool_failed",
            "tool_name": self.tool_name,
            "duration_ms": duration_ms,
            "exception": error.exception,
            "errorcode": error.error_code,
        }

        duration_s = duration_ms / 1000
        message = f"Tool '{self.tool_name}' failed ({duration_s:.2f}s): {error.message}"

        self.parent._log(LogLevel.ERROR, "dispatch", message, context)

    def rejected(self, error: "MoodleError") -> None:
        """Log an invocation refused before any remote call."""
        context = {
            "event": "tool_rejected",
            "tool_name": self.tool_name,
            "exception": error.exception,
        }
        if error.field:
            context["field"] = error.field

        message = f"Tool '{self.tool_name}' rejected: {error.message}"

        self.parent._log(LogLevel.WARN, "dispatch", message, context)


class RemoteCallLogger:
    """Logger for outbound web-service calls. Never logs the token."""

    def __init__(self, parent: MoodleLogger):
        """Initialize remote call logger.

        Args:
            parent: Parent MoodleLogger instance
        """
        self.parent = parent

    def calling(self, function_name: str, field_count: int) -> None:
        """Log a call about to be sent."""
        context = {
            "event": "remote_calling",
            "function_name": function_name,
            "field_count": field_count,
        }

        self.parent._log(LogLevel.DEBUG, "remote", f"Calling '{function_name}'", context)

    def result(self, function_name: str, duration_ms: int) -> None:
        """Log a successful call."""
        context = {
            "event": "remote_result",
            "function_name": function_name,
            "duration_ms": duration_ms,
        }

        duration_s = duration_ms / 1000
        message = f"'{function_name}' answered ({duration_s:.2f}s)"

        self.parent._log(LogLevel.DEBUG, "remote", message, context)

    def fault(self, function_name: str, error: "MoodleError", duration_ms: int) -> None:
        """Log a transport failure or a remote exception payload."""
        context = {
            "event": "remote_fault",
            "function_name": function_name,
            "duration_ms": duration_ms,
            "exception": error.exception,
            "errorcode": error.error_code,
        }

        duration_s = duration_ms / 1000
        message = f"'{function_name}' failed ({duration_s:.2f}s): {error.message}"

        self.parent._log(LogLevel.WARN, "remote", message, context)
