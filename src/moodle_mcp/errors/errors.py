"""Error types shared by every call path."""

import dataclasses
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Where an error originated."""

    TRANSPORT = "TRANSPORT"
    REMOTE = "REMOTE"
    DISPATCH = "DISPATCH"
    CONFIG = "CONFIG"
    SYSTEM = "SYSTEM"


@dataclass
class MoodleError(Exception):
    """Structured failure. Used as the error side of a CallResult.

    ``exception`` is the failure kind: one of the local kinds
    (``network_error``, ``unknown_error``, ``unknown_tool``,
    ``invalid_arguments``, ``config_invalid``) or the remote exception
    class name copied verbatim from a web-service fault payload.
    """

    # Identity
    exception: str  # e.g., "invalid_parameter_exception"
    error_code: str | None
    category: ErrorCategory

    # Messages
    message: str
    debug_info: str | None = None  # Remote debuginfo, passed through untouched
    detail: str | None = None

    # Context
    tool_name: str | None = None
    function_name: str | None = None
    field: str | None = None  # Offending argument for invalid_arguments

    # Metadata
    timestamp: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the remote API's fault envelope.

        Returns:
            Dictionary with exception, errorcode, message and debuginfo
        """
        data: dict[str, Any] = {
            "exception": self.exception,
            "errorcode": self.error_code,
            "message": self.message,
        }
        if self.debug_info is not None:
            data["debuginfo"] = self.debug_info
        if self.field is not None:
            data["field"] = self.field
        return data

    def with_context(
        self,
        tool_name: str | None = None,
        function_name: str | None = None,
    ) -> "MoodleError":
        """Return copy with additional context.

        Args:
            tool_name: Optional tool name
            function_name: Optional remote function name

        Returns:
            New MoodleError instance with updated context
        """
        return MoodleError(
            exception=self.exception,
            error_code=self.error_code,
            category=self.category,
            message=self.message,
            debug_info=self.debug_info,
            detail=self.detail,
            tool_name=tool_name or self.tool_name,
            function_name=function_name or self.function_name,
            field=self.field,
            timestamp=self.timestamp,
        )


@dataclass
class ErrorTemplate:
    """Template for creating local errors."""

    exception: str
    category: ErrorCategory
    message_template: str  # "Unknown tool: {tool_name}"
    detail_template: str | None = None
