"""Invoker types."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from moodle_mcp.errors import MoodleError


@dataclass(frozen=True)
class RemoteFunctionCall:
    """One remote function call: wire function name plus semantic parameters."""

    function_name: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CallResult:
    """Outcome of a remote call: success with data, or failure with an error.

    ``data`` may legitimately be ``None`` on success (functions that return
    nothing), so the variant is decided by ``error``.
    """

    data: Any = None
    error: "MoodleError | None" = None
    function_name: str | None = None
    duration_ms: int = 0

    def __post_init__(self) -> None:
        if self.error is not None and self.data is not None:
            msg = "CallResult cannot carry both data and an error"
            raise ValueError(msg)

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(
        cls, data: Any, function_name: str | None = None, duration_ms: int = 0
    ) -> "CallResult":
        return cls(data=data, function_name=function_name, duration_ms=duration_ms)

    @classmethod
    def fail(
        cls, error: "MoodleError", function_name: str | None = None, duration_ms: int = 0
    ) -> "CallResult":
        return cls(error=error, function_name=function_name, duration_ms=duration_ms)

    def to_dict(self) -> dict[str, Any]:
        """Serialize as ``{"data": ...}`` or the fault envelope."""
        if self.error is not None:
            return self.error.to_dict()
        return {"data": self.data}
