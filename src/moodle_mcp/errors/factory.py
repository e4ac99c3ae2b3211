"""Error factory for turning any exception into a MoodleError."""

import asyncio
from typing import Any

import httpx

from .errors import MoodleError
from .registry import NETWORK_ERROR, UNKNOWN_ERROR, ErrorRegistry


class ErrorFactory:
    """Creates MoodleErrors from codes or from caught exceptions."""

    def __init__(self, registry: ErrorRegistry | None = None):
        """Initialize error factory.

        Args:
            registry: Error registry (defaults to new ErrorRegistry())
        """
        self.registry = registry or ErrorRegistry()

    def from_exception(
        self,
        error: BaseException,
        tool_name: str | None = None,
        function_name: str | None = None,
    ) -> MoodleError:
        """Convert any exception to MoodleError.

        Transport failures (httpx errors, timeouts) become ``network_error``;
        anything unexpected becomes ``unknown_error``.

        Args:
            error: Exception to convert
            tool_name: Optional tool name
            function_name: Optional remote function name

        Returns:
            MoodleError instance
        """
        if isinstance(error, MoodleError):
            return error.with_context(tool_name=tool_name, function_name=function_name)

        context: dict[str, Any] = {
            "tool_name": tool_name,
            "function_name": function_name,
        }

        if isinstance(error, (httpx.TimeoutException, asyncio.TimeoutError)):
            context["message"] = str(error) or "Request timed out"
            return self.registry.create(NETWORK_ERROR, context)

        if isinstance(error, httpx.HTTPError):
            context["message"] = str(error) or type(error).__name__
            return self.registry.create(NETWORK_ERROR, context)

        context["detail"] = f"{type(error).__name__}: {error}"
        return self.registry.create(UNKNOWN_ERROR, context)

    def from_payload(
        self,
        payload: dict[str, Any],
        function_name: str | None = None,
    ) -> MoodleError:
        """Build a remote fault from an exception payload.

        Args:
            payload: Web-service exception payload
            function_name: Remote function that produced it

        Returns:
            MoodleError instance
        """
        return self.registry.from_payload(payload, function_name=function_name)

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> MoodleError:
        """Create MoodleError directly from its kind.

        Args:
            code: Error kind
            context: Context variables for template interpolation
            **kwargs: Additional context variables

        Returns:
            MoodleError instance
        """
        merged_context = dict(context or {})
        merged_context.update(kwargs)

        return self.registry.create(code=code, context=merged_context)


# Convenience singleton
_default_factory: ErrorFactory | None = None


def get_error_factory() -> ErrorFactory:
    """Get default error factory singleton.

    Returns:
        Default ErrorFactory instance
    """
    global _default_factory  # noqa: PLW0603
    if _default_factory is None:
        _default_factory = ErrorFactory()
    return _default_factory


def create_error(code: str, **context: Any) -> MoodleError:
    """Convenience function to create error.

    Args:
        code: Error kind
        **context: Context variables for template interpolation

    Returns:
        MoodleError instance
    """
    return get_error_factory().create(code, context)


def from_exception(error: BaseException, **context: Any) -> MoodleError:
    """Convenience function to classify a caught exception.

    Args:
        error: Exception to convert
        **context: tool_name / function_name

    Returns:
        MoodleError instance
    """
    return get_error_factory().from_exception(error, **context)
