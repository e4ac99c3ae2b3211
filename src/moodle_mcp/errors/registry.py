"""Error registry for creating errors from templates."""

from typing import Any

from .errors import ErrorCategory, ErrorTemplate, MoodleError

NETWORK_ERROR = "network_error"
UNKNOWN_ERROR = "unknown_error"
UNKNOWN_TOOL = "unknown_tool"
INVALID_ARGUMENTS = "invalid_arguments"
CONFIG_INVALID = "config_invalid"


class ErrorRegistry:
    """Registry of local error templates. Also builds remote faults."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error kind.

        Args:
            code: Error kind to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error kinds."""
        return list(self._templates.keys())

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
    ) -> MoodleError:
        """Create error instance from template + context.

        Local errors use their kind as both ``exception`` and ``error_code``.

        Args:
            code: Error kind
            context: Context variables for template interpolation

        Returns:
            MoodleError instance

        Raises:
            ValueError: If error kind not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = self._interpolate(template.message_template, context) or f"Error {code}"
        detail = context.get("detail") or self._interpolate(template.detail_template, context)

        return MoodleError(
            exception=template.exception,
            error_code=template.exception,
            category=template.category,
            message=message,
            detail=detail,
            tool_name=context.get("tool_name"),
            function_name=context.get("function_name"),
            field=context.get("field"),
        )

    def from_payload(
        self,
        payload: dict[str, Any],
        function_name: str | None = None,
    ) -> MoodleError:
        """Build a remote fault from a web-service exception payload.

        Fields are copied verbatim; nothing is renamed or reworded.

        Args:
            payload: Parsed response body containing an ``exception`` key
            function_name: Remote function that produced the fault

        Returns:
            MoodleError with category REMOTE
        """
        return MoodleError(
            exception=str(payload["exception"]),
            error_code=payload.get("errorcode"),
            category=ErrorCategory.REMOTE,
            message=payload.get("message") or "",
            debug_info=payload.get("debuginfo"),
            function_name=function_name,
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except KeyError:
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        self._templates[NETWORK_ERROR] = ErrorTemplate(
            exception=NETWORK_ERROR,
            category=ErrorCategory.TRANSPORT,
            message_template="{message}",
            detail_template="The web service could not be reached or did not answer in time",
        )

        self._templates[UNKNOWN_ERROR] = ErrorTemplate(
            exception=UNKNOWN_ERROR,
            category=ErrorCategory.SYSTEM,
            message_template="An unknown error occurred",
        )

        self._templates[UNKNOWN_TOOL] = ErrorTemplate(
            exception=UNKNOWN_TOOL,
            category=ErrorCategory.DISPATCH,
            message_template="Unknown tool: {tool_name}",
        )

        self._templates[INVALID_ARGUMENTS] = ErrorTemplate(
            exception=INVALID_ARGUMENTS,
            category=ErrorCategory.DISPATCH,
            message_template="Invalid argument '{field}': {reason}",
        )

        self._templates[CONFIG_INVALID] = ErrorTemplate(
            exception=CONFIG_INVALID,
            category=ErrorCategory.CONFIG,
            message_template="Invalid configuration: {reason}",
        )
