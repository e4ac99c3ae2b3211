"""Web-service function invoker."""

import asyncio
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

import httpx

from moodle_mcp.errors import NETWORK_ERROR, ErrorFactory

from .encoding import WireField, encode_params
from .types import CallResult

if TYPE_CHECKING:
    from moodle_mcp.config import MoodleConfig
    from moodle_mcp.logging import MoodleLogger

RESPONSE_FORMAT = "json"
RESERVED_FIELDS = ("wstoken", "wsfunction", "moodlewsrestformat")


class FunctionInvoker:
    """Calls remote web-service functions and normalizes their outcome.

    Owns a single ``httpx.AsyncClient``; concurrent calls share it and the
    read-only config, nothing else. Every call returns a CallResult:
    transport failures, remote exception payloads and unexpected errors all
    come back as failures, never as raised exceptions.
    """

    def __init__(
        self,
        config: "MoodleConfig",
        logger: "MoodleLogger | None" = None,
        transport: httpx.AsyncBaseTransport | None = None,
        error_factory: ErrorFactory | None = None,
    ):
        """Initialize invoker.

        Args:
            config: Site URL, token and timeout
            logger: Optional logger
            transport: Optional httpx transport (tests pass a MockTransport)
            error_factory: Optional error factory
        """
        self._config = config
        self._logger = logger
        self._errors = error_factory or ErrorFactory()
        self._client = httpx.AsyncClient(
            timeout=config.timeout,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            transport=transport,
        )

    @property
    def config(self) -> "MoodleConfig":
        return self._config

    async def __aenter__(self) -> "FunctionInvoker":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    def build_body(self, function_name: str, params: Mapping[str, Any]) -> list[WireField]:
        """Build the form fields for one call.

        The token, function name and response format are always injected
        first and cannot be overridden: a caller parameter with one of those
        names is dropped.

        Args:
            function_name: Remote function name
            params: Caller parameters

        Returns:
            Ordered form fields
        """
        collisions = [key for key in params if key in RESERVED_FIELDS]
        if collisions and self._logger:
            self._logger.warn(
                "remote",
                f"Ignoring reserved parameter(s) for '{function_name}'",
                ignored=collisions,
            )

        fixed = {
            "wstoken": self._config.ws_token,
            "wsfunction": function_name,
            "moodlewsrestformat": RESPONSE_FORMAT,
        }
        caller = {key: value for key, value in params.items() if key not in RESERVED_FIELDS}
        return encode_params(fixed) + encode_params(caller)

    async def call(
        self,
        function_name: str,
        params: Mapping[str, Any] | None = None,
    ) -> CallResult:
        """Call a remote function once.

        Args:
            function_name: Remote function name
            params: Semantic parameters (nested values allowed)

        Returns:
            CallResult with the parsed payload or a MoodleError
        """
        start = time.time()
        remote_log = self._logger.remote() if self._logger else None

        try:
            body = self.build_body(function_name, params or {})
            if remote_log:
                remote_log.calling(function_name, len(body) - len(RESERVED_FIELDS))

            response = await asyncio.wait_for(
                self._client.post(self._config.endpoint, content=urlencode(body)),
                timeout=self._config.timeout,
            )
            result = self._classify(function_name, response, start)

        except asyncio.TimeoutError:
            error = self._errors.create(
                NETWORK_ERROR,
                message=f"Request timed out after {self._config.timeout:g}s",
                function_name=function_name,
            )
            result = CallResult.fail(error, function_name, _elapsed_ms(start))

        except Exception as e:
            # httpx errors map to network_error, anything else to unknown_error
            error = self._errors.from_exception(e, function_name=function_name)
            result = CallResult.fail(error, function_name, _elapsed_ms(start))

        if remote_log:
            if result.error is not None:
                remote_log.fault(function_name, result.error, result.duration_ms)
            else:
                remote_log.result(function_name, result.duration_ms)
        return result

    async def get_site_info(self) -> CallResult:
        """Fetch site information (also a cheap token check)."""
        return await self.call("core_webservice_get_site_info")

    def _classify(self, function_name: str, response: httpx.Response, start: float) -> CallResult:
        """Map an HTTP response to success, remote fault or transport failure."""
        if not response.is_success:
            payload = _try_json(response)
            if _is_fault(payload):
                error = self._errors.from_payload(payload, function_name=function_name)
            else:
                error = self._errors.create(
                    NETWORK_ERROR,
                    message=f"HTTP {response.status_code} {response.reason_phrase}".strip(),
                    function_name=function_name,
                )
            return CallResult.fail(error, function_name, _elapsed_ms(start))

        payload = response.json()
        if _is_fault(payload):
            error = self._errors.from_payload(payload, function_name=function_name)
            return CallResult.fail(error, function_name, _elapsed_ms(start))

        return CallResult.ok(payload, function_name, _elapsed_ms(start))


def _try_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _is_fault(payload: Any) -> bool:
    return isinstance(payload, dict) and "exception" in payload


def _elapsed_ms(start: float) -> int:
    return int((time.time() - start) * 1000)
