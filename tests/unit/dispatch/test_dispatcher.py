"""Unit tests for ToolDispatcher."""

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from moodle_mcp.dispatch import ToolDispatcher
from moodle_mcp.invoker import CallResult


class TestDispatchFailures:
    """Failures decided before or around the remote call."""

    async def test_unknown_tool(self, dispatcher, moodle_site):
        result = await dispatcher.invoke("no_such_tool", {})

        assert result.error.exception == "unknown_tool"
        assert result.error.message == "Unknown tool: no_such_tool"
        assert moodle_site.requests == []

    async def test_missing_required_field_skips_network(self, dispatcher, moodle_site):
        result = await dispatcher.invoke("get_users", {"searchKey": "email"})

        assert result.error.exception == "invalid_arguments"
        assert result.error.field == "searchValue"
        assert moodle_site.requests == []

    async def test_wrong_type_reports_field(self, dispatcher, moodle_site):
        result = await dispatcher.invoke("get_course_contents", {"courseId": "two"})

        assert result.error.exception == "invalid_arguments"
        assert result.error.field == "courseId"
        assert "courseId" in result.error.message
        assert moodle_site.requests == []

    async def test_nested_field_path(self, dispatcher):
        result = await dispatcher.invoke("get_categories", {"criteria": [{"key": "name"}]})

        assert result.error.field == "criteria.0.value"

    async def test_arguments_must_be_an_object(self, dispatcher, moodle_site):
        arguments = ["not", "an", "object"]

        result = await dispatcher.invoke("get_courses", arguments)  # type: ignore[arg-type]

        assert result.error.exception == "invalid_arguments"
        assert result.error.field == "arguments"
        assert moodle_site.requests == []

    async def test_missing_arguments_treated_as_empty(self, dispatcher, moodle_site):
        result = await dispatcher.invoke("get_site_info", None)

        assert result.success
        assert moodle_site.calls == ["core_webservice_get_site_info"]

    async def test_rejection_is_logged(self, dispatcher, log_stream):
        await dispatcher.invoke("no_such_tool", {})

        events = [json.loads(line) for line in log_stream.getvalue().splitlines()]
        assert any(e.get("event") == "tool_rejected" for e in events)

    async def test_unexpected_error_is_normalized(self, tool_registry):
        """A crashing invoker still yields a failure, not an exception."""
        invoker = MagicMock()
        invoker.call = AsyncMock(side_effect=RuntimeError("kaboom"))
        dispatcher = ToolDispatcher(tool_registry, invoker)

        result = await dispatcher.invoke("get_site_info", {})

        assert result.error.exception == "unknown_error"
        assert result.error.tool_name == "get_site_info"


class TestDispatchCalls:
    """Translation and delegation to the invoker."""

    async def test_wire_translation(self, dispatcher, moodle_site):
        await dispatcher.invoke("get_users", {"searchKey": "email", "searchValue": "a@b.c"})

        assert moodle_site.calls == ["core_user_get_users"]
        assert moodle_site.last_params == {
            "criteria[0][key]": "email",
            "criteria[0][value]": "a@b.c",
        }

    async def test_success_data_returned(self, dispatcher, moodle_site):
        moodle_site.respond("core_course_get_contents", [{"id": 1, "name": "General"}])

        result = await dispatcher.invoke("get_course_contents", {"courseId": 2})

        assert result.success
        assert result.data == [{"id": 1, "name": "General"}]
        assert moodle_site.last_params == {"courseid": "2"}

    async def test_remote_fault_passed_up_unchanged(self, dispatcher, moodle_site):
        moodle_site.respond(
            "core_course_get_contents",
            {
                "exception": "required_capability_exception",
                "errorcode": "nopermissions",
                "message": "Sorry, but you do not currently have permissions",
            },
        )

        result = await dispatcher.invoke("get_course_contents", {"courseId": 2})

        assert result.error.exception == "required_capability_exception"
        assert result.error.error_code == "nopermissions"
        assert result.error.tool_name == "get_course_contents"
        assert result.error.function_name == "core_course_get_contents"

    async def test_network_error_tagged_with_tool(self, dispatcher, moodle_site):
        moodle_site.fail_with(httpx.ConnectError("Connection refused"))

        result = await dispatcher.invoke("get_site_info", {})

        assert result.error.exception == "network_error"
        assert result.error.tool_name == "get_site_info"

    async def test_boolean_and_constant_encoding(self, dispatcher, moodle_site):
        await dispatcher.invoke("send_message", {"userId": 3, "message": "hello"})

        assert moodle_site.last_params == {
            "messages[0][touserid]": "3",
            "messages[0][text]": "hello",
            "messages[0][textformat]": "1",
        }

    async def test_call_function_uses_requested_function(self, dispatcher, moodle_site):
        await dispatcher.invoke(
            "call_function",
            {"functionName": "core_course_get_courses", "params": {"options": {"ids": [5]}}},
        )

        assert moodle_site.calls == ["core_course_get_courses"]
        assert moodle_site.last_params == {"options[ids][0]": "5"}

    async def test_call_function_cannot_override_token(self, dispatcher, moodle_site):
        from tests.mocks import WS_TOKEN

        await dispatcher.invoke(
            "call_function",
            {"functionName": "core_course_get_courses", "params": {"wstoken": "forged"}},
        )

        assert dict(moodle_site.last_form)["wstoken"] == WS_TOKEN

    async def test_success_logged(self, dispatcher, log_stream):
        await dispatcher.invoke("get_site_info", {})

        events = [json.loads(line).get("event") for line in log_stream.getvalue().splitlines()]
        assert "tool_started" in events
        assert "tool_completed" in events

    @pytest.mark.parametrize("name", ["get_site_info", "analytics_get_models", "get_tags"])
    async def test_invoker_receives_built_call(self, tool_registry, name):
        invoker = MagicMock()
        invoker.call = AsyncMock(return_value=CallResult.ok([]))
        dispatcher = ToolDispatcher(tool_registry, invoker)

        result = await dispatcher.invoke(name, {})

        assert result.success
        invoker.call.assert_awaited_once_with(tool_registry.get(name).wire_function, {})
