"""Core site, user, course and assignment tools, plus the generic passthrough."""

from functools import partial
from typing import Any

from pydantic import Field

from moodle_mcp.registry import ToolArgs, ToolDefinition
from moodle_mcp.types import ToolCategory


class NoArgs(ToolArgs):
    pass


class GetUsersArgs(ToolArgs):
    search_key: str = Field(description="Search key (e.g., username, email, firstname, lastname)")
    search_value: str = Field(description="Search value")


class GetCoursesArgs(ToolArgs):
    ids: list[int] | None = Field(default=None, description="Course IDs to fetch (optional)")


class UserIdArgs(ToolArgs):
    user_id: int = Field(description="User ID")


class CourseIdArgs(ToolArgs):
    course_id: int = Field(description="Course ID")


class CourseIdsArgs(ToolArgs):
    course_ids: list[int] | None = Field(default=None, description="Course IDs (optional)")


class CallFunctionArgs(ToolArgs):
    function_name: str = Field(description="Web service function name")
    params: dict[str, Any] | None = Field(default=None, description="Function parameters")


_tool = partial(ToolDefinition, category=ToolCategory.BASIC)

TOOLS = [
    _tool(
        name="get_site_info",
        description="Get Moodle site information",
        args_model=NoArgs,
        wire_function="core_webservice_get_site_info",
    ),
    _tool(
        name="get_users",
        description="Search and get user information",
        args_model=GetUsersArgs,
        wire_function="core_user_get_users",
        field_map={"search_key": "criteria.0.key", "search_value": "criteria.0.value"},
    ),
    _tool(
        name="get_courses",
        description="Get course list",
        args_model=GetCoursesArgs,
        wire_function="core_course_get_courses",
        field_map={"ids": "options.ids"},
    ),
    _tool(
        name="get_user_courses",
        description="Get courses for a specific user",
        args_model=UserIdArgs,
        wire_function="core_enrol_get_users_courses",
    ),
    _tool(
        name="get_course_contents",
        description="Get course contents and modules",
        args_model=CourseIdArgs,
        wire_function="core_course_get_contents",
    ),
    _tool(
        name="get_assignments",
        description="Get assignments from courses",
        args_model=CourseIdsArgs,
        wire_function="mod_assign_get_assignments",
    ),
    _tool(
        name="call_function",
        description="Call any Moodle Web Service function directly",
        args_model=CallFunctionArgs,
        wire_function="",
        field_map={"function_name": None, "params": ""},
        function_selector=lambda args: args.function_name,
    ),
]