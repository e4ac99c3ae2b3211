"""Grades, forums, messaging, categories, calendar, badges, groups and activities."""

from functools import partial
from typing import Literal

from pydantic import Field
from typing_extensions import TypedDict

from moodle_mcp.registry import ToolArgs, ToolDefinition, nest_fields
from moodle_mcp.types import ToolCategory

STUDENT_ROLE_ID = 5
FORMAT_HTML = 1


class SearchCriterion(TypedDict):
    key: str
    value: str


class GetGradesArgs(ToolArgs):
    course_id: int = Field(description="Course ID")
    component: str | None = Field(default=None, description="Component name (e.g., mod_assign)")
    activity_id: int | None = Field(default=None, description="Activity ID (optional)")
    user_ids: list[int] | None = Field(default=None, description="User IDs (optional)")


class GetForumsArgs(ToolArgs):
    course_ids: list[int] | None = Field(default=None, description="Course IDs (optional)")


class GetForumDiscussionsArgs(ToolArgs):
    forum_id: int = Field(description="Forum ID")
    page: int = Field(default=0, description="Page number")
    per_page: int = Field(default=10, description="Items per page")


class SendMessageArgs(ToolArgs):
    user_id: int = Field(description="User ID to send message to")
    message: str = Field(description="Message content")


class GetMessagesArgs(ToolArgs):
    user_id: int = Field(description="User ID")
    type: Literal["conversations", "notifications"] | None = Field(
        default=None, description="Conversations (default) or notifications"
    )
    read: bool | None = Field(default=None, description="Only read / unread messages")


class GetCategoriesArgs(ToolArgs):
    criteria: list[SearchCriterion] | None = Field(
        default=None, description="Search criteria (optional)"
    )
    add_subcategories: bool | None = Field(default=None, description="Include subcategories")


class GetCalendarEventsArgs(ToolArgs):
    course_ids: list[int] | None = Field(default=None, description="Course IDs")
    time_start: int | None = Field(default=None, description="Start time (Unix timestamp)")
    time_end: int | None = Field(default=None, description="End time (Unix timestamp)")


class GetBadgesArgs(ToolArgs):
    course_id: int | None = Field(default=None, description="Course ID (optional)")
    user_id: int | None = Field(default=None, description="User ID (optional)")


class CreateCourseArgs(ToolArgs):
    full_name: str = Field(description="Full course name")
    short_name: str = Field(description="Short course name")
    category_id: int = Field(description="Category ID")
    summary: str | None = Field(default=None, description="Course summary")
    format: str | None = Field(default=None, description="Course format (e.g., topics)")
    visible: bool | None = Field(default=None, description="Visible to students")


class EnrollUserArgs(ToolArgs):
    user_id: int = Field(description="User ID")
    course_id: int = Field(description="Course ID")
    role_id: int = Field(default=STUDENT_ROLE_ID, description="Role ID (default: student)")


class CourseIdArgs(ToolArgs):
    course_id: int = Field(description="Course ID")


class CreateGroupArgs(ToolArgs):
    course_id: int = Field(description="Course ID")
    name: str = Field(description="Group name")
    description: str = Field(default="", description="Group description")


class CourseIdsArgs(ToolArgs):
    course_ids: list[int] = Field(description="Course IDs")


class CompletionStatusArgs(ToolArgs):
    course_id: int = Field(description="Course ID")
    user_id: int = Field(description="User ID")


_tool = partial(ToolDefinition, category=ToolCategory.EXTENDED)

TOOLS = [
    _tool(
        name="get_grades",
        description="Get grades for a course",
        args_model=GetGradesArgs,
        wire_function="core_grades_get_grades",
    ),
    _tool(
        name="get_forums",
        description="Get forums by courses",
        args_model=GetForumsArgs,
        wire_function="mod_forum_get_forums_by_courses",
    ),
    _tool(
        name="get_forum_discussions",
        description="Get discussions of a forum",
        args_model=GetForumDiscussionsArgs,
        wire_function="mod_forum_get_forum_discussions",
    ),
    _tool(
        name="send_message",
        description="Send an instant message to a user",
        args_model=SendMessageArgs,
        wire_function="core_message_send_instant_messages",
        field_map={"user_id": "messages.0.touserid", "message": "messages.0.text"},
        constants={"messages.0.textformat": FORMAT_HTML},
    ),
    _tool(
        name="get_messages",
        description="Get conversations or notifications of a user",
        args_model=GetMessagesArgs,
        wire_function="core_message_get_conversations",
        field_map={"type": None},
        function_selector=lambda args: (
            "core_message_get_messages"
            if args.type == "notifications"
            else "core_message_get_conversations"
        ),
    ),
    _tool(
        name="get_categories",
        description="Get course categories",
        args_model=GetCategoriesArgs,
        wire_function="core_course_get_categories",
    ),
    _tool(
        name="get_calendar_events",
        description="Get calendar events",
        args_model=GetCalendarEventsArgs,
        wire_function="core_calendar_get_calendar_events",
        field_map=nest_fields("options", "course_ids", "time_start", "time_end"),
    ),
    _tool(
        name="get_badges",
        description="Get badges of a course or a user",
        args_model=GetBadgesArgs,
        wire_function="core_badges_get_user_badges",
        function_selector=lambda args: (
            "core_badges_get_course_badges" if args.course_id else "core_badges_get_user_badges"
        ),
    ),
    _tool(
        name="create_course",
        description="Create a course",
        args_model=CreateCourseArgs,
        wire_function="core_course_create_courses",
        field_map=nest_fields(
            "courses.0", "full_name", "short_name", "category_id", "summary", "format", "visible"
        ),
    ),
    _tool(
        name="enroll_user",
        description="Enrol a user in a course (manual enrolment)",
        args_model=EnrollUserArgs,
        wire_function="enrol_manual_enrol_users",
        field_map=nest_fields("enrolments.0", "user_id", "course_id", "role_id"),
    ),
    _tool(
        name="get_groups",
        description="Get groups of a course",
        args_model=CourseIdArgs,
        wire_function="core_group_get_course_groups",
    ),
    _tool(
        name="create_group",
        description="Create a group in a course",
        args_model=CreateGroupArgs,
        wire_function="core_group_create_groups",
        field_map=nest_fields("groups.0", "course_id", "name", "description"),
    ),
    _tool(
        name="get_wikis",
        description="Get wikis of a course",
        args_model=CourseIdArgs,
        wire_function="mod_wiki_get_wikis_by_courses",
        field_map={"course_id": "courseids.0"},
    ),
    _tool(
        name="get_databases",
        description="Get database activities of courses",
        args_model=CourseIdsArgs,
        wire_function="mod_data_get_databases_by_courses",
    ),
    _tool(
        name="get_completion_status",
        description="Get course completion status of a user",
        args_model=CompletionStatusArgs,
        wire_function="core_completion_get_course_completion_status",
    ),
]
