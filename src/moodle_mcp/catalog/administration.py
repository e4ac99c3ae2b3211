"""User, role, file, cohort, quiz, SCORM, report, notification, blog and tag tools."""

from functools import partial
from typing import Literal

from pydantic import Field
from typing_extensions import TypedDict

from moodle_mcp.registry import ToolArgs, ToolDefinition, nest_fields
from moodle_mcp.types import ToolCategory


class CustomField(TypedDict):
    type: str
    name: str
    value: str


class CreateUserArgs(ToolArgs):
    username: str = Field(description="Username")
    password: str = Field(description="Password")
    firstname: str = Field(description="First name")
    lastname: str = Field(description="Last name")
    email: str = Field(description="Email address")
    auth: str = Field(default="manual", description="Authentication method")
    idnumber: str | None = Field(default=None, description="ID number")
    lang: str | None = Field(default=None, description="Language")
    timezone: str | None = Field(default=None, description="Timezone")
    description: str | None = Field(default=None, description="Description")
    custom_fields: list[CustomField] | None = Field(
        default=None, description="Custom profile fields"
    )


class UpdateUserArgs(ToolArgs):
    id: int = Field(description="User ID")
    username: str | None = None
    firstname: str | None = None
    lastname: str | None = None
    email: str | None = None
    password: str | None = None
    auth: str | None = None
    suspended: bool | None = None
    custom_fields: list[CustomField] | None = Field(
        default=None, description="Custom profile fields"
    )


class DeleteUsersArgs(ToolArgs):
    user_ids: list[int] = Field(description="User IDs to delete")


class RoleAssignmentArgs(ToolArgs):
    role_id: int = Field(description="Role ID")
    user_id: int = Field(description="User ID")
    context_id: int = Field(description="Context ID")


class UploadFileArgs(ToolArgs):
    component: str = Field(description="Component name")
    filearea: str = Field(description="File area")
    item_id: int = Field(description="Item ID")
    filepath: str = Field(description="File path")
    filename: str = Field(description="File name")
    file_content: str = Field(description="Base64 encoded file content")


class GetFilesArgs(ToolArgs):
    context_id: int = Field(description="Context ID")
    component: str = Field(description="Component name")
    filearea: str = Field(description="File area")
    item_id: int = Field(description="Item ID")
    filepath: str = Field(default="/", description="File path")
    filename: str = Field(default="", description="File name")


class CreateCohortArgs(ToolArgs):
    name: str = Field(description="Cohort name")
    idnumber: str = Field(description="ID number")
    description: str | None = Field(default=None, description="Description")
    description_format: int = Field(default=1, description="Description format (1 = HTML)")
    visible: bool = Field(default=True, description="Visible")


class AddCohortMemberArgs(ToolArgs):
    cohort_id: int = Field(description="Cohort ID")
    user_id: int = Field(description="User ID")


class CourseIdsArgs(ToolArgs):
    course_ids: list[int] = Field(description="Course IDs")


class GetQuizAttemptsArgs(ToolArgs):
    quiz_id: int = Field(description="Quiz ID")
    user_id: int = Field(default=0, description="User ID (0 = current user)")
    status: Literal["finished", "inprogress", "overdue", "abandoned"] = Field(
        default="finished", description="Attempt status"
    )


class StartQuizAttemptArgs(ToolArgs):
    quiz_id: int = Field(description="Quiz ID")
    user_id: int | None = Field(
        default=None, description="User ID (optional, defaults to current user)"
    )


class GetScormTracksArgs(ToolArgs):
    scorm_id: int = Field(description="SCORM ID")
    user_id: int = Field(description="User ID")
    attempt: int = Field(default=0, description="Attempt number")


class CourseCompletionReportArgs(ToolArgs):
    course_id: int = Field(description="Course ID")
    user_ids: list[int] | None = Field(default=None, description="User IDs (optional)")


class ActivityCompletionReportArgs(ToolArgs):
    course_id: int = Field(description="Course ID")
    user_id: int = Field(description="User ID")


class GradeReportArgs(ToolArgs):
    course_id: int = Field(description="Course ID")
    user_id: int | None = Field(default=None, description="User ID (optional)")
    group_id: int | None = Field(default=None, description="Group ID (optional)")


class UserIdArgs(ToolArgs):
    user_id: int = Field(description="User ID")


class NotificationIdArgs(ToolArgs):
    notification_id: int = Field(description="Notification ID")


class BlogEntriesArgs(ToolArgs):
    user_id: int | None = Field(default=None, description="Author user ID")
    course_id: int | None = Field(default=None, description="Course ID")
    group_id: int | None = Field(default=None, description="Group ID")
    tag_id: int | None = Field(default=None, description="Tag ID")


class GetTagsArgs(ToolArgs):
    collection: str | None = Field(default=None, description="Tag collection")
    area: str | None = Field(default=None, description="Tag area")
    item_type: str | None = Field(default=None, description="Item type")
    item_id: int | None = Field(default=None, description="Item ID")


_tool = partial(ToolDefinition, category=ToolCategory.ADMINISTRATION)

TOOLS = [
    _tool(
        name="create_user",
        description="Create a user account",
        args_model=CreateUserArgs,
        wire_function="core_user_create_users",
        field_map=nest_fields("users.0", *CreateUserArgs.model_fields),
    ),
    _tool(
        name="update_user",
        description="Update a user account",
        args_model=UpdateUserArgs,
        wire_function="core_user_update_users",
        field_map=nest_fields("users.0", *UpdateUserArgs.model_fields),
    ),
    _tool(
        name="delete_users",
        description="Delete user accounts",
        args_model=DeleteUsersArgs,
        wire_function="core_user_delete_users",
    ),
    _tool(
        name="assign_role",
        description="Assign a role to a user in a context",
        args_model=RoleAssignmentArgs,
        wire_function="core_role_assign_roles",
        field_map=nest_fields("assignments.0", "role_id", "user_id", "context_id"),
    ),
    _tool(
        name="unassign_role",
        description="Remove a role from a user in a context",
        args_model=RoleAssignmentArgs,
        wire_function="core_role_unassign_roles",
        field_map=nest_fields("unassignments.0", "role_id", "user_id", "context_id"),
    ),
    _tool(
        name="upload_file",
        description="Upload a file",
        args_model=UploadFileArgs,
        wire_function="core_files_upload",
    ),
    _tool(
        name="get_files",
        description="Browse files in a file area",
        args_model=GetFilesArgs,
        wire_function="core_files_get_files",
    ),
    _tool(
        name="create_cohort",
        description="Create a cohort",
        args_model=CreateCohortArgs,
        wire_function="core_cohort_create_cohorts",
        field_map=nest_fields(
            "cohorts.0", "name", "idnumber", "description", "description_format", "visible"
        ),
    ),
    _tool(
        name="add_cohort_member",
        description="Add a user to a cohort",
        args_model=AddCohortMemberArgs,
        wire_function="core_cohort_add_cohort_members",
        field_map=nest_fields("members.0", "cohort_id", "user_id"),
    ),
    _tool(
        name="get_quizzes",
        description="Get quizzes of courses",
        args_model=CourseIdsArgs,
        wire_function="mod_quiz_get_quizzes_by_courses",
    ),
    _tool(
        name="get_quiz_attempts",
        description="Get quiz attempts of a user",
        args_model=GetQuizAttemptsArgs,
        wire_function="mod_quiz_get_user_attempts",
    ),
    _tool(
        name="start_quiz_attempt",
        description="Start a quiz attempt",
        args_model=StartQuizAttemptArgs,
        wire_function="mod_quiz_start_attempt",
    ),
    _tool(
        name="get_scorms",
        description="Get SCORM packages of courses",
        args_model=CourseIdsArgs,
        wire_function="mod_scorm_get_scorms_by_courses",
    ),
    _tool(
        name="get_scorm_tracks",
        description="Get SCORM tracking data of a user",
        args_model=GetScormTracksArgs,
        wire_function="mod_scorm_get_scorm_sco_tracks",
    ),
    _tool(
        name="get_course_completion_report",
        description="Get the course completion report",
        args_model=CourseCompletionReportArgs,
        wire_function="report_completion_get_course_completion_status",
    ),
    _tool(
        name="get_activity_completion_report",
        description="Get activity completion status of a user",
        args_model=ActivityCompletionReportArgs,
        wire_function="core_completion_get_activities_completion_status",
    ),
    _tool(
        name="get_grade_report",
        description="Get the user grade report",
        args_model=GradeReportArgs,
        wire_function="gradereport_user_get_grade_items",
    ),
    _tool(
        name="get_notification_preferences",
        description="Get notification preferences of a user",
        args_model=UserIdArgs,
        wire_function="core_message_get_user_notification_preferences",
    ),
    _tool(
        name="mark_notification_read",
        description="Mark a notification as read",
        args_model=NotificationIdArgs,
        wire_function="core_message_mark_notification_read",
    ),
    _tool(
        name="get_blog_entries",
        description="Get blog entries",
        args_model=BlogEntriesArgs,
        wire_function="core_blog_get_entries",
        field_map=nest_fields("filters", "user_id", "course_id", "group_id", "tag_id"),
    ),
    _tool(
        name="get_tags",
        description="Get tags",
        args_model=GetTagsArgs,
        wire_function="core_tag_get_tags",
    ),
]
