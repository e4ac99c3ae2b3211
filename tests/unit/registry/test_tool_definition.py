"""Unit tests for ToolDefinition and ToolRegistry."""

import pytest
from pydantic import Field, ValidationError

from moodle_mcp.registry import (
    ToolArgs,
    ToolDefinition,
    ToolRegistry,
    format_tool_detail,
    format_tool_list,
)
from moodle_mcp.types import ToolCategory


class SearchArgs(ToolArgs):
    course_id: int = Field(description="Course ID")
    search_key: str = Field(description="Key")
    limit: int | None = Field(default=None, description="Limit")
    dry_run: bool = Field(default=False, description="Not sent")


@pytest.fixture
def search_tool() -> ToolDefinition:
    return ToolDefinition(
        name="search",
        description="Search things",
        args_model=SearchArgs,
        wire_function="local_search",
        field_map={"search_key": "criteria.0.key", "dry_run": None},
        constants={"criteria.0.exact": True},
    )


class TestToolDefinition:
    """Tests for argument validation and translation."""

    def test_field_map_is_completed(self, search_tool):
        assert dict(search_tool.field_map) == {
            "course_id": "courseid",
            "search_key": "criteria.0.key",
            "limit": "limit",
            "dry_run": None,
        }

    def test_field_map_is_read_only(self, search_tool):
        with pytest.raises(TypeError):
            search_tool.field_map["limit"] = "x"  # type: ignore[index]

    def test_unknown_mapped_field_rejected(self):
        with pytest.raises(ValueError, match="unknown field"):
            ToolDefinition(
                name="bad",
                description="",
                args_model=SearchArgs,
                wire_function="x",
                field_map={"nope": "nope"},
            )

    def test_build_call_translates_names(self, search_tool):
        call = search_tool.build_call({"courseId": 3, "searchKey": "email"})

        assert call.function_name == "local_search"
        assert call.parameters == {
            "courseid": 3,
            "criteria": [{"key": "email", "exact": True}],
        }

    def test_absent_optional_not_sent(self, search_tool):
        call = search_tool.build_call({"courseId": 3, "searchKey": "k"})

        assert "limit" not in call.parameters

    def test_unmapped_field_not_sent(self, search_tool):
        call = search_tool.build_call({"courseId": 3, "searchKey": "k", "dryRun": True})

        assert "dryrun" not in call.parameters

    def test_python_names_accepted(self, search_tool):
        call = search_tool.build_call({"course_id": 3, "search_key": "k"})

        assert call.parameters["courseid"] == 3

    def test_unknown_arguments_ignored(self, search_tool):
        call = search_tool.build_call({"courseId": 3, "searchKey": "k", "extra": 1})

        assert "extra" not in call.parameters

    def test_missing_required_field(self, search_tool):
        with pytest.raises(ValidationError) as exc_info:
            search_tool.build_call({"courseId": 3})

        assert exc_info.value.errors()[0]["loc"] == ("searchKey",)

    def test_wrong_type_rejected(self, search_tool):
        """Strings are not coerced to ints."""
        with pytest.raises(ValidationError):
            search_tool.build_call({"courseId": "3", "searchKey": "k"})

    def test_function_selector(self):
        tool = ToolDefinition(
            name="pick",
            description="",
            args_model=SearchArgs,
            wire_function="local_default",
            function_selector=lambda args: "local_dry" if args.dry_run else "local_default",
        )

        call = tool.build_call({"courseId": 1, "searchKey": "k", "dryRun": True})

        assert call.function_name == "local_dry"

    def test_input_schema_uses_camel_case(self, search_tool):
        schema = search_tool.input_schema

        assert schema["type"] == "object"
        assert set(schema["properties"]) == {"courseId", "searchKey", "limit", "dryRun"}
        assert set(schema["required"]) == {"courseId", "searchKey"}

    def test_to_mcp_tool(self, search_tool):
        mcp_tool = search_tool.to_mcp_tool()

        assert mcp_tool["name"] == "search"
        assert mcp_tool["description"] == "Search things"
        assert mcp_tool["inputSchema"]["properties"]["courseId"]["type"] == "integer"


class TestToolRegistry:
    """Tests for ToolRegistry lookup."""

    def test_lookup(self, search_tool):
        registry = ToolRegistry([search_tool])

        assert registry.get("search") is search_tool
        assert registry.get("missing") is None
        assert "search" in registry
        assert len(registry) == 1

    def test_duplicate_names_rejected(self, search_tool):
        with pytest.raises(ValueError, match="Duplicate"):
            ToolRegistry([search_tool, search_tool])

    def test_filter_by_category(self, search_tool):
        registry = ToolRegistry([search_tool])

        assert registry.list_tools(ToolCategory.BASIC) == [search_tool]
        assert registry.list_tools(ToolCategory.ANALYTICS) == []

    def test_mcp_exposure(self, search_tool):
        registry = ToolRegistry([search_tool])

        assert [t["name"] for t in registry.get_for_mcp_exposure()] == ["search"]


class TestFormatters:
    def test_format_tool_list(self, search_tool):
        output = format_tool_list([search_tool])

        assert "Found 1 tool(s)" in output
        assert "search" in output
        assert "[basic]" in output

    def test_format_empty_list(self):
        assert format_tool_list([]) == "No tools found."

    def test_format_tool_detail(self, search_tool):
        output = format_tool_detail(search_tool)

        assert "Tool: search" in output
        assert "criteria.0.key" in output
        assert "(not sent)" in output
        assert "criteria.0.exact" in output
