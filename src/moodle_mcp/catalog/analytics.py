"""Analytics API tools: prediction models, insights, indicators, targets."""

from functools import partial
from typing import Literal

from pydantic import Field

from moodle_mcp.registry import ToolArgs, ToolDefinition
from moodle_mcp.types import ToolCategory


class IncludeDisabledArgs(ToolArgs):
    include_disabled: bool | None = Field(default=None, description="Include disabled entries")


class ModelIdArgs(ToolArgs):
    model_id: int = Field(description="Model ID")


class EnableModelArgs(ToolArgs):
    model_id: int = Field(description="Model ID")
    enable: bool = Field(description="Enable or disable the model")


class EvaluateModelArgs(ToolArgs):
    model_id: int = Field(description="Model ID")
    time_splitting_id: str | None = Field(default=None, description="Time splitting method ID")
    include_training_data: bool | None = Field(
        default=None, description="Include training data in evaluation"
    )


class GetInsightsArgs(ToolArgs):
    model_id: int | None = Field(default=None, description="Model ID (optional)")
    context_id: int | None = Field(default=None, description="Context ID (optional)")
    user_id: int | None = Field(default=None, description="User ID (optional)")
    status: Literal["notviewed", "viewed", "fixed", "notuseful"] | None = Field(
        default=None, description="Insight status"
    )


class InsightIdArgs(ToolArgs):
    insight_id: int = Field(description="Insight ID")


class EnableIndicatorArgs(ToolArgs):
    indicator_id: str = Field(description="Indicator ID")
    enable: bool = Field(description="Enable or disable the indicator")


class ImportModelArgs(ToolArgs):
    model_data: str = Field(description="Exported model data")


def _toggle(enable_function: str, disable_function: str):
    return lambda args: enable_function if args.enable else disable_function


_tool = partial(ToolDefinition, category=ToolCategory.ANALYTICS)

TOOLS = [
    _tool(
        name="analytics_get_models",
        description="Get analytics prediction models",
        args_model=IncludeDisabledArgs,
        wire_function="core_analytics_get_models",
    ),
    _tool(
        name="analytics_get_model",
        description="Get one analytics model",
        args_model=ModelIdArgs,
        wire_function="core_analytics_get_model",
    ),
    _tool(
        name="analytics_enable_model",
        description="Enable or disable an analytics model",
        args_model=EnableModelArgs,
        wire_function="core_analytics_enable_model",
        field_map={"enable": None},
        function_selector=_toggle("core_analytics_enable_model", "core_analytics_disable_model"),
    ),
    _tool(
        name="analytics_train_model",
        description="Train an analytics model",
        args_model=ModelIdArgs,
        wire_function="core_analytics_train_model",
    ),
    _tool(
        name="analytics_predict_model",
        description="Get predictions from an analytics model",
        args_model=ModelIdArgs,
        wire_function="core_analytics_predict_model",
    ),
    _tool(
        name="analytics_evaluate_model",
        description="Evaluate an analytics model",
        args_model=EvaluateModelArgs,
        wire_function="core_analytics_evaluate_model",
    ),
    _tool(
        name="analytics_get_insights",
        description="Get analytics insights",
        args_model=GetInsightsArgs,
        wire_function="core_analytics_get_insights",
    ),
    _tool(
        name="analytics_mark_insight_viewed",
        description="Mark an insight as viewed",
        args_model=InsightIdArgs,
        wire_function="core_analytics_mark_insight_viewed",
    ),
    _tool(
        name="analytics_mark_insight_fixed",
        description="Mark an insight as fixed",
        args_model=InsightIdArgs,
        wire_function="core_analytics_mark_insight_fixed",
    ),
    _tool(
        name="analytics_mark_insight_not_useful",
        description="Mark an insight as not useful",
        args_model=InsightIdArgs,
        wire_function="core_analytics_mark_insight_not_useful",
    ),
    _tool(
        name="analytics_get_indicators",
        description="Get analytics indicators",
        args_model=IncludeDisabledArgs,
        wire_function="core_analytics_get_indicators",
    ),
    _tool(
        name="analytics_enable_indicator",
        description="Enable or disable an analytics indicator",
        args_model=EnableIndicatorArgs,
        wire_function="core_analytics_enable_indicator",
        field_map={"enable": None},
        function_selector=_toggle(
            "core_analytics_enable_indicator", "core_analytics_disable_indicator"
        ),
    ),
    _tool(
        name="analytics_get_targets",
        description="Get analytics targets",
        args_model=IncludeDisabledArgs,
        wire_function="core_analytics_get_targets",
    ),
    _tool(
        name="analytics_get_time_splittings",
        description="Get analytics time splitting methods",
        args_model=IncludeDisabledArgs,
        wire_function="core_analytics_get_time_splittings",
    ),
    _tool(
        name="analytics_get_model_stats",
        description="Get statistics of an analytics model",
        args_model=ModelIdArgs,
        wire_function="core_analytics_get_model_stats",
    ),
    _tool(
        name="analytics_clear_model_predictions",
        description="Clear the predictions of an analytics model",
        args_model=ModelIdArgs,
        wire_function="core_analytics_clear_model_predictions",
    ),
    _tool(
        name="analytics_export_model",
        description="Export an analytics model",
        args_model=ModelIdArgs,
        wire_function="core_analytics_export_model",
    ),
    _tool(
        name="analytics_import_model",
        description="Import an analytics model",
        args_model=ImportModelArgs,
        wire_function="core_analytics_import_model",
    ),
]
