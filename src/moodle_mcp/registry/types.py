"""Tool registry types."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from moodle_mcp.invoker import RemoteFunctionCall
from moodle_mcp.types import ToolCategory

from .mapping import assign_wire_path, default_wire_name


class ToolArgs(BaseModel):
    """Base for tool argument models.

    Arguments arrive camelCase (``courseId``) and are type-checked strictly;
    unknown keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        extra="ignore",
        frozen=True,
        protected_namespaces=(),
    )


@dataclass(frozen=True)
class ToolDefinition:
    """One exposed tool backed by one remote function call.

    ``field_map`` maps argument field names to dotted wire paths. Fields not
    listed use :func:`default_wire_name`; ``None`` keeps a field off the
    wire. ``constants`` are wire paths that always get a fixed value.
    ``function_selector`` picks the remote function from the validated
    arguments when it depends on them.
    """

    name: str
    description: str
    args_model: type[ToolArgs]
    wire_function: str
    category: ToolCategory = ToolCategory.BASIC
    field_map: Mapping[str, str | None] = field(default_factory=dict)
    constants: Mapping[str, Any] = field(default_factory=dict)
    function_selector: Callable[[Any], str] | None = None
    input_schema: Mapping[str, Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        fields = self.args_model.model_fields
        unknown = set(self.field_map) - set(fields)
        if unknown:
            msg = f"Tool '{self.name}' maps unknown field(s): {sorted(unknown)}"
            raise ValueError(msg)

        complete: dict[str, str | None] = {name: default_wire_name(name) for name in fields}
        complete.update(self.field_map)
        object.__setattr__(self, "field_map", MappingProxyType(complete))
        object.__setattr__(self, "constants", MappingProxyType(dict(self.constants)))
        object.__setattr__(
            self, "input_schema", self.args_model.model_json_schema(by_alias=True)
        )

    def build_call(self, arguments: Mapping[str, Any]) -> RemoteFunctionCall:
        """Validate arguments and translate them into a remote call.

        Args:
            arguments: Tool arguments as received from the host

        Returns:
            RemoteFunctionCall with wire-named parameters

        Raises:
            pydantic.ValidationError: If arguments do not match the schema
        """
        args = self.args_model.model_validate(dict(arguments))
        values = args.model_dump(exclude_none=True)

        params: dict[str, Any] = {}
        for field_name, path in self.field_map.items():
            if path is None or field_name not in values:
                continue
            assign_wire_path(params, path, values[field_name])
        for path, value in self.constants.items():
            assign_wire_path(params, path, value)

        function_name = (
            self.function_selector(args) if self.function_selector else self.wire_function
        )
        return RemoteFunctionCall(function_name=function_name, parameters=params)

    def to_mcp_tool(self) -> dict[str, Any]:
        """Convert to MCP tool format for exposure.

        Returns:
            MCP tool dict with name, description and inputSchema
        """
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": dict(self.input_schema),
        }
