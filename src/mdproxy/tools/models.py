"""Tool models: MCP descriptors and the routing data behind each tool."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ToolKind = Literal["scrape", "search", "variant"]


class ToolParam(BaseModel):
    """One string argument of a tool's input schema."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    type: str = "string"
    required: bool = True


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    @classmethod
    def from_params(cls, name: str, description: str, params: list[ToolParam]) -> ToolDescriptor:
        """Build the JSON Schema ``object`` for *params*."""
        properties: dict[str, Any] = {}
        required: list[str] = []
        for param in params:
            properties[param.name] = {"type": param.type, "description": param.description}
            if param.required:
                required.append(param.name)
        return cls(
            name=name,
            description=description,
            input_schema={"type": "object", "properties": properties, "required": required},
        )

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required", []))

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ToolRoute(BaseModel):
    """A descriptor paired with how the invoker turns a call into a URL.

    ``arg_name`` is the single required argument (``url`` or ``query``);
    ``variant`` is the path segment for variant tools.
    """

    model_config = ConfigDict(frozen=True)

    descriptor: ToolDescriptor
    kind: ToolKind
    arg_name: str
    variant: str | None = None

    @property
    def name(self) -> str:
        return self.descriptor.name
