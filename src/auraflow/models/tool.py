"""Tool entities for AuraFlow.

This module defines how tools are described to a generation provider and how a
provider's request to invoke one is represented.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, model_validator

ParameterType = Literal["string", "number", "integer", "boolean", "array", "object"]


class ToolParameter(BaseModel):
    """A single named tool parameter.

    Attributes:
        type: JSON Schema primitive type
        description: Human-readable description
        enum: Allowed values, if constrained
    """

    type: ParameterType = Field(..., description="JSON Schema type")
    description: str = Field(default="", description="Parameter description")
    enum: Optional[list[Any]] = Field(None, description="Allowed values")


class ToolDefinition(BaseModel):
    """Describes a tool to a generation provider.

    Attributes:
        name: Tool name, matched exactly at invocation time
        description: Human-readable description
        parameters: Named parameters
        required: Names of required parameters
    """

    name: str = Field(..., min_length=1, description="Tool name")
    description: str = Field(..., description="Tool description")
    parameters: dict[str, ToolParameter] = Field(default_factory=dict, description="Named parameters")
    required: list[str] = Field(default_factory=list, description="Required parameter names")

    @model_validator(mode="after")
    def _required_are_declared(self) -> "ToolDefinition":
        unknown = [name for name in self.required if name not in self.parameters]
        if unknown:
            raise ValueError(f"Required parameters not declared: {unknown}")
        return self

    def to_json_schema(self) -> dict[str, Any]:
        """Render the parameters as a JSON Schema object.

        Returns:
            JSON Schema dictionary
        """
        return {
            "type": "object",
            "properties": {
                name: param.model_dump(exclude_none=True)
                for name, param in self.parameters.items()
            },
            "required": list(self.required),
        }

    @classmethod
    def from_json_schema(cls, name: str, description: str, schema: dict[str, Any]) -> "ToolDefinition":
        """Build a definition from a JSON Schema object.

        Args:
            name: Tool name
            description: Tool description
            schema: JSON Schema with "properties" and "required"

        Returns:
            ToolDefinition instance
        """
        return cls(
            name=name,
            description=description,
            parameters={
                param_name: ToolParameter(**param_schema)
                for param_name, param_schema in schema.get("properties", {}).items()
            },
            required=schema.get("required", []),
        )


class ToolCall(BaseModel):
    """A provider's request to invoke a tool.

    Attributes:
        id: Provider-assigned call ID, if any
        name: Tool name
        arguments: Argument name to value
    """

    id: Optional[str] = Field(None, description="Provider call ID")
    name: str = Field(..., description="Tool name")
    arguments: dict[str, Any] = Field(default_factory=dict, description="Tool arguments")
