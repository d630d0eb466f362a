"""Generation response union for AuraFlow."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from .tool import ToolCall


class GenerationResponse(BaseModel):
    """Either a text answer or a set of requested tool calls.

    Exactly one payload is populated: ``content`` when ``kind`` is "text",
    a non-empty ``calls`` list when ``kind`` is "tool_calls".
    """

    kind: Literal["text", "tool_calls"] = Field(..., description="Response shape")
    content: Optional[str] = Field(None, description="Text payload")
    calls: list[ToolCall] = Field(default_factory=list, description="Requested tool calls")

    @model_validator(mode="after")
    def _exactly_one_payload(self) -> "GenerationResponse":
        if self.kind == "text":
            if self.content is None or self.calls:
                raise ValueError("text response requires content and no tool calls")
        elif self.content is not None or not self.calls:
            raise ValueError("tool_calls response requires calls and no content")
        return self

    @classmethod
    def text(cls, content: str) -> "GenerationResponse":
        return cls(kind="text", content=content)

    @classmethod
    def tool_calls(cls, calls: list[ToolCall]) -> "GenerationResponse":
        return cls(kind="tool_calls", calls=calls)

    @property
    def is_text(self) -> bool:
        return self.kind == "text"

    @property
    def is_tool_calls(self) -> bool:
        return self.kind == "tool_calls"
