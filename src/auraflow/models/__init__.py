"""Data models for AuraFlow."""

from .context import Context, Message
from .generation import GenerationResponse
from .memory import MemoryEntry, now_ms
from .tool import ToolCall, ToolDefinition, ToolParameter

__all__ = [
    "Context",
    "Message",
    "MemoryEntry",
    "now_ms",
    "GenerationResponse",
    "ToolCall",
    "ToolDefinition",
    "ToolParameter",
]
