"""Tool invoker for AuraFlow.

Turns provider-requested tool calls into text. Failures never propagate: an
unknown tool or a raising tool becomes an inline ``ERROR`` string.
"""

import asyncio
import json
from typing import Any, Optional

from ..errors import ToolExecutionFailed, ToolNotFound
from ..models import ToolCall, ToolDefinition
from ..utils.logging import get_logger
from .registry import ToolRegistry
from .result import ToolResult

logger = get_logger(__name__)

# Argument keys forwarded to the built-in tools; anything else the model sends is dropped
FILE_SYSTEM_KEYS = (
    "action",
    "operation",
    "command",
    "path",
    "filePath",
    "filename",
    "destination",
    "content",
)


class ToolInvoker:
    """Executes tool calls against a registry and serializes their results."""

    def __init__(self, registry: ToolRegistry, search_max_results: int = 5) -> None:
        self.registry = registry
        self.search_max_results = search_max_results

    def definitions(self, names: list[str]) -> list[ToolDefinition]:
        return self.registry.definitions(names)

    def prepare_arguments(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Narrow provider arguments to what a built-in tool accepts.

        Args:
            name: Tool name
            arguments: Raw provider arguments

        Returns:
            Arguments to pass to the registry
        """
        if name == "web_search":
            return {
                "query": arguments.get("query"),
                "maxResults": arguments.get("maxResults") or self.search_max_results,
            }
        if name == "file_system":
            return {key: arguments[key] for key in FILE_SYSTEM_KEYS if key in arguments}
        return dict(arguments)

    async def invoke(self, call: ToolCall) -> str:
        """Execute a single tool call.

        Args:
            call: Tool call requested by the provider

        Returns:
            Serialized result, or an inline error string
        """
        if not self.registry.has(call.name):
            logger.warning(f"Unknown tool requested: {call.name}")
            return f"ERROR: Unknown tool {call.name}"

        try:
            result = await self.registry.execute(call.name, self.prepare_arguments(call.name, call.arguments))
        except ToolNotFound:
            return f"ERROR: Unknown tool {call.name}"
        except ToolExecutionFailed as e:
            logger.error(f"Tool execution error: {call.name} - {e}")
            return f"ERROR executing tool {call.name}: {e}"

        return self.serialize(result)

    async def invoke_all(self, calls: list[ToolCall], parallel: bool = False) -> list[str]:
        """Execute a batch of tool calls.

        Args:
            calls: Tool calls in request order
            parallel: Whether to execute the calls concurrently

        Returns:
            Serialized results in request order
        """
        if parallel:
            return list(await asyncio.gather(*(self.invoke(call) for call in calls)))

        results: list[str] = []
        for call in calls:
            results.append(await self.invoke(call))
        return results

    @staticmethod
    def serialize(result: Any) -> str:
        """Serialize a tool result to text.

        Args:
            result: ToolResult or any JSON-serializable value

        Returns:
            JSON text
        """
        if isinstance(result, ToolResult):
            result = result.to_dict()
        return json.dumps(result, ensure_ascii=False, default=str)


def create_tool_invoker(registry: Optional[ToolRegistry] = None, search_max_results: int = 5) -> ToolInvoker:
    """Create an invoker over the given registry (built-in tools if None).

    Args:
        registry: Tool registry
        search_max_results: Default web_search result count

    Returns:
        ToolInvoker instance
    """
    from .registry import create_default_registry

    if registry is None:
        registry = create_default_registry(search_max_results=search_max_results)
    return ToolInvoker(registry, search_max_results=search_max_results)
