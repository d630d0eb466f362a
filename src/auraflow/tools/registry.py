"""Tool registry for AuraFlow.

This module provides the ToolRegistry class for tool registration, discovery,
definition export and execution.
"""

from typing import Any, Optional

from ..errors import ToolExecutionFailed, ToolNotFound
from ..models import ToolDefinition
from ..utils.logging import get_logger
from .result import ToolResult

logger = get_logger(__name__)


class ToolRegistry:
    """Registry of executable tools keyed by exact name.

    A tool is any object with ``name``, ``description`` and ``parameters``
    (JSON Schema) properties and an async ``execute(**kwargs)`` method. Tools
    may also define ``normalize_params(params)`` to reshape loosely formatted
    arguments before execution.
    """

    def __init__(self) -> None:
        self._tools: dict[str, Any] = {}

    def register(self, tool: Any) -> None:
        """Register a tool instance.

        Args:
            tool: Tool instance

        Raises:
            ValueError: If the tool has no name or the name is already registered
        """
        if not hasattr(tool, "name"):
            raise ValueError("Tool must have a 'name' property")
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    def get(self, name: str) -> Optional[Any]:
        return self._tools.get(name)

    def has(self, name: str) -> bool:
        return name in self._tools

    def names(self) -> list[str]:
        return list(self._tools)

    def list_all(self) -> list[Any]:
        return list(self._tools.values())

    def definition(self, name: str) -> ToolDefinition:
        """Build the provider-facing definition of a tool.

        Args:
            name: Tool name

        Returns:
            ToolDefinition

        Raises:
            ToolNotFound: If no tool is registered under the name
        """
        tool = self.get(name)
        if tool is None:
            raise ToolNotFound(name)
        return ToolDefinition.from_json_schema(tool.name, tool.description, tool.parameters)

    def definitions(self, names: Optional[list[str]] = None) -> list[ToolDefinition]:
        """Build definitions for the named tools, skipping unknown names.

        Args:
            names: Tool names (all registered tools if None)

        Returns:
            Definitions in the order requested
        """
        selected = self.names() if names is None else names
        return [self.definition(name) for name in selected if self.has(name)]

    async def execute(self, name: str, params: dict[str, Any]) -> ToolResult:
        """Execute a tool by name.

        Args:
            name: Tool name
            params: Tool arguments

        Returns:
            The tool's result

        Raises:
            ToolNotFound: If no tool is registered under the name
            ToolExecutionFailed: If the tool raises
        """
        tool = self.get(name)
        if tool is None:
            raise ToolNotFound(name)

        try:
            if hasattr(tool, "normalize_params"):
                params = tool.normalize_params(params)
            return await tool.execute(**params)
        except Exception as e:
            raise ToolExecutionFailed(name, str(e)) from e


def create_default_registry(
    output_dir: str = "workflow_outputs",
    search_max_results: int = 5,
    search_region: str = "us-en",
) -> ToolRegistry:
    """Create a registry with the built-in web_search and file_system tools.

    Args:
        output_dir: Sandbox root for file_system
        search_max_results: Default number of search results
        search_region: Search region code

    Returns:
        Populated ToolRegistry
    """
    from .file_system import FileSystemTool
    from .web_search import WebSearchTool

    registry = ToolRegistry()
    registry.register(WebSearchTool(max_results=search_max_results, region=search_region))
    registry.register(FileSystemTool(root=output_dir))
    return registry
