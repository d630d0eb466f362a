"""Tool integration for AuraFlow.

- ToolRegistry: name-keyed registry of executable tools
- ToolInvoker: executes provider tool calls and renders results as text
- Built-in tools: web_search and a sandboxed file_system
"""

from .file_system import FileSystemTool
from .invoker import ToolInvoker, create_tool_invoker
from .registry import ToolRegistry, create_default_registry
from .result import ToolResult
from .web_search import WebSearchTool

__all__ = [
    "ToolRegistry",
    "ToolInvoker",
    "ToolResult",
    "FileSystemTool",
    "WebSearchTool",
    "create_default_registry",
    "create_tool_invoker",
]

# Tool name constants for easy reference
WEB_SEARCH = "web_search"
FILE_SYSTEM = "file_system"
