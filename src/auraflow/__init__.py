"""AuraFlow.

A Python framework for running multi-agent LLM workflows: agents with roles
and goals that call tools, delegate tasks to sub-agents and draw on a shared
long-term memory.
"""

from .agent import Agent
from .config import (
    AgentConfig,
    AgentOptions,
    LLMConfig,
    MemoryConfig,
    WorkflowConfig,
    load_workflow_config,
)
from .errors import (
    AuraFlowError,
    ConfigError,
    MemoryUnavailable,
    ProviderError,
    SubAgentNotFound,
    ToolError,
    WorkflowConfigError,
)
from .execution import WorkflowResult, WorkflowRunner
from .llm import GenerationProvider, ProviderFactory, create_provider
from .memory import FileMemoryProvider, MemoryAugmentor, MemoryProvider
from .models import Context, GenerationResponse, MemoryEntry, Message, ToolCall, ToolDefinition
from .tools import ToolInvoker, ToolRegistry, create_default_registry

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "Agent",
    "Context",
    "Message",
    "MemoryEntry",
    "GenerationResponse",
    "ToolCall",
    "ToolDefinition",
    # Configuration
    "AgentConfig",
    "AgentOptions",
    "LLMConfig",
    "MemoryConfig",
    "WorkflowConfig",
    "load_workflow_config",
    # Generation
    "GenerationProvider",
    "ProviderFactory",
    "create_provider",
    # Tools
    "ToolRegistry",
    "ToolInvoker",
    "create_default_registry",
    # Memory
    "MemoryProvider",
    "FileMemoryProvider",
    "MemoryAugmentor",
    # Execution
    "WorkflowRunner",
    "WorkflowResult",
    # Errors
    "AuraFlowError",
    "ConfigError",
    "WorkflowConfigError",
    "ProviderError",
    "ToolError",
    "SubAgentNotFound",
    "MemoryUnavailable",
]
