"""Configuration management for AuraFlow."""

from .loader import load_config_file, load_workflow_config
from .schemas import (
    MAX_TOOL_ITERATIONS,
    PROVIDER_DEFAULTS,
    AgentConfig,
    AgentOptions,
    LLMConfig,
    MemoryConfig,
    StepConfig,
    ToolsConfig,
    WorkflowConfig,
)

__all__ = [
    # Loader
    "load_config_file",
    "load_workflow_config",
    # Schemas
    "AgentConfig",
    "AgentOptions",
    "LLMConfig",
    "MemoryConfig",
    "StepConfig",
    "ToolsConfig",
    "WorkflowConfig",
    "MAX_TOOL_ITERATIONS",
    "PROVIDER_DEFAULTS",
]
