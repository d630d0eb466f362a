"""Configuration schemas for AuraFlow.

This module defines Pydantic models for validating configuration data.
"""

import os
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

# Hard bound on tool-aware generations per agent run
MAX_TOOL_ITERATIONS = 5

ProviderName = Literal["groq", "openai", "deepseek", "ollama", "anthropic", "custom"]

# provider -> (default endpoint, default API key env var, requires key)
PROVIDER_DEFAULTS: dict[str, tuple[Optional[str], str, bool]] = {
    "groq": ("https://api.groq.com/openai/v1", "GROQ_API_KEY", True),
    "openai": (None, "OPENAI_API_KEY", True),
    "deepseek": ("https://api.deepseek.com/v1", "DEEPSEEK_API_KEY", True),
    "ollama": ("http://localhost:11434/v1", "OLLAMA_API_KEY", False),
    "anthropic": (None, "ANTHROPIC_API_KEY", True),
    "custom": (None, "LLM_API_KEY", False),
}

DEFAULT_MODEL = "llama-3.1-8b-instant"


class LLMConfig(BaseModel):
    """Configuration for a generation provider."""

    provider: ProviderName = Field(default="groq", description="Provider binding")
    model: str = Field(default=DEFAULT_MODEL, description="Model identifier")
    endpoint: Optional[str] = Field(None, description="API base URL (provider default if unset)")
    api_key_env: Optional[str] = Field(None, description="Environment variable holding the API key")
    temperature: Optional[float] = Field(None, ge=0, le=2, description="Sampling temperature")
    max_tokens: int = Field(default=4096, ge=1, description="Maximum tokens to generate")

    @property
    def resolved_endpoint(self) -> Optional[str]:
        return self.endpoint or PROVIDER_DEFAULTS[self.provider][0]

    @property
    def resolved_api_key_env(self) -> str:
        return self.api_key_env or PROVIDER_DEFAULTS[self.provider][1]

    @property
    def requires_api_key(self) -> bool:
        return PROVIDER_DEFAULTS[self.provider][2]

    def get_api_key(self) -> str:
        """Read the API key from the environment.

        Returns:
            API key, or an empty string if unset
        """
        return os.environ.get(self.resolved_api_key_env, "")

    @classmethod
    def from_env(cls) -> "LLMConfig":
        """Build a configuration from LLM_PROVIDER and CURRENT_AI_MODEL.

        Returns:
            LLMConfig instance
        """
        return cls(
            provider=os.environ.get("LLM_PROVIDER", "groq").lower(),
            model=os.environ.get("CURRENT_AI_MODEL", DEFAULT_MODEL),
            endpoint=os.environ.get("LLM_ENDPOINT") or None,
        )


class AgentOptions(BaseModel):
    """Run loop options shared by every agent in a tree."""

    feed_tool_results: bool = Field(
        default=False,
        description="Feed tool results back for another generation instead of returning them",
    )
    parallel_tools: bool = Field(default=False, description="Execute one round's tool calls concurrently")
    max_delegation_depth: Optional[int] = Field(
        None, ge=0, description="Refuse delegation beyond this depth (unbounded if unset)"
    )


class AgentConfig(BaseModel):
    """Configuration for an agent and its sub-agent tree."""

    id: str = Field(..., pattern=r"^[A-Za-z][A-Za-z0-9_\-]*$", description="Unique agent identifier")
    role: str = Field(..., description="Agent's responsibility")
    goal: str = Field(..., description="Agent's objective")
    tools: list[str] = Field(default_factory=list, description="Tool names the agent may request")
    sub_agents: list["AgentConfig"] = Field(default_factory=list, description="Delegation targets")

    def walk(self) -> list["AgentConfig"]:
        """Flatten this agent and its descendants, depth first.

        Returns:
            List of agent configurations
        """
        found = [self]
        for sub_agent in self.sub_agents:
            found.extend(sub_agent.walk())
        return found


class StepConfig(BaseModel):
    """A sequential workflow step."""

    id: Optional[str] = Field(None, description="Step identifier (defaults to step_<n>)")
    agent: str = Field(..., description="Root agent ID to run")
    task: Optional[str] = Field(None, description="Task text appended to the context before running")
    output_key: Optional[str] = Field(None, description="Output store key (defaults to step id)")


class MemoryConfig(BaseModel):
    """Configuration for the memory backend."""

    backend: Literal["none", "file", "qdrant"] = Field(default="none", description="Memory backend")
    storage_dir: str = Field(default="./auraflow_memory", description="File backend directory")
    collection: str = Field(default="auraflow_memory", description="Qdrant collection name")
    url_env: str = Field(default="QDRANT_URL", description="Environment variable holding the Qdrant URL")
    api_key_env: str = Field(default="QDRANT_API_KEY", description="Environment variable holding the Qdrant key")
    embedding_model: str = Field(default="text-embedding-3-small", description="Embedding model")
    embedding_api_key_env: str = Field(default="OPENAI_API_KEY", description="Embedding API key variable")
    vector_size: int = Field(default=1536, ge=1, description="Embedding dimension")

    @classmethod
    def from_env(cls) -> "MemoryConfig":
        """Build a configuration from MEMORY_BACKEND and QDRANT_COLLECTION.

        Returns:
            MemoryConfig instance
        """
        return cls(
            backend=os.environ.get("MEMORY_BACKEND", "none").lower() or "none",
            collection=os.environ.get("QDRANT_COLLECTION", "auraflow_memory"),
        )


class ToolsConfig(BaseModel):
    """Configuration for built-in tools."""

    output_dir: str = Field(default="workflow_outputs", description="Sandbox root for file_system")
    search_max_results: int = Field(default=5, ge=1, description="Default web_search result count")
    search_region: str = Field(default="us-en", description="Web search region")


class WorkflowConfig(BaseModel):
    """Configuration for a workflow."""

    id: str = Field(..., description="Workflow identifier")
    description: Optional[str] = Field(None, description="Workflow description")
    llm: LLMConfig = Field(default_factory=LLMConfig.from_env, description="Generation provider")
    agents: list[AgentConfig] = Field(..., min_length=1, description="Root agents")
    steps: list[StepConfig] = Field(..., min_length=1, description="Sequential steps")
    memory: MemoryConfig = Field(default_factory=MemoryConfig.from_env, description="Memory backend")
    tools: ToolsConfig = Field(default_factory=ToolsConfig, description="Built-in tool settings")
    options: AgentOptions = Field(default_factory=AgentOptions, description="Run loop options")

    @field_validator("agents")
    @classmethod
    def _unique_agent_ids(cls, agents: list[AgentConfig]) -> list[AgentConfig]:
        seen: set[str] = set()
        for root in agents:
            for agent in root.walk():
                if agent.id in seen:
                    raise ValueError(f"Duplicate agent id: {agent.id}")
                seen.add(agent.id)
        return agents

    @model_validator(mode="after")
    def _steps_reference_root_agents(self) -> "WorkflowConfig":
        root_ids = {agent.id for agent in self.agents}
        for step in self.steps:
            if step.agent not in root_ids:
                raise ValueError(f"Step references unknown agent: {step.agent}")
        return self


def validate_workflow_config(data: dict[str, Any]) -> WorkflowConfig:
    """Validate workflow configuration data.

    Args:
        data: Raw configuration dictionary

    Returns:
        Validated WorkflowConfig object

    Raises:
        ValidationError: If the configuration is invalid
    """
    return WorkflowConfig(**data)
