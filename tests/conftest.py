"""Test configuration and fixtures for AuraFlow tests.

This module provides shared fixtures and configuration for all tests.
"""

from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import load_dotenv

from auraflow.config.schemas import LLMConfig
from auraflow.llm import GenerationProvider
from auraflow.memory import ALL_WORKFLOWS, MemoryProvider
from auraflow.models import GenerationResponse, MemoryEntry, ToolDefinition
from auraflow.tools import ToolInvoker, ToolRegistry, ToolResult

# Load environment variables
load_dotenv()


class ScriptedProvider(GenerationProvider):
    """Generation provider that replays scripted responses.

    The last scripted response repeats once the script is exhausted. Every
    prompt is recorded.
    """

    def __init__(
        self,
        responses: Optional[list[str]] = None,
        tool_responses: Optional[list[GenerationResponse]] = None,
    ) -> None:
        super().__init__(LLMConfig(provider="custom", model="mock-model"))
        self.responses = list(responses or ["Scripted response"])
        self.tool_responses = list(tool_responses or [])
        self.prompts: list[str] = []
        self.generate_calls = 0
        self.tool_generate_calls = 0
        self.last_tools: list[ToolDefinition] = []

    def _next(self, script: list[Any]) -> Any:
        return script.pop(0) if len(script) > 1 else script[0]

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        self.generate_calls += 1
        return self._next(self.responses)

    async def generate_with_tools(self, prompt: str, tools: list[ToolDefinition]) -> GenerationResponse:
        self.prompts.append(prompt)
        self.tool_generate_calls += 1
        self.last_tools = tools
        if not self.tool_responses:
            return GenerationResponse.text(self._next(self.responses))
        return self._next(self.tool_responses)

    @property
    def total_calls(self) -> int:
        return self.generate_calls + self.tool_generate_calls


class RecordingMemory(MemoryProvider):
    """In-memory provider that records saves and queries."""

    def __init__(self, entries: Optional[list[MemoryEntry]] = None) -> None:
        self.entries = list(entries or [])
        self.queries: list[tuple[str, str, int]] = []

    async def save(self, entry: MemoryEntry) -> None:
        self.entries.append(entry)

    async def query(self, query: str, workflow_id: str = ALL_WORKFLOWS, limit: int = 5) -> list[MemoryEntry]:
        self.queries.append((query, workflow_id, limit))
        return self.entries[:limit]


class EchoTool:
    """Tool that returns its arguments."""

    name = "echo"
    description = "Echo the given text"
    parameters = {
        "type": "object",
        "properties": {"text": {"type": "string", "description": "Text to echo"}},
        "required": ["text"],
    }

    async def execute(self, **kwargs) -> ToolResult:
        return ToolResult(success=True, data=kwargs.get("text"))


class FailingTool:
    """Tool that always raises."""

    name = "broken"
    description = "Always fails"
    parameters = {"type": "object", "properties": {}, "required": []}

    async def execute(self, **kwargs) -> ToolResult:
        raise RuntimeError("disk on fire")


@pytest.fixture
def scripted_provider():
    """Factory for scripted generation providers."""
    return ScriptedProvider


@pytest.fixture
def recording_memory():
    """Empty recording memory provider."""
    return RecordingMemory()


@pytest.fixture
def failing_memory():
    """Memory provider whose save and query always raise."""
    memory = MagicMock(spec=MemoryProvider)
    memory.query = AsyncMock(side_effect=RuntimeError("vector store unreachable"))
    memory.save = AsyncMock(side_effect=RuntimeError("vector store unreachable"))
    return memory


@pytest.fixture
def tool_registry():
    """Registry with the echo and failing test tools."""
    registry = ToolRegistry()
    registry.register(EchoTool())
    registry.register(FailingTool())
    return registry


@pytest.fixture
def tool_invoker(tool_registry):
    """Invoker over the test tool registry."""
    return ToolInvoker(tool_registry)


@pytest.fixture
def output_dir(tmp_path):
    """Sandbox root for file_system tool tests."""
    root = tmp_path / "workflow_outputs"
    root.mkdir()
    return root


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (multiple components, no network)"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (no external dependencies)"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test location."""
    for item in items:
        # Mark integration tests
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        # Mark unit tests
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
