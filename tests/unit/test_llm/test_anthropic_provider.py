"""Unit tests for the Anthropic generation provider."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest

from auraflow.config.schemas import LLMConfig
from auraflow.errors import ProviderAuthError, ProviderEmptyResponse, ProviderRateLimited
from auraflow.llm.anthropic_provider import AnthropicProvider, parse_anthropic_content, to_anthropic_tool
from auraflow.models import ToolDefinition, ToolParameter

REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def text_block(text: str):
    return SimpleNamespace(type="text", text=text)


def tool_block(block_id: str, name: str, arguments: dict):
    return SimpleNamespace(type="tool_use", id=block_id, name=name, input=arguments)


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.messages.create = AsyncMock()
    return client


@pytest.fixture
def provider(mock_client):
    config = LLMConfig(provider="anthropic", model="claude-sonnet-4-5", max_tokens=1024)
    return AnthropicProvider(config, client=mock_client)


class TestContentMapping:
    """Tests for Messages API conversion helpers."""

    def test_to_anthropic_tool(self):
        definition = ToolDefinition(
            name="web_search",
            description="Search the web",
            parameters={"query": ToolParameter(type="string")},
            required=["query"],
        )

        tool = to_anthropic_tool(definition)

        assert tool["name"] == "web_search"
        assert tool["input_schema"]["type"] == "object"
        assert tool["input_schema"]["required"] == ["query"]

    def test_parse_mixed_content(self):
        text, calls = parse_anthropic_content(
            [
                text_block("Let me look that up. "),
                tool_block("tu_1", "web_search", {"query": "solar", "maxResults": 3}),
                tool_block("tu_2", "file_system", {"action": "list", "filePath": "."}),
            ]
        )

        assert text == "Let me look that up. "
        assert [c.id for c in calls] == ["tu_1", "tu_2"]
        assert calls[0].arguments == {"query": "solar", "maxResults": 3}


@pytest.mark.asyncio
class TestAnthropicProvider:
    """Tests for AnthropicProvider."""

    async def test_generate(self, provider, mock_client):
        mock_client.messages.create.return_value = SimpleNamespace(content=[text_block("Hello")])

        assert await provider.generate("Hi") == "Hello"

        params = mock_client.messages.create.call_args.kwargs
        assert params["model"] == "claude-sonnet-4-5"
        assert params["max_tokens"] == 1024
        assert params["messages"] == [{"role": "user", "content": "Hi"}]

    async def test_tool_calls_take_precedence(self, provider, mock_client):
        mock_client.messages.create.return_value = SimpleNamespace(
            content=[text_block("Searching"), tool_block("tu_1", "web_search", {"query": "q"})]
        )

        response = await provider.generate_with_tools("p", [ToolDefinition(name="web_search", description="d")])

        assert response.is_tool_calls
        assert response.calls[0].name == "web_search"
        assert mock_client.messages.create.call_args.kwargs["tools"][0]["name"] == "web_search"

    async def test_empty_content(self, provider, mock_client):
        mock_client.messages.create.return_value = SimpleNamespace(content=[])

        with pytest.raises(ProviderEmptyResponse):
            await provider.generate_with_tools("p", [])

    async def test_rate_limit(self, provider, mock_client):
        mock_client.messages.create.side_effect = anthropic.RateLimitError(
            "rate_limit_error", response=httpx.Response(429, request=REQUEST), body=None
        )

        with pytest.raises(ProviderRateLimited) as exc_info:
            await provider.generate("p")

        assert exc_info.value.provider == "anthropic"
        assert exc_info.value.status_code == 429


class TestClientConstruction:
    """Tests for client construction from configuration."""

    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        with pytest.raises(ProviderAuthError, match="ANTHROPIC_API_KEY"):
            AnthropicProvider(LLMConfig(provider="anthropic"))
