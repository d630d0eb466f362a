"""Unit tests for the OpenAI-compatible generation provider."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from auraflow.config.schemas import LLMConfig
from auraflow.errors import (
    ProviderAuthError,
    ProviderEmptyResponse,
    ProviderErrorKind,
    ProviderModelNotFound,
    ProviderRateLimited,
    ProviderServerError,
)
from auraflow.llm.openai_provider import (
    OpenAICompatibleProvider,
    parse_function_args,
    parse_openai_tool_calls,
    to_openai_tool,
)
from auraflow.models import ToolDefinition, ToolParameter

REQUEST = httpx.Request("POST", "https://api.example.com/v1/chat/completions")


def status_error(cls, status: int, message: str):
    return cls(message, response=httpx.Response(status, request=REQUEST), body=None)


def make_tool_call(call_id: str, name: str, arguments: str) -> MagicMock:
    tool_call = MagicMock()
    tool_call.id = call_id
    tool_call.function.name = name
    tool_call.function.arguments = arguments
    return tool_call


def make_completion(content=None, tool_calls=None) -> MagicMock:
    completion = MagicMock()
    completion.choices = [MagicMock()]
    completion.choices[0].message.content = content
    completion.choices[0].message.tool_calls = tool_calls
    return completion


@pytest.fixture
def llm_config():
    return LLMConfig(provider="openai", model="gpt-4o-mini", api_key_env="TEST_OPENAI_KEY")


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


@pytest.fixture
def provider(llm_config, mock_client):
    return OpenAICompatibleProvider(llm_config, client=mock_client)


class TestToolConversion:
    """Tests for tool definition and tool call mapping."""

    def test_definition_round_trip(self):
        """A definition survives conversion and comes back as a typed ToolCall."""
        definition = ToolDefinition(
            name="book_flight",
            description="Book a flight",
            parameters={
                "destination": ToolParameter(type="string", description="City"),
                "passengers": ToolParameter(type="number", description="Seats"),
                "refundable": ToolParameter(type="boolean", description="Refundable fare"),
            },
            required=["destination"],
        )

        wire = to_openai_tool(definition)

        assert wire["type"] == "function"
        assert wire["function"]["name"] == "book_flight"
        assert wire["function"]["parameters"]["required"] == ["destination"]
        assert wire["function"]["parameters"]["properties"]["passengers"]["type"] == "number"

        args = {"destination": "Lisbon", "passengers": 2, "refundable": True}
        calls = parse_openai_tool_calls([make_tool_call("call_1", "book_flight", json.dumps(args))])

        assert len(calls) == 1
        assert calls[0].id == "call_1"
        assert calls[0].name == "book_flight"
        assert calls[0].arguments == args
        assert isinstance(calls[0].arguments["passengers"], int)
        assert calls[0].arguments["refundable"] is True

    @pytest.mark.parametrize("raw", ["not json", "[1, 2]", "", None])
    def test_unparseable_arguments(self, raw):
        assert parse_function_args(raw) == {}

    def test_dict_arguments_pass_through(self):
        assert parse_function_args({"a": 1}) == {"a": 1}


@pytest.mark.asyncio
class TestOpenAICompatibleProvider:
    """Tests for OpenAICompatibleProvider."""

    async def test_generate(self, provider, mock_client):
        mock_client.chat.completions.create.return_value = make_completion("Paris")

        assert await provider.generate("Capital of France?") == "Paris"

        params = mock_client.chat.completions.create.call_args.kwargs
        assert params["model"] == "gpt-4o-mini"
        assert params["messages"] == [{"role": "user", "content": "Capital of France?"}]
        assert "tools" not in params

    async def test_generate_with_tools_returns_calls(self, provider, mock_client):
        mock_client.chat.completions.create.return_value = make_completion(
            tool_calls=[
                make_tool_call("c1", "web_search", '{"query": "solar"}'),
                make_tool_call("c2", "file_system", '{"action": "list", "filePath": "."}'),
            ]
        )
        tools = [ToolDefinition(name="web_search", description="Search")]

        response = await provider.generate_with_tools("prompt", tools)

        assert response.is_tool_calls
        assert [c.name for c in response.calls] == ["web_search", "file_system"]
        params = mock_client.chat.completions.create.call_args.kwargs
        assert params["tool_choice"] == "auto"
        assert params["tools"][0]["function"]["name"] == "web_search"

    async def test_generate_with_tools_returns_text(self, provider, mock_client):
        mock_client.chat.completions.create.return_value = make_completion("Done")

        response = await provider.generate_with_tools("prompt", [])

        assert response.is_text
        assert response.content == "Done"
        assert "tools" not in mock_client.chat.completions.create.call_args.kwargs

    async def test_temperature_forwarded(self, mock_client):
        config = LLMConfig(provider="openai", model="m", temperature=0.2)
        mock_client.chat.completions.create.return_value = make_completion("ok")

        await OpenAICompatibleProvider(config, client=mock_client).generate("p")

        assert mock_client.chat.completions.create.call_args.kwargs["temperature"] == 0.2

    @pytest.mark.parametrize("completion", [make_completion(None), make_completion("")])
    async def test_empty_response(self, provider, mock_client, completion):
        mock_client.chat.completions.create.return_value = completion

        with pytest.raises(ProviderEmptyResponse):
            await provider.generate("p")

    async def test_no_choices(self, provider, mock_client):
        completion = MagicMock()
        completion.choices = []
        mock_client.chat.completions.create.return_value = completion

        with pytest.raises(ProviderEmptyResponse):
            await provider.generate_with_tools("p", [])

    @pytest.mark.parametrize(
        "error, expected, kind",
        [
            (status_error(openai.AuthenticationError, 401, "Invalid API Key"), ProviderAuthError, ProviderErrorKind.AUTH),
            (status_error(openai.NotFoundError, 404, "model_not_found"), ProviderModelNotFound, ProviderErrorKind.NOT_FOUND),
            (status_error(openai.RateLimitError, 429, "Rate limit reached"), ProviderRateLimited, ProviderErrorKind.RATE_LIMITED),
            (status_error(openai.InternalServerError, 503, "Service Unavailable"), ProviderServerError, ProviderErrorKind.SERVER),
            (openai.APIConnectionError(request=REQUEST), ProviderServerError, ProviderErrorKind.SERVER),
        ],
    )
    async def test_error_classification(self, provider, mock_client, error, expected, kind):
        mock_client.chat.completions.create.side_effect = error

        with pytest.raises(expected) as exc_info:
            await provider.generate("p")

        assert exc_info.value.kind == kind
        assert exc_info.value.provider == "openai"
        assert str(exc_info.value).startswith("LLM generation failed:")
        assert exc_info.value.__cause__ is error

    async def test_status_code_recorded(self, provider, mock_client):
        mock_client.chat.completions.create.side_effect = status_error(openai.RateLimitError, 429, "slow down")

        with pytest.raises(ProviderRateLimited) as exc_info:
            await provider.generate("p")

        assert exc_info.value.status_code == 429


class TestClientConstruction:
    """Tests for client construction from configuration."""

    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.delenv("GROQ_API_KEY", raising=False)

        with pytest.raises(ProviderAuthError, match="GROQ_API_KEY"):
            OpenAICompatibleProvider(LLMConfig(provider="groq"))

    def test_keyless_provider(self, monkeypatch):
        monkeypatch.delenv("OLLAMA_API_KEY", raising=False)

        with patch("auraflow.llm.openai_provider.AsyncOpenAI") as mock_openai:
            OpenAICompatibleProvider(LLMConfig(provider="ollama", model="llama3"))

        mock_openai.assert_called_once_with(base_url="http://localhost:11434/v1", api_key="not-needed")

    def test_endpoint_and_key(self, monkeypatch):
        monkeypatch.setenv("GROQ_API_KEY", "gsk_test")

        with patch("auraflow.llm.openai_provider.AsyncOpenAI") as mock_openai:
            OpenAICompatibleProvider(LLMConfig(provider="groq"))

        mock_openai.assert_called_once_with(base_url="https://api.groq.com/openai/v1", api_key="gsk_test")
