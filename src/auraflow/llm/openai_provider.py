"""OpenAI-compatible generation provider for AuraFlow.

Covers OpenAI, Groq, DeepSeek, Ollama and custom endpoints that speak the
chat completions API.
"""

import json
from typing import Any, Optional

import openai
from openai import AsyncOpenAI

from ..config.schemas import LLMConfig
from ..errors import ProviderAuthError, ProviderErrorKind
from ..models import GenerationResponse, ToolCall, ToolDefinition
from ..utils.logging import get_logger
from .base import GenerationProvider

logger = get_logger(__name__)


def to_openai_tool(definition: ToolDefinition) -> dict[str, Any]:
    """Convert a tool definition to the chat completions function format.

    Args:
        definition: Tool definition

    Returns:
        OpenAI tool dictionary
    """
    return {
        "type": "function",
        "function": {
            "name": definition.name,
            "description": definition.description,
            "parameters": definition.to_json_schema(),
        },
    }


def parse_function_args(args: Any) -> dict[str, Any]:
    """Parse function arguments, which arrive as a JSON string.

    Args:
        args: JSON string (or an already-decoded mapping)

    Returns:
        Parsed arguments dictionary ({} if unparseable)
    """
    if isinstance(args, dict):
        return args
    if not args:
        return {}
    try:
        parsed = json.loads(args)
    except json.JSONDecodeError:
        logger.warning(f"Failed to parse function arguments: {args}")
        return {}
    if not isinstance(parsed, dict):
        logger.warning(f"Function arguments are not an object: {args}")
        return {}
    return parsed


def parse_openai_tool_calls(tool_calls: Optional[list[Any]]) -> list[ToolCall]:
    """Map chat completions tool calls to ToolCall objects.

    Args:
        tool_calls: ``message.tool_calls`` from a completion

    Returns:
        Tool calls in the order the provider emitted them
    """
    return [
        ToolCall(
            id=tc.id,
            name=tc.function.name,
            arguments=parse_function_args(tc.function.arguments),
        )
        for tc in (tool_calls or [])
    ]


class OpenAICompatibleProvider(GenerationProvider):
    """Generation provider for chat-completions compatible APIs."""

    ERROR_MARKERS = {
        ProviderErrorKind.AUTH: ("invalid api key", "invalid_api_key", "incorrect api key"),
        ProviderErrorKind.NOT_FOUND: ("model_not_found", "does not exist", "decommissioned"),
        ProviderErrorKind.RATE_LIMITED: ("rate limit", "rate_limit_exceeded", "insufficient_quota"),
        ProviderErrorKind.SERVER: ("internal server error", "service unavailable", "bad gateway"),
    }

    def __init__(self, config: LLMConfig, client: Optional[AsyncOpenAI] = None) -> None:
        """Initialize the provider.

        Args:
            config: LLM configuration
            client: Pre-built client (constructed from config if None)

        Raises:
            ProviderAuthError: If the provider needs an API key and none is set
        """
        super().__init__(config)

        if client is None:
            api_key = config.get_api_key()
            if not api_key and config.requires_api_key:
                raise ProviderAuthError(
                    f"{config.resolved_api_key_env} environment variable is not set. "
                    "Please configure it in your .env file or set it as an environment variable.",
                    provider=config.provider,
                )
            client = AsyncOpenAI(
                base_url=config.resolved_endpoint,
                api_key=api_key or "not-needed",  # Ollama doesn't need an API key
            )
        self.client = client

    def _request_params(self, prompt: str) -> dict[str, Any]:
        params: dict[str, Any] = {
            "model": self.config.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.config.max_tokens,
        }
        if self.config.temperature is not None:
            params["temperature"] = self.config.temperature
        return params

    async def _complete(self, params: dict[str, Any]) -> Any:
        logger.debug(f"Using model: {self.model_name}")
        try:
            response = await self.client.chat.completions.create(**params)
        except openai.APIError as e:
            self.raise_provider_error(e)
        if not response.choices:
            raise self.empty_response()
        return response.choices[0].message

    def classify_error(self, error: Exception) -> ProviderErrorKind:
        if isinstance(error, openai.APIConnectionError):
            return ProviderErrorKind.SERVER
        return super().classify_error(error)

    async def generate(self, prompt: str) -> str:
        message = await self._complete(self._request_params(prompt))
        if not message.content:
            raise self.empty_response()
        return message.content

    async def generate_with_tools(self, prompt: str, tools: list[ToolDefinition]) -> GenerationResponse:
        params = self._request_params(prompt)
        if tools:
            params["tools"] = [to_openai_tool(tool) for tool in tools]
            params["tool_choice"] = "auto"

        message = await self._complete(params)
        calls = parse_openai_tool_calls(message.tool_calls)
        if calls:
            return GenerationResponse.tool_calls(calls)
        if message.content:
            return GenerationResponse.text(message.content)
        raise self.empty_response()
