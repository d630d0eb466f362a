"""Anthropic generation provider for AuraFlow."""

from typing import Any, Optional

import anthropic
from anthropic import AsyncAnthropic

from ..config.schemas import LLMConfig
from ..errors import ProviderAuthError, ProviderErrorKind
from ..models import GenerationResponse, ToolCall, ToolDefinition
from ..utils.logging import get_logger
from .base import GenerationProvider

logger = get_logger(__name__)


def to_anthropic_tool(definition: ToolDefinition) -> dict[str, Any]:
    """Convert a tool definition to the Messages API tool format.

    Args:
        definition: Tool definition

    Returns:
        Anthropic tool dictionary
    """
    return {
        "name": definition.name,
        "description": definition.description,
        "input_schema": definition.to_json_schema(),
    }


def parse_anthropic_content(blocks: list[Any]) -> tuple[str, list[ToolCall]]:
    """Split Messages API content blocks into text and tool calls.

    Args:
        blocks: ``response.content``

    Returns:
        Concatenated text and tool calls in block order
    """
    text_parts: list[str] = []
    calls: list[ToolCall] = []
    for block in blocks:
        if block.type == "text":
            text_parts.append(block.text)
        elif block.type == "tool_use":
            calls.append(ToolCall(id=block.id, name=block.name, arguments=dict(block.input or {})))
    return "".join(text_parts), calls


class AnthropicProvider(GenerationProvider):
    """Generation provider for the Anthropic Messages API."""

    ERROR_MARKERS = {
        ProviderErrorKind.AUTH: ("authentication_error", "invalid x-api-key"),
        ProviderErrorKind.NOT_FOUND: ("not_found_error",),
        ProviderErrorKind.RATE_LIMITED: ("rate_limit_error",),
        ProviderErrorKind.SERVER: ("overloaded_error", "api_error"),
    }

    def __init__(self, config: LLMConfig, client: Optional[AsyncAnthropic] = None) -> None:
        """Initialize the provider.

        Args:
            config: LLM configuration
            client: Pre-built client (constructed from config if None)

        Raises:
            ProviderAuthError: If no API key is set
        """
        super().__init__(config)

        if client is None:
            api_key = config.get_api_key()
            if not api_key:
                raise ProviderAuthError(
                    f"{config.resolved_api_key_env} environment variable is not set.",
                    provider=config.provider,
                )
            client = AsyncAnthropic(api_key=api_key, base_url=config.resolved_endpoint)
        self.client = client

    def _request_params(self, prompt: str) -> dict[str, Any]:
        params: dict[str, Any] = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if self.config.temperature is not None:
            params["temperature"] = self.config.temperature
        return params

    async def _complete(self, params: dict[str, Any]) -> tuple[str, list[ToolCall]]:
        logger.debug(f"Using model: {self.model_name}")
        try:
            response = await self.client.messages.create(**params)
        except anthropic.APIError as e:
            self.raise_provider_error(e)
        return parse_anthropic_content(response.content)

    def classify_error(self, error: Exception) -> ProviderErrorKind:
        if isinstance(error, anthropic.APIConnectionError):
            return ProviderErrorKind.SERVER
        return super().classify_error(error)

    async def generate(self, prompt: str) -> str:
        text, _ = await self._complete(self._request_params(prompt))
        if not text:
            raise self.empty_response()
        return text

    async def generate_with_tools(self, prompt: str, tools: list[ToolDefinition]) -> GenerationResponse:
        params = self._request_params(prompt)
        if tools:
            params["tools"] = [to_anthropic_tool(tool) for tool in tools]

        text, calls = await self._complete(params)
        if calls:
            return GenerationResponse.tool_calls(calls)
        if text:
            return GenerationResponse.text(text)
        raise self.empty_response()
