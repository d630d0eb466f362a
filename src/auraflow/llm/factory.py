"""Provider construction for AuraFlow.

Providers are built lazily, once per factory, on the first generation request.
"""

import threading
from typing import Optional

from ..config.schemas import LLMConfig
from ..utils.logging import get_logger
from .base import GenerationProvider

logger = get_logger(__name__)


def create_provider(config: LLMConfig) -> GenerationProvider:
    """Create the provider binding for a configuration.

    Args:
        config: LLM configuration

    Returns:
        GenerationProvider instance

    Raises:
        ProviderAuthError: If a required API key is missing
    """
    if config.provider == "anthropic":
        from .anthropic_provider import AnthropicProvider

        return AnthropicProvider(config)

    from .openai_provider import OpenAICompatibleProvider

    return OpenAICompatibleProvider(config)


def mask_secret(secret: str, visible: int = 8) -> str:
    if not secret:
        return "(not set)"
    return f"{secret[:visible]}..."


class ProviderFactory:
    """Lazily builds and caches a single provider.

    Agents in one tree share a factory so the provider is constructed, and its
    initialization banner logged, exactly once.
    """

    def __init__(self, config: Optional[LLMConfig] = None, provider: Optional[GenerationProvider] = None) -> None:
        """Initialize the factory.

        Args:
            config: LLM configuration (read from the environment if None)
            provider: Pre-built provider to hand out instead of constructing one
        """
        self.config = config or (provider.config if provider else LLMConfig.from_env())
        self._provider = provider
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._provider is not None

    def get(self) -> GenerationProvider:
        """Return the provider, constructing it on first use.

        Returns:
            GenerationProvider instance
        """
        if self._provider is None:
            with self._lock:
                if self._provider is None:
                    self._provider = create_provider(self.config)
                    logger.info(
                        f"Generation provider initialized: {self.config.provider} "
                        f"(model: {self.config.model}, "
                        f"key: {mask_secret(self.config.get_api_key())})"
                    )
        return self._provider
