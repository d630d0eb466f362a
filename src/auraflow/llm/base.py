"""Provider-agnostic generation contract for AuraFlow.

Every vendor binding implements ``GenerationProvider``. The agent run loop only
ever talks to this interface, so providers are interchangeable and mockable.
"""

from abc import ABC, abstractmethod
from typing import NoReturn

from ..config.schemas import LLMConfig
from ..errors import PROVIDER_ERRORS, ProviderEmptyResponse, ProviderErrorKind
from ..models import GenerationResponse, ToolDefinition
from ..utils.logging import get_logger

logger = get_logger(__name__)


class GenerationProvider(ABC):
    """Abstract base class for generation providers.

    Subclasses map their vendor's wire shapes to ``GenerationResponse`` and
    may extend ``ERROR_MARKERS`` with vendor-specific failure strings.
    """

    # kind -> lowercase substrings that identify it in a vendor error message
    ERROR_MARKERS: dict[ProviderErrorKind, tuple[str, ...]] = {}

    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    @property
    def provider_name(self) -> str:
        return self.config.provider

    @property
    def model_name(self) -> str:
        return self.config.model

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Generate a plain text completion.

        Args:
            prompt: Full prompt text

        Returns:
            Generated text (never empty)

        Raises:
            ProviderError: On any provider failure
        """

    @abstractmethod
    async def generate_with_tools(self, prompt: str, tools: list[ToolDefinition]) -> GenerationResponse:
        """Generate a completion that may request tool calls.

        Args:
            prompt: Full prompt text
            tools: Tools the model may call

        Returns:
            Text or tool-call response

        Raises:
            ProviderError: On any provider failure
        """

    def classify_error(self, error: Exception) -> ProviderErrorKind:
        """Classify a vendor exception into a provider error kind.

        Args:
            error: Exception raised by the vendor SDK

        Returns:
            Error kind
        """
        status = getattr(error, "status_code", None) or getattr(error, "status", None)
        if isinstance(status, int):
            if status in (401, 403):
                return ProviderErrorKind.AUTH
            if status == 404:
                return ProviderErrorKind.NOT_FOUND
            if status == 429:
                return ProviderErrorKind.RATE_LIMITED
            if status >= 500:
                return ProviderErrorKind.SERVER

        message = str(error).lower()
        for kind, markers in self.ERROR_MARKERS.items():
            if any(marker in message for marker in markers):
                return kind
        return ProviderErrorKind.UNKNOWN

    def describe_error(self, kind: ProviderErrorKind, error: Exception) -> str:
        if kind == ProviderErrorKind.NOT_FOUND:
            return (
                f"Model '{self.model_name}' not found or not available with your API key. "
                f"Check your {self.provider_name} account and model name."
            )
        if kind == ProviderErrorKind.AUTH:
            return (
                f"Invalid or expired {self.provider_name} API key. "
                f"Please check your {self.config.resolved_api_key_env}."
            )
        if kind == ProviderErrorKind.RATE_LIMITED:
            return "Rate limit exceeded. Please try again later."
        if kind == ProviderErrorKind.SERVER:
            return f"{self.provider_name} API server error. Please try again later."
        return str(error) or type(error).__name__

    def raise_provider_error(self, error: Exception) -> NoReturn:
        """Classify, log and re-raise a vendor exception as a ProviderError.

        Args:
            error: Exception raised by the vendor SDK

        Raises:
            ProviderError: Always
        """
        kind = self.classify_error(error)
        status = getattr(error, "status_code", None)
        message = self.describe_error(kind, error)
        logger.error(f"{self.provider_name} API error [{kind.value}]: {message} (status: {status or 'unknown'})")
        raise PROVIDER_ERRORS[kind](
            f"LLM generation failed: {message}",
            provider=self.provider_name,
            status_code=status,
        ) from error

    def empty_response(self) -> ProviderEmptyResponse:
        logger.error(f"Empty response from {self.provider_name} API (model: {self.model_name})")
        return ProviderEmptyResponse(
            f"Empty response from {self.provider_name} API",
            provider=self.provider_name,
        )
