"""Unit tests for provider construction."""

import threading
from unittest.mock import MagicMock, patch

from auraflow.config.schemas import LLMConfig
from auraflow.llm import ProviderFactory, create_provider
from auraflow.llm.anthropic_provider import AnthropicProvider
from auraflow.llm.factory import mask_secret
from auraflow.llm.openai_provider import OpenAICompatibleProvider


class TestCreateProvider:
    """Tests for create_provider."""

    def test_openai_compatible_providers(self, monkeypatch):
        monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-test")

        provider = create_provider(LLMConfig(provider="deepseek", model="deepseek-chat"))

        assert isinstance(provider, OpenAICompatibleProvider)
        assert provider.provider_name == "deepseek"
        assert provider.model_name == "deepseek-chat"

    def test_anthropic(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")

        provider = create_provider(LLMConfig(provider="anthropic", model="claude-sonnet-4-5"))

        assert isinstance(provider, AnthropicProvider)


class TestProviderFactory:
    """Tests for ProviderFactory."""

    def test_lazy_construction(self):
        with patch("auraflow.llm.factory.create_provider") as mock_create:
            factory = ProviderFactory(LLMConfig(provider="openai"))

            assert not factory.initialized
            mock_create.assert_not_called()

            provider = factory.get()

        assert factory.initialized
        assert provider is mock_create.return_value

    def test_constructed_once(self):
        with patch("auraflow.llm.factory.create_provider", return_value=MagicMock()) as mock_create:
            factory = ProviderFactory(LLMConfig(provider="openai"))
            results = []

            threads = [threading.Thread(target=lambda: results.append(factory.get())) for _ in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        assert mock_create.call_count == 1
        assert len({id(r) for r in results}) == 1

    def test_init_banner_logged_once(self, caplog):
        with patch("auraflow.llm.factory.create_provider", return_value=MagicMock()):
            factory = ProviderFactory(LLMConfig(provider="openai", model="gpt-4o"))
            with caplog.at_level("INFO", logger="auraflow.llm.factory"):
                factory.get()
                factory.get()

        banners = [r for r in caplog.records if "Generation provider initialized" in r.getMessage()]
        assert len(banners) == 1
        assert "gpt-4o" in banners[0].getMessage()

    def test_prebuilt_provider(self):
        provider = MagicMock()
        provider.config = LLMConfig(provider="ollama")

        factory = ProviderFactory(provider=provider)

        assert factory.initialized
        assert factory.get() is provider
        assert factory.config.provider == "ollama"


class TestMaskSecret:
    """Tests for mask_secret."""

    def test_mask(self):
        assert mask_secret("sk-1234567890abcdef") == "sk-12345..."

    def test_empty(self):
        assert mask_secret("") == "(not set)"
