"""Embedding functions for vector memory."""

from typing import Optional, Protocol

from openai import AsyncOpenAI


class Embedder(Protocol):
    """Async callable turning text into a vector."""

    async def __call__(self, text: str) -> list[float]: ...


class OpenAIEmbedder:
    """Embeds text with the OpenAI embeddings API."""

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self.model = model
        self.client = client or AsyncOpenAI(api_key=api_key)

    async def __call__(self, text: str) -> list[float]:
        response = await self.client.embeddings.create(model=self.model, input=text)
        return list(response.data[0].embedding)
