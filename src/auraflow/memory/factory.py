"""Memory backend construction from configuration."""

import os
from typing import Optional

from ..config.schemas import MemoryConfig
from ..errors import MemoryUnavailable
from ..utils.logging import get_logger
from .base import MemoryProvider

logger = get_logger(__name__)


def create_memory_provider(config: MemoryConfig) -> Optional[MemoryProvider]:
    """Create the configured memory backend.

    Args:
        config: Memory configuration

    Returns:
        MemoryProvider, or None when the backend is "none"

    Raises:
        MemoryUnavailable: If the qdrant backend is selected without URL/key
    """
    if config.backend == "none":
        return None

    if config.backend == "file":
        from .file import FileMemoryProvider

        logger.info(f"Memory backend initialized: file ({config.storage_dir})")
        return FileMemoryProvider(config.storage_dir)

    url = os.environ.get(config.url_env)
    api_key = os.environ.get(config.api_key_env)
    if not url or not api_key:
        raise MemoryUnavailable(
            f"Qdrant memory backend is enabled but {config.url_env} and/or {config.api_key_env} are not set. "
            "Please set these environment variables or disable the memory backend."
        )

    from qdrant_client import AsyncQdrantClient

    from .embeddings import OpenAIEmbedder
    from .qdrant import QdrantMemoryProvider

    logger.info(f"Memory backend initialized: qdrant (collection: {config.collection})")
    return QdrantMemoryProvider(
        client=AsyncQdrantClient(url=url, api_key=api_key),
        embedder=OpenAIEmbedder(
            model=config.embedding_model,
            api_key=os.environ.get(config.embedding_api_key_env),
        ),
        collection=config.collection,
        vector_size=config.vector_size,
    )
