"""Qdrant vector memory provider for AuraFlow."""

from typing import Optional

from qdrant_client import AsyncQdrantClient
from qdrant_client.models import Distance, FieldCondition, Filter, MatchValue, PointStruct, VectorParams

from ..models import MemoryEntry
from ..utils.id import generate_uuid_with_dashes
from ..utils.logging import get_logger
from .base import ALL_WORKFLOWS, MemoryProvider
from .embeddings import Embedder

logger = get_logger(__name__)


class QdrantMemoryProvider(MemoryProvider):
    """Semantic memory stored in a Qdrant collection.

    Usage:
        memory = QdrantMemoryProvider(
            client=AsyncQdrantClient(url=url, api_key=key),
            embedder=OpenAIEmbedder(),
        )
    """

    def __init__(
        self,
        client: AsyncQdrantClient,
        embedder: Embedder,
        collection: str = "auraflow_memory",
        vector_size: int = 1536,
    ) -> None:
        self.client = client
        self.embedder = embedder
        self.collection = collection
        self.vector_size = vector_size
        self._collection_ready = False

    async def _ensure_collection(self) -> None:
        if self._collection_ready:
            return
        if not await self.client.collection_exists(self.collection):
            logger.info(f"Creating Qdrant collection: {self.collection}")
            await self.client.create_collection(
                collection_name=self.collection,
                vectors_config=VectorParams(size=self.vector_size, distance=Distance.COSINE),
            )
        self._collection_ready = True

    async def save(self, entry: MemoryEntry) -> None:
        await self._ensure_collection()
        vector = await self.embedder(entry.content)
        await self.client.upsert(
            collection_name=self.collection,
            wait=True,
            points=[PointStruct(id=generate_uuid_with_dashes(), vector=vector, payload=entry.to_payload())],
        )

    async def query(self, query: str, workflow_id: str = ALL_WORKFLOWS, limit: int = 5) -> list[MemoryEntry]:
        await self._ensure_collection()
        vector = await self.embedder(query)

        query_filter: Optional[Filter] = None
        if workflow_id and workflow_id != ALL_WORKFLOWS:
            query_filter = Filter(must=[FieldCondition(key="workflowId", match=MatchValue(value=workflow_id))])

        response = await self.client.query_points(
            collection_name=self.collection,
            query=vector,
            limit=limit,
            with_payload=True,
            query_filter=query_filter,
        )
        return [MemoryEntry.from_payload(point.payload) for point in response.points if point.payload]

    async def clear(self) -> None:
        """Drop and recreate the collection."""
        await self.client.delete_collection(self.collection)
        self._collection_ready = False
        await self._ensure_collection()
