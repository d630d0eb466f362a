"""Memory search over a configured provider.

Backs the ``auraflow memory query`` command.
"""

from typing import Optional

from ..models import MemoryEntry
from ..utils.logging import get_logger
from .base import ALL_WORKFLOWS, MemoryProvider

logger = get_logger(__name__)


class MemorySearch:
    """Retrieval queries over persisted workflow memories."""

    def __init__(self, provider: MemoryProvider) -> None:
        self.provider = provider

    async def search(self, query: str, workflow_id: Optional[str] = None, limit: int = 5) -> list[MemoryEntry]:
        """Search memories, optionally within one workflow.

        Args:
            query: Natural language query
            workflow_id: Workflow to restrict to (all workflows if None)
            limit: Maximum number of results

        Returns:
            Entries in relevance order
        """
        scope = workflow_id or ALL_WORKFLOWS
        logger.info(f"Memory query: '{query}' (scope: {scope}, limit: {limit})")
        results = await self.provider.query(query, scope, limit)
        logger.info(f"Found {len(results)} relevant memories")
        return results

    async def search_agent(
        self, query: str, agent_id: str, workflow_id: Optional[str] = None, limit: int = 5
    ) -> list[MemoryEntry]:
        """Search memories produced by one agent.

        The workflow scope is applied by the provider, before the agent filter.

        Args:
            query: Natural language query
            agent_id: Agent to restrict to
            workflow_id: Workflow to restrict to (all workflows if None)
            limit: Number of candidates fetched before filtering

        Returns:
            Matching entries in relevance order
        """
        results = await self.search(query, workflow_id=workflow_id, limit=limit)
        return [entry for entry in results if entry.agent_id == agent_id]
