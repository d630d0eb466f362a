"""Memory provider contract for AuraFlow."""

from abc import ABC, abstractmethod

from ..models import MemoryEntry

# Workflow scope that disables workflow filtering on query
ALL_WORKFLOWS = "all-workflows"


class MemoryProvider(ABC):
    """Abstract base class for memory backends.

    Implementations are responsible for their own concurrency safety.
    """

    @abstractmethod
    async def save(self, entry: MemoryEntry) -> None:
        """Persist a memory entry.

        Args:
            entry: Entry to persist
        """

    @abstractmethod
    async def query(self, query: str, workflow_id: str, limit: int) -> list[MemoryEntry]:
        """Retrieve entries relevant to a query.

        Args:
            query: Natural language query
            workflow_id: Workflow to search, or ALL_WORKFLOWS
            limit: Maximum number of entries

        Returns:
            Entries ordered by provider-defined relevance
        """
