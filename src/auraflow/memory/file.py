"""File-based memory provider for AuraFlow.

Stores workflow execution history as one JSON file per workflow.
"""

import asyncio
import json
from pathlib import Path

from ..models import MemoryEntry
from ..utils.logging import get_logger
from .base import ALL_WORKFLOWS, MemoryProvider

logger = get_logger(__name__)


class FileMemoryProvider(MemoryProvider):
    """Persistent memory backed by JSON files.

    Queries are a case-insensitive substring match on content and agent ID,
    returned most recent first.
    """

    def __init__(self, storage_dir: str | Path = "./auraflow_memory") -> None:
        self.storage_dir = Path(storage_dir).resolve()
        self._lock = asyncio.Lock()

    def _workflow_path(self, workflow_id: str) -> Path:
        return self.storage_dir / f"{workflow_id}.json"

    def _load(self, path: Path) -> list[MemoryEntry]:
        if not path.exists():
            return []
        with open(path, "r", encoding="utf-8") as f:
            return [MemoryEntry.from_payload(item) for item in json.load(f)]

    def _store(self, workflow_id: str, entries: list[MemoryEntry]) -> None:
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        with open(self._workflow_path(workflow_id), "w", encoding="utf-8") as f:
            json.dump([entry.to_payload() for entry in entries], f, indent=2, ensure_ascii=False)

    async def save(self, entry: MemoryEntry) -> None:
        async with self._lock:
            entries = self._load(self._workflow_path(entry.workflow_id))
            entries.append(entry)
            self._store(entry.workflow_id, entries)
        logger.debug(f"Saved memory entry for {entry.agent_id} (workflow {entry.workflow_id}, step {entry.step})")

    async def query(self, query: str, workflow_id: str = ALL_WORKFLOWS, limit: int = 10) -> list[MemoryEntry]:
        if workflow_id == ALL_WORKFLOWS:
            paths = sorted(self.storage_dir.glob("*.json")) if self.storage_dir.exists() else []
            entries = [entry for path in paths for entry in self._load(path)]
            entries.sort(key=lambda entry: entry.timestamp)
        else:
            entries = self._load(self._workflow_path(workflow_id))

        needle = query.lower()
        matched = [
            entry
            for entry in entries
            if needle in entry.content.lower() or needle in entry.agent_id.lower()
        ]
        return list(reversed(matched[-limit:])) if limit > 0 else []

    async def get_all_entries(self, workflow_id: str) -> list[MemoryEntry]:
        return self._load(self._workflow_path(workflow_id))

    async def clear_workflow(self, workflow_id: str) -> None:
        self._workflow_path(workflow_id).unlink(missing_ok=True)
