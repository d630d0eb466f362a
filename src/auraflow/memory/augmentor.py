"""Memory augmentation for agent prompts.

Retrieval is best-effort: any failure is logged and the prompt is built
without a memory block.
"""

from ..models import Context, MemoryEntry
from ..utils.logging import get_logger
from .base import ALL_WORKFLOWS

logger = get_logger(__name__)

# Number of memories folded into a prompt
QUERY_LIMIT = 3

# Characters of the latest message used in the retrieval query
CONTEXT_CHARS = 200


class MemoryAugmentor:
    """Retrieves relevant past memories and renders them for a prompt."""

    def __init__(self, limit: int = QUERY_LIMIT, context_chars: int = CONTEXT_CHARS) -> None:
        self.limit = limit
        self.context_chars = context_chars

    def build_query(self, role: str, goal: str, context: Context) -> str:
        last = context.last_message()
        recent = last.content[: self.context_chars] if last else ""
        return f"Role: {role}, Goal: {goal}. Context: {recent}"

    async def retrieve(self, agent_id: str, role: str, goal: str, context: Context) -> list[MemoryEntry]:
        """Query the context's memory provider across all workflows.

        Args:
            agent_id: Querying agent, for logging
            role: Agent role
            goal: Agent goal
            context: Shared context carrying the memory handle

        Returns:
            Retrieved entries ([] if there is no provider or retrieval fails)
        """
        if context.memory is None:
            return []

        try:
            logger.info(f"Agent {agent_id} querying memory for context...")
            memories = await context.memory.query(self.build_query(role, goal, context), ALL_WORKFLOWS, self.limit)
        except Exception as e:
            logger.warning(f"Failed to query memory: {e}")
            return []

        memories = list(memories or [])
        if memories:
            logger.info(f"Injected {len(memories)} memories into prompt for agent {agent_id}")
        return memories

    @staticmethod
    def render(memories: list[MemoryEntry]) -> str:
        """Render memories as a labeled prompt block.

        Args:
            memories: Retrieved entries

        Returns:
            Memory block, or "" when there are none
        """
        if not memories:
            return ""
        body = "\n\n".join(
            f"Memory {i} (from Agent {memory.agent_id} at {memory.created_at.isoformat()}): {memory.content}"
            for i, memory in enumerate(memories, start=1)
        )
        return (
            "### Relevant Past Memories\n"
            "The following information was retrieved from your long-term memory "
            "and may be relevant to your current task:\n\n"
            f"{body}\n"
        )

    async def augment(self, agent_id: str, role: str, goal: str, context: Context) -> str:
        """Retrieve and render memories for a prompt.

        Any failure in retrieval or rendering is logged and yields "".

        Args:
            agent_id: Querying agent, for logging
            role: Agent role
            goal: Agent goal
            context: Shared context carrying the memory handle

        Returns:
            Memory block, or "" when there is none
        """
        try:
            return self.render(await self.retrieve(agent_id, role, goal, context))
        except Exception as e:
            logger.warning(f"Failed to render memories for agent {agent_id}: {e}")
            return ""
