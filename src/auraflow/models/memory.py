"""Memory entry entity for AuraFlow."""

import time
from datetime import datetime

from pydantic import BaseModel, Field


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


class MemoryEntry(BaseModel):
    """Unit persisted and retrieved by a memory provider.

    Attributes:
        agent_id: Agent that produced the content
        workflow_id: Workflow execution the content belongs to
        step: Step ordinal within the workflow
        content: Stored text
        timestamp: Creation time as epoch milliseconds
    """

    agent_id: str = Field(..., description="Producing agent ID")
    workflow_id: str = Field(..., description="Workflow execution ID")
    step: int = Field(..., ge=0, description="Step ordinal")
    content: str = Field(..., description="Stored text")
    timestamp: int = Field(default_factory=now_ms, description="Epoch milliseconds")

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp / 1000)

    def to_payload(self) -> dict:
        """Serialize with the camelCase keys used by stored payloads.

        Returns:
            Payload dictionary
        """
        return {
            "agentId": self.agent_id,
            "workflowId": self.workflow_id,
            "step": self.step,
            "content": self.content,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_payload(cls, payload: dict) -> "MemoryEntry":
        """Deserialize a stored payload.

        Args:
            payload: Dictionary with camelCase keys

        Returns:
            MemoryEntry instance
        """
        return cls(
            agent_id=payload["agentId"],
            workflow_id=payload["workflowId"],
            step=payload["step"],
            content=payload["content"],
            timestamp=payload["timestamp"],
        )
