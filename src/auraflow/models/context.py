"""Shared context entity for AuraFlow.

A Context is created once per workflow execution and shared by reference with
every agent that runs inside it. Its message log is append-only.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..utils.id import generate_message_id, generate_session_id, generate_workflow_id


class Message(BaseModel):
    """A message in the shared execution history.

    Attributes:
        id: Unique message ID
        agent_id: Agent (or "user") that produced the message
        content: Message text
        timestamp: Creation time
    """

    id: str = Field(default_factory=generate_message_id, description="Unique message ID")
    agent_id: str = Field(..., description="Producing agent ID")
    content: str = Field(..., description="Message content")
    timestamp: datetime = Field(default_factory=datetime.now, description="Message timestamp")


class Context(BaseModel):
    """Ordered message log and output store for one workflow execution.

    Attributes:
        messages: Append-only execution history
        outputs: Shared key/value outputs
        memory: Optional memory provider handle
        workflow_id: Workflow execution ID
        session_id: Session ID for log correlation
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    messages: list[Message] = Field(default_factory=list, description="Execution history")
    outputs: dict[str, Any] = Field(default_factory=dict, description="Shared outputs")
    memory: Optional[Any] = Field(None, description="Memory provider handle")
    workflow_id: str = Field(default_factory=generate_workflow_id, description="Workflow execution ID")
    session_id: str = Field(default_factory=generate_session_id, description="Session ID")

    def add_message(self, agent_id: str, content: str) -> Message:
        """Append a message to the log.

        Args:
            agent_id: ID of the producing agent
            content: Message text

        Returns:
            The appended message
        """
        message = Message(agent_id=agent_id, content=content)
        self.messages.append(message)
        return message

    def get_messages(self) -> list[Message]:
        """Get all messages in chronological order.

        Returns:
            Copy of the message log
        """
        return list(self.messages)

    def last_message(self) -> Optional[Message]:
        return self.messages[-1] if self.messages else None

    def set_output(self, key: str, value: Any) -> None:
        self.outputs[key] = value

    def get_output(self, key: str, default: Any = None) -> Any:
        return self.outputs.get(key, default)

    def spawn_isolated(self, agent_id: str, task: str) -> "Context":
        """Create a fresh context for a delegated sub-agent.

        The new context shares the memory handle and workflow ID but none of
        the message history or outputs. It is seeded with exactly one message
        describing the delegated task.

        Args:
            agent_id: ID of the delegating (parent) agent
            task: Delegated task description

        Returns:
            Isolated context
        """
        isolated = Context(memory=self.memory, workflow_id=self.workflow_id, session_id=self.session_id)
        isolated.add_message(agent_id, f"Task delegated from parent agent: {task}")
        return isolated
