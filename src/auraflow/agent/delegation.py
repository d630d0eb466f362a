"""Delegation instruction parsing.

Agents without tools hand work to a sub-agent by answering with a line of the
form ``DELEGATE_TO: <sub_agent_id> : <task>``. The sub-agent ID ends at the
first colon after it; everything after that colon is the task. Only the first
matching line is honored.
"""

import re
from typing import Optional, Union

from pydantic import BaseModel, Field

DELEGATION_PATTERN = re.compile(r"^\s*DELEGATE_TO:\s*(.+?)\s*:\s*(.+)", re.MULTILINE)

DELEGATION_TEMPLATE = "DELEGATE_TO:<sub_agent_id>:<task_description_for_sub_agent>"


class DelegationInstruction(BaseModel):
    """A parsed request to hand a task to a sub-agent."""

    sub_agent_id: str = Field(..., description="Target sub-agent ID")
    task: str = Field(..., description="Delegated task description")


class PlainText(BaseModel):
    """Agent output that carries no delegation instruction."""

    content: str


ParsedOutput = Union[DelegationInstruction, PlainText]


def parse_output(text: str) -> ParsedOutput:
    """Classify agent output as a delegation or plain text.

    Args:
        text: Generated response

    Returns:
        DelegationInstruction for the first DELEGATE_TO line, else PlainText
    """
    match = DELEGATION_PATTERN.search(text)
    if match is None:
        return PlainText(content=text)
    return DelegationInstruction(sub_agent_id=match.group(1).strip(), task=match.group(2).strip())


def parse_delegation(text: str) -> Optional[DelegationInstruction]:
    parsed = parse_output(text)
    return parsed if isinstance(parsed, DelegationInstruction) else None
