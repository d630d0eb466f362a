"""Prompt assembly for agents.

Sections always appear in this order: role, goal, delegation hints, tool
hints, memory, message history, closing instruction.
"""

from typing import Any, Sequence

from ..models import Message
from .delegation import DELEGATION_TEMPLATE

CLOSING_INSTRUCTION = "Do not ask questions. Complete the task independently and return a final answer."


def render_sub_agents(sub_agents: Sequence[Any]) -> str:
    if not sub_agents:
        return ""
    listing = "\n".join(f"  - {sa.id}: {sa.role} (Goal: {sa.goal})" for sa in sub_agents)
    return (
        "\n\nAvailable sub-agents you can delegate to:\n"
        f"{listing}\n\n"
        f"If you need to delegate part of your task to a sub-agent, respond with: {DELEGATION_TEMPLATE}"
    )


def render_tools(tools: Sequence[str]) -> str:
    if not tools:
        return ""
    listing = "\n".join(f"  - {tool}" for tool in tools)
    return (
        "\n\n[INTERNET ACCESS AVAILABLE]\n"
        "Available tools:\n"
        f"{listing}\n\n"
        "You can use web_search to gather current information from the internet."
    )


def render_history(messages: Sequence[Message]) -> str:
    return "\n".join(f"[{msg.timestamp.isoformat()}] Agent {msg.agent_id}: {msg.content}" for msg in messages)


def build_prompt(
    role: str,
    goal: str,
    messages: Sequence[Message],
    sub_agents: Sequence[Any] = (),
    tools: Sequence[str] = (),
    memory_block: str = "",
) -> str:
    """Assemble an agent prompt.

    Args:
        role: Agent role
        goal: Agent goal
        messages: Shared history in chronological order
        sub_agents: Objects with ``id``, ``role`` and ``goal`` attributes
        tools: Tool names the agent may use
        memory_block: Rendered memory section ("" for none)

    Returns:
        Prompt text
    """
    return (
        f"You are an AI agent with the following role: {role}\n\n"
        f"Your goal is: {goal}{render_sub_agents(sub_agents)}{render_tools(tools)}\n\n"
        f"{memory_block}\n\n"
        "Current context:\n"
        f"{render_history(messages)}\n\n"
        f"{CLOSING_INSTRUCTION}"
    )


def build_follow_up_prompt(prompt: str, sub_agent_id: str, result: str) -> str:
    """Extend a prompt with a completed sub-agent result.

    Args:
        prompt: Original prompt
        sub_agent_id: Sub-agent that ran the delegated task
        result: Sub-agent output

    Returns:
        Follow-up prompt text
    """
    return (
        f"{prompt}\n\n"
        f"The sub-agent {sub_agent_id} has completed the delegated task with the following result:\n"
        f"{result}\n\n"
        "Now please continue with your original task using this information."
    )


def build_tool_feedback_prompt(prompt: str, tool_results: str) -> str:
    """Extend a prompt with the results of the previous round of tool calls.

    Args:
        prompt: Prompt used for the previous round
        tool_results: Formatted tool results

    Returns:
        Prompt text for the next round
    """
    return (
        f"{prompt}\n\n"
        f"{tool_results}\n\n"
        "Use these tool results to continue. Call more tools only if you still need information."
    )
