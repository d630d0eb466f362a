"""Agent module for AuraFlow."""

from .base import NO_RESPONSE, Agent, format_tool_results
from .delegation import DelegationInstruction, PlainText, parse_delegation, parse_output
from .prompt import build_follow_up_prompt, build_prompt

__all__ = [
    "Agent",
    "NO_RESPONSE",
    "format_tool_results",
    "DelegationInstruction",
    "PlainText",
    "parse_delegation",
    "parse_output",
    "build_prompt",
    "build_follow_up_prompt",
]
