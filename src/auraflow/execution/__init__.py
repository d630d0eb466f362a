"""Execution module for AuraFlow."""

from .workflow import WorkflowResult, WorkflowRunner

__all__ = [
    "WorkflowRunner",
    "WorkflowResult",
]
