"""Utility modules for AuraFlow."""

from .id import (
    generate_message_id,
    generate_session_id,
    generate_uuid,
    generate_uuid_with_dashes,
    generate_workflow_id,
)
from .logging import (
    ColoredFormatter,
    CorrelationFilter,
    LogEntry,
    LogLevel,
    StructuredFormatter,
    get_logger,
    log_context,
    setup_logging,
)

__all__ = [
    # ID generation
    "generate_uuid",
    "generate_uuid_with_dashes",
    "generate_message_id",
    "generate_workflow_id",
    "generate_session_id",
    # Logging
    "setup_logging",
    "get_logger",
    "log_context",
    "CorrelationFilter",
    "LogLevel",
    "LogEntry",
    "StructuredFormatter",
    "ColoredFormatter",
]
