"""Logging configuration for AuraFlow.

This module provides console and structured (JSON) logging. Nothing is
configured at import time; entry points call ``setup_logging`` once.

Records emitted inside ``log_context`` carry the workflow execution and
session IDs, so one run can be followed across agents and sub-agents in the
JSON log.
"""

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from enum import Enum
from typing import Any, Iterator, Optional

from pydantic import BaseModel, Field

# Third-party loggers that are noisy at INFO level
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic", "qdrant_client")

# Correlation IDs for the workflow execution currently running
_workflow_id: ContextVar[Optional[str]] = ContextVar("auraflow_workflow_id", default=None)
_session_id: ContextVar[Optional[str]] = ContextVar("auraflow_session_id", default=None)

CORRELATION_FIELDS = ("workflow_id", "session_id")


class LogLevel(str, Enum):
    """Log level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogEntry(BaseModel):
    """Structured log entry.

    Attributes:
        timestamp: Log timestamp
        level: Log level
        message: Log message
        logger: Logger name
        context: Additional context
    """

    timestamp: str
    level: str
    message: str
    logger: str
    context: dict[str, Any] = Field(default_factory=dict)


@contextmanager
def log_context(workflow_id: Optional[str] = None, session_id: Optional[str] = None) -> Iterator[None]:
    """Bind correlation IDs to every record logged inside the block.

    Asyncio tasks created inside the block inherit the bindings; the previous
    bindings are restored on exit.

    Args:
        workflow_id: Workflow execution ID
        session_id: Session ID
    """
    workflow_token = _workflow_id.set(workflow_id)
    session_token = _session_id.set(session_id)
    try:
        yield
    finally:
        _session_id.reset(session_token)
        _workflow_id.reset(workflow_token)


class CorrelationFilter(logging.Filter):
    """Attaches the bound workflow and session IDs to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.workflow_id = _workflow_id.get()
        record.session_id = _session_id.get()
        return True


class StructuredFormatter(logging.Formatter):
    """Formatter for structured log output.

    Outputs one JSON object per line, or a plain text line.
    """

    def __init__(self, format_type: str = "json") -> None:
        """Initialize the structured formatter.

        Args:
            format_type: Output format ("json" or "text")
        """
        super().__init__()
        self.format_type = format_type

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record.

        Args:
            record: Log record to format

        Returns:
            Formatted log string
        """
        entry = LogEntry(
            timestamp=datetime.fromtimestamp(record.created).isoformat(),
            level=record.levelname,
            message=record.getMessage(),
            logger=record.name,
            context={
                "function": record.funcName,
                "line": record.lineno,
                "module": record.module,
            },
        )

        for field in CORRELATION_FIELDS:
            value = getattr(record, field, None)
            if value:
                entry.context[field] = value

        if record.exc_info:
            entry.context["exception"] = self.formatException(record.exc_info)

        if self.format_type == "json":
            return json.dumps(entry.model_dump())
        return f"{entry.timestamp} [{entry.level}] {entry.logger}: {entry.message}"


class ColoredFormatter(logging.Formatter):
    """Colored console formatter using ANSI escape codes."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with colors.

        Args:
            record: Log record to format

        Returns:
            Formatted log string with colors
        """
        level_color = self.COLORS.get(record.levelname, "")
        reset_color = self.COLORS["RESET"]
        level_name = f"{level_color}{record.levelname}{reset_color}"
        message = f"[{level_name}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message


def setup_logging(
    level: str | LogLevel = "INFO",
    format_type: str = "text",
    use_colors: bool = True,
    log_file: str | None = None,
) -> None:
    """Set up logging for AuraFlow.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Output format ("json", "text")
        use_colors: Whether to use colors in console output
        log_file: Optional file to write logs to
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper() if isinstance(level, str) else level.value))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.addFilter(CorrelationFilter())
    if use_colors and format_type == "text":
        console_handler.setFormatter(ColoredFormatter())
    else:
        console_handler.setFormatter(StructuredFormatter(format_type=format_type))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.addFilter(CorrelationFilter())
        file_handler.setFormatter(StructuredFormatter(format_type="json"))
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (usually __name__ of the module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
