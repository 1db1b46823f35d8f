"""Structured logging primitives for mongonav."""

from .events import (
    EVENT_KEY_ORDER,
    elapsed_ms,
    log_event,
    setup_logging,
    summarize_command_args,
)
from .formatter import StructuredTextFormatter
from .sanitization import sanitize_connection_string, sanitize_error_message

__all__ = [
    "EVENT_KEY_ORDER",
    "StructuredTextFormatter",
    "elapsed_ms",
    "log_event",
    "sanitize_connection_string",
    "sanitize_error_message",
    "setup_logging",
    "summarize_command_args",
]
