"""Structured event emission and logging helpers."""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from .formatter import StructuredTextFormatter
from .sanitization import sanitize_error_message

# Preferred key order per event in the formatted log; other keys follow sorted.
EVENT_KEY_ORDER: dict[str, tuple[str, ...]] = {
    "app_start": ("ts", "level", "connection", "log_file"),
    "app_stop": ("ts", "level", "reason", "uptime_ms"),
    "connect_error": ("ts", "level", "connection", "stage", "error_type", "error"),
    "session_start": ("ts", "level", "path"),
    "session_stop": ("ts", "level", "reason", "path"),
    "command_exec": ("ts", "level", "command", "args_summary", "path", "elapsed_ms"),
    "command_error": (
        "ts",
        "level",
        "command",
        "args_summary",
        "path",
        "error_type",
        "error",
        "elapsed_ms",
    ),
}

_SANITIZED_FIELDS = {"connection", "error"}


def _to_log_safe(value: Any) -> Any:
    """Convert values to JSON-serializable, log-safe representations."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _to_log_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_to_log_safe(v) for v in value]
    return str(value)


def summarize_command_args(_command: str, args: list[str] | tuple[str, ...]) -> str:
    """Summarize command args for logs."""
    return " ".join(" ".join(args).split())


def elapsed_ms(started: float) -> float:
    """Milliseconds since a ``time.perf_counter()`` reading."""
    return round((time.perf_counter() - started) * 1000, 1)


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a structured log event."""
    payload: dict[str, Any] = {
        "ts": datetime.now().astimezone().isoformat(),
        "event": event,
    }
    for key, value in fields.items():
        if key in _SANITIZED_FIELDS and isinstance(value, str):
            value = sanitize_error_message(value)
        payload[key] = _to_log_safe(value)
    logging.log(level, json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


def setup_logging(log_file: Optional[str] = None) -> None:
    """Log to a file when one is configured; otherwise stay silent."""
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(str(log_path), encoding="utf-8")
        handler.setFormatter(StructuredTextFormatter(key_order=EVENT_KEY_ORDER))
        logging.disable(logging.NOTSET)
        logging.basicConfig(level=logging.INFO, handlers=[handler], force=True)
    else:
        logging.disable(logging.CRITICAL)
