"""Runtime configuration assembled from CLI arguments and environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .constants import DEFAULT_CONNECTION_STRING, ENV_DEBUG, ENV_LOG_FILE

_TRUTHY = frozenset(("1", "true", "yes", "on"))


@dataclass(frozen=True)
class ShellConfig:
    connection_string: str = DEFAULT_CONNECTION_STRING
    log_file: Optional[str] = None
    debug: bool = False


def _map_log_path(raw: str) -> str:
    """Expand ``~`` and make the log path absolute."""
    return str(Path(raw).expanduser().resolve())


def load_config(
    connection_string: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ShellConfig:
    """Build the config; a missing connection string falls back to localhost."""
    env = os.environ if environ is None else environ

    log_raw = env.get(ENV_LOG_FILE, "").strip()
    debug_raw = env.get(ENV_DEBUG, "").strip().lower()

    return ShellConfig(
        connection_string=connection_string or DEFAULT_CONNECTION_STRING,
        log_file=_map_log_path(log_raw) if log_raw else None,
        debug=debug_raw in _TRUTHY,
    )
