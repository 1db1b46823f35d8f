"""CLI bootstrap entry point for mongonav."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from typing import Optional

from .config import ShellConfig, load_config
from .constants import DEFAULT_CONNECTION_STRING, ENV_DEBUG, ENV_LOG_FILE
from .datasource import MongoDataSource, connect
from .dispatcher import CommandDispatcher
from .errors import ConnectionFailedError
from .lister import Lister
from .logging import (
    elapsed_ms,
    log_event,
    sanitize_connection_string,
    sanitize_error_message,
    setup_logging,
)
from .repl import print_startup_banner, repl_loop
from .resolver import PathResolver
from .session import Session

__all__ = ["main", "open_session"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mongonav",
        description="mongonav - browse a MongoDB server like a filesystem",
        epilog=(
            f"Environment:\n"
            f"  {ENV_LOG_FILE}  write a structured log to this file\n"
            f"  {ENV_DEBUG}     print tracebacks for unexpected errors"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "connection_string",
        nargs="?",
        help=f"MongoDB connection string (default: {DEFAULT_CONNECTION_STRING})",
    )
    return parser


def open_session(config: ShellConfig) -> tuple[Session, Optional[MongoDataSource]]:
    """Connect to the server and create the session.

    A failed connection yields a session stuck in its fatal error state and no
    data source.
    """
    try:
        source = connect(config.connection_string)
    except ConnectionFailedError as exc:
        return Session.failed(exc), None
    return Session(), source


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for mongonav CLI."""
    args = build_parser().parse_args(argv)
    config = load_config(args.connection_string)
    app_started = time.perf_counter()
    safe_connection = sanitize_connection_string(config.connection_string)

    setup_logging(config.log_file)
    log_event(
        "app_start",
        level=logging.INFO,
        connection=safe_connection,
        log_file=config.log_file,
    )

    session, source = open_session(config)
    if source is None:
        print(f"Error: {sanitize_error_message(str(session.fatal_error))}", file=sys.stderr)
        log_event(
            "app_stop",
            level=logging.ERROR,
            reason="connection_failed",
            uptime_ms=elapsed_ms(app_started),
        )
        sys.exit(1)

    dispatcher = CommandDispatcher(session, PathResolver(source), Lister(source))
    try:
        print_startup_banner(safe_connection)
        reason = asyncio.run(repl_loop(dispatcher, debug=config.debug))
    except Exception as e:
        print(f"Error: {sanitize_error_message(str(e))}", file=sys.stderr)
        log_event(
            "app_stop",
            level=logging.ERROR,
            reason="fatal_error",
            error_type=type(e).__name__,
            error=str(e),
            uptime_ms=elapsed_ms(app_started),
        )
        logging.error("Fatal error: %s", e, exc_info=True)
        sys.exit(1)
    finally:
        source.close()

    log_event(
        "app_stop",
        level=logging.INFO,
        reason=reason,
        uptime_ms=elapsed_ms(app_started),
    )


if __name__ == "__main__":
    main()
