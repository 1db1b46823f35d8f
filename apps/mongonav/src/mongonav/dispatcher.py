"""Command parsing and dispatching for the mongonav shell."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from .constants import SHOW_ALL_FLAG
from .errors import NavigationError, UnknownCommandError
from .lister import Lister
from .logging import elapsed_ms, log_event, summarize_command_args
from .models import CommandOutcome, CommandRequest, NavigationPath
from .resolver import PathResolver
from .session import Session

T = TypeVar("T")


def parse_command(line: str) -> Optional[CommandRequest]:
    """Split a line on whitespace into verb and literal arguments.

    No quoting or escaping. Returns None for blank input.
    """
    parts = line.split()
    if not parts:
        return None
    return CommandRequest(verb=parts[0], args=tuple(parts[1:]))


@dataclass(frozen=True)
class CommandHandler:
    """Defines how to execute a command."""

    executor: Callable[["CommandDispatcher", tuple[str, ...]], Awaitable[CommandOutcome]]
    usage: str = ""
    summary: str = ""


async def _exec_cd(dispatcher: CommandDispatcher, args: tuple[str, ...]) -> CommandOutcome:
    if not args:
        return CommandOutcome(path=NavigationPath.root())

    current = dispatcher.session.path
    try:
        new_path = await dispatcher.run_deferred(dispatcher.resolver.resolve, current, args[0])
    except NavigationError as exc:
        return CommandOutcome(error=exc)
    return CommandOutcome(path=new_path)


async def _exec_ls(dispatcher: CommandDispatcher, args: tuple[str, ...]) -> CommandOutcome:
    show_all = bool(args) and args[0] == SHOW_ALL_FLAG
    current = dispatcher.session.path
    try:
        listing = await dispatcher.run_deferred(dispatcher.lister.list, current, show_all)
    except NavigationError as exc:
        return CommandOutcome(error=exc)
    return CommandOutcome(output=listing.render())


COMMAND_REGISTRY = {
    "cd": CommandHandler(
        _exec_cd,
        usage="cd [<target>]",
        summary="Move to a database/collection/document; no target returns to root",
    ),
    "ls": CommandHandler(
        _exec_ls,
        usage=f"ls [{SHOW_ALL_FLAG}]",
        summary=f"List the current level; {SHOW_ALL_FLAG} disables truncation",
    ),
}


class CommandDispatcher:
    """Routes input lines to cd/ls and applies their outcomes to the session.

    Backend work runs in a worker thread; the lock keeps at most one command in
    flight for the session.
    """

    def __init__(self, session: Session, resolver: PathResolver, lister: Lister) -> None:
        self.session = session
        self.resolver = resolver
        self.lister = lister
        self._lock = asyncio.Lock()

    async def run_deferred(self, fn: Callable[..., T], *args: Any) -> T:
        return await asyncio.to_thread(fn, *args)

    async def execute(self, line: str) -> Optional[CommandOutcome]:
        """Execute one input line and return the applied outcome.

        Returns None for blank input. Navigation and backend failures are
        returned in the outcome, never raised.
        """
        request = parse_command(line)
        if request is None:
            return None

        if not self.session.is_usable:
            return CommandOutcome(error=self.session.fatal_error)

        handler = COMMAND_REGISTRY.get(request.verb)
        if handler is None:
            error = UnknownCommandError(request.verb)
            self.session.set_error(error)
            self._log_outcome(request, CommandOutcome(error=error), time.perf_counter())
            return CommandOutcome(error=error)

        async with self._lock:
            started = time.perf_counter()
            outcome = await handler.executor(self, request.args)
            self.session.apply(outcome)

        self._log_outcome(request, outcome, started)
        return outcome

    def _log_outcome(self, request: CommandRequest, outcome: CommandOutcome, started: float) -> None:
        fields = dict(
            command=request.verb,
            args_summary=summarize_command_args(request.verb, request.args),
            path=self.session.path.display(),
            elapsed_ms=elapsed_ms(started),
        )
        if outcome.error is None:
            log_event("command_exec", level=logging.INFO, **fields)
        else:
            log_event(
                "command_error",
                level=logging.WARNING,
                error_type=type(outcome.error).__name__,
                error=str(outcome.error),
                **fields,
            )


def command_doc_entries() -> list[dict[str, str]]:
    """Return command metadata used for the startup banner."""
    return [
        {"command": command, "usage": handler.usage, "summary": handler.summary}
        for command, handler in COMMAND_REGISTRY.items()
    ]
