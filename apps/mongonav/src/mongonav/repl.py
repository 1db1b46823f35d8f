"""Main mongonav REPL event loop and prompt helpers."""

from __future__ import annotations

import logging
import traceback
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings

from .constants import PROMPT_LABEL
from .dispatcher import CommandDispatcher, command_doc_entries
from .logging import log_event
from .session import Session


def build_key_bindings() -> KeyBindings:
    """Escape quits the shell, like Ctrl-C and Ctrl-D."""
    key_bindings = KeyBindings()

    @key_bindings.add("escape", eager=True)
    def _handle_escape(event) -> None:
        event.app.exit(exception=EOFError())

    return key_bindings


def create_prompt_session() -> PromptSession:
    """Create prompt-toolkit session for REPL input."""
    return PromptSession(
        # Session-only history: paths can name sensitive databases.
        history=InMemoryHistory(),
        key_bindings=build_key_bindings(),
    )


def build_prompt(session: Session) -> str:
    return f"{PROMPT_LABEL} ({session.path.display()}) > "


def print_startup_banner(connection: str) -> None:
    """Print connection context and command hints."""
    print(f"Connected to {connection}")
    for entry in command_doc_entries():
        print(f"  {entry['usage'].ljust(12)} - {entry['summary']}")
    print("Esc, Ctrl-C or Ctrl-D to quit")


def _print_result(session: Session) -> None:
    text = session.render()
    if text:
        print(text, end="" if text.endswith("\n") else "\n")


async def repl_loop(
    dispatcher: CommandDispatcher,
    prompt_session: Optional[PromptSession] = None,
    debug: bool = False,
) -> str:
    """Run the REPL until the user quits; return the stop reason."""
    session = dispatcher.session
    prompt_session = prompt_session or create_prompt_session()
    log_event("session_start", level=logging.INFO, path=session.path.display())

    while True:
        try:
            print()
            line = await prompt_session.prompt_async(build_prompt(session))

            if not line.strip():
                continue

            outcome = await dispatcher.execute(line)
            if outcome is None:
                continue
            _print_result(session)

        except EOFError:
            reason = "eof"
            break

        except KeyboardInterrupt:
            reason = "keyboard_interrupt"
            break

        except Exception as error:
            log_event(
                "repl_error",
                level=logging.ERROR,
                error_type=type(error).__name__,
                error=str(error),
                path=session.path.display(),
            )
            logging.error("Unexpected REPL error: %s", error, exc_info=True)
            print(f"ERROR: {error}")
            if debug:
                print("Debug traceback:")
                traceback.print_exc()

    log_event("session_stop", level=logging.INFO, reason=reason, path=session.path.display())
    return reason


__all__ = [
    "build_key_bindings",
    "build_prompt",
    "create_prompt_session",
    "print_startup_banner",
    "repl_loop",
]
