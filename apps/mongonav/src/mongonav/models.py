"""Data models for mongonav navigation and listing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .constants import TRUNCATION_MARKER
from .errors import MongonavError

Document = dict[str, Any]


@dataclass(slots=True, frozen=True)
class NavigationPath:
    """Position in the database → collection → document hierarchy.

    Segments are stored as typed by the user. The resolver never produces more
    than three segments; the type does not enforce it so that a corrupted path
    can still reach the lister's depth guard.
    """

    segments: tuple[str, ...] = ()

    @classmethod
    def root(cls) -> NavigationPath:
        return cls()

    @classmethod
    def of(cls, *segments: str) -> NavigationPath:
        return cls(tuple(segments))

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def database(self) -> str | None:
        return self.segments[0] if self.depth >= 1 else None

    @property
    def collection(self) -> str | None:
        return self.segments[1] if self.depth >= 2 else None

    @property
    def document_id(self) -> str | None:
        return self.segments[2] if self.depth >= 3 else None

    def display(self) -> str:
        """Render the path for the prompt: ``/`` at root."""
        if not self.segments:
            return "/"
        return "/".join(self.segments)


@dataclass(slots=True)
class ListingResult:
    """Entries produced by one ls invocation."""

    entries: list[str] = field(default_factory=list)
    truncated: bool = False

    def render(self) -> str:
        lines = [f"{entry}\n" for entry in self.entries]
        if self.truncated:
            lines.append(TRUNCATION_MARKER)
        return "".join(lines)


@dataclass(slots=True, frozen=True)
class CommandRequest:
    """One parsed input line: verb plus literal arguments."""

    verb: str
    args: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class CommandOutcome:
    """Result of one command, applied to the session by the dispatcher.

    ``path`` is set only when the command moves the session.
    """

    output: str = ""
    error: MongonavError | None = None
    path: NavigationPath | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
