"""Session state container for mongonav runtime."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import ConnectionFailedError, MongonavError
from .models import CommandOutcome, NavigationPath


@dataclass
class Session:
    """In-memory state for one interactive session.

    Mutated only by the dispatcher, one command at a time.
    """

    path: NavigationPath = field(default_factory=NavigationPath.root)
    output: str = ""
    error: MongonavError | None = None
    fatal_error: ConnectionFailedError | None = None

    @classmethod
    def failed(cls, error: ConnectionFailedError) -> Session:
        """Create a session that never left its connection failure."""
        return cls(error=error, fatal_error=error)

    @property
    def is_usable(self) -> bool:
        return self.fatal_error is None

    def reset_to_root(self) -> None:
        """Return to the root path and clear any previous output or error."""
        self.path = NavigationPath.root()
        self.output = ""
        self.error = None

    def set_error(self, error: MongonavError) -> None:
        """Record an error without touching path or output."""
        self.error = error

    def apply(self, outcome: CommandOutcome) -> None:
        """Store a completed command's result."""
        if outcome.error is not None:
            self.output = ""
            self.error = outcome.error
            return

        if outcome.path is not None:
            self.path = outcome.path
        self.output = outcome.output
        self.error = None

    def render(self) -> str:
        """Text shown under the prompt: the error if any, else the output."""
        if self.error is not None:
            return f"Error: {self.error}\n"
        return self.output
