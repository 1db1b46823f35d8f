"""cd target resolution: lexical path arithmetic plus server-side validation."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from .constants import MAX_PATH_DEPTH, RESOLVE_TIMEOUT_SEC
from .datasource import DataSource
from .errors import (
    CollectionNotFoundError,
    DatabaseNotFoundError,
    InvalidNamePatternError,
    InvalidPathDepthError,
)
from .models import NavigationPath


def apply_target(current: NavigationPath, target: str) -> NavigationPath:
    """Apply a relative cd target to ``current`` without contacting the server.

    ``..`` pops one segment (no-op at root), ``.`` and empty components are
    dropped, anything else is appended. A leading ``/`` therefore does not
    jump to root.
    """
    segments = list(current.segments)
    for part in target.split("/"):
        if part == "..":
            if segments:
                segments.pop()
        elif part not in (".", ""):
            segments.append(part)
    return NavigationPath(tuple(segments))


def match_name(pattern: str, names: Iterable[str]) -> Optional[str]:
    """Return the first name fully matched by ``pattern``, in the given order.

    The segment is treated as a regular expression anchored at both ends, so
    ``adm.*`` navigates into ``admin``.

    Raises:
        InvalidNamePatternError: If ``pattern`` is not a valid regular expression
    """
    try:
        compiled = re.compile(f"^{pattern}$")
    except re.error as exc:
        raise InvalidNamePatternError(pattern, str(exc)) from exc

    for name in names:
        if compiled.match(name):
            return name
    return None


class PathResolver:
    """Turns a cd target into a validated NavigationPath."""

    def __init__(self, source: DataSource, timeout: float = RESOLVE_TIMEOUT_SEC) -> None:
        self._source = source
        self._timeout = timeout

    def resolve(self, current: NavigationPath, target: str) -> NavigationPath:
        """Return the new path for ``cd target``.

        The document id segment is not checked here; it is looked up when the
        document is listed.

        Raises:
            NavigationError: If validation fails or the server cannot be queried
        """
        candidate = apply_target(current, target)
        if candidate.depth > MAX_PATH_DEPTH:
            raise InvalidPathDepthError()

        database = candidate.database
        if database is not None:
            names = self._source.list_database_names(self._timeout)
            if match_name(database, names) is None:
                raise DatabaseNotFoundError(database)

        collection = candidate.collection
        if database is not None and collection is not None:
            names = self._source.list_collection_names(database, self._timeout)
            if match_name(collection, names) is None:
                raise CollectionNotFoundError(collection, database)

        return candidate
