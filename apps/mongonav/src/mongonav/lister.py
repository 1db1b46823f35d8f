"""ls: depth-driven listings with truncation."""

from __future__ import annotations

from typing import Iterable, Optional

from bson import ObjectId
from bson.json_util import RELAXED_JSON_OPTIONS, dumps

from .constants import DEFAULT_LIST_LIMIT, LIST_TIMEOUT_SEC
from .datasource import DataSource
from .errors import DocumentNotFoundError, InvalidDocumentIdError, InvalidPathDepthError
from .models import Document, ListingResult, NavigationPath


def parse_document_id(value: str) -> ObjectId:
    """Parse a path segment as an ObjectId.

    Raises:
        InvalidDocumentIdError: If ``value`` is not 24 hex characters
    """
    if not ObjectId.is_valid(value):
        raise InvalidDocumentIdError(value)
    return ObjectId(value)


def render_document(doc: Document) -> str:
    """Render one document as a single relaxed Extended JSON line."""
    return dumps(doc, json_options=RELAXED_JSON_OPTIONS)


def take_names(names: Iterable[str], limit: Optional[int]) -> ListingResult:
    """Emit at most ``limit`` names; truncated iff more remained."""
    result = ListingResult()
    for index, name in enumerate(names):
        if limit is not None and index >= limit:
            result.truncated = True
            break
        result.entries.append(name)
    return result


class Lister:
    """Produces the listing for the current path.

    Behavior depends only on path depth: 0 databases, 1 collections,
    2 documents, 3 one document.
    """

    def __init__(self, source: DataSource, timeout: float = LIST_TIMEOUT_SEC) -> None:
        self._source = source
        self._timeout = timeout

    def list(self, path: NavigationPath, show_all: bool = False) -> ListingResult:
        """List entries under ``path``.

        Raises:
            NavigationError: On invalid depth, bad or missing document id, or
                backend failure
        """
        limit = None if show_all else DEFAULT_LIST_LIMIT

        if path.depth == 0:
            return take_names(self._source.list_database_names(self._timeout), limit)

        if path.depth == 1:
            names = self._source.list_collection_names(path.segments[0], self._timeout)
            return take_names(names, limit)

        if path.depth == 2:
            return self._list_documents(path.segments[0], path.segments[1], limit)

        if path.depth == 3:
            return self._show_document(*path.segments)

        raise InvalidPathDepthError()

    def _list_documents(
        self,
        database: str,
        collection: str,
        limit: Optional[int],
    ) -> ListingResult:
        docs = self._source.find_documents(database, collection, limit, self._timeout)
        # The server already capped the result, so exactly `limit` documents
        # is reported as truncated too.
        truncated = limit is not None and len(docs) >= limit
        return ListingResult([render_document(doc) for doc in docs], truncated)

    def _show_document(self, database: str, collection: str, raw_id: str) -> ListingResult:
        document_id = parse_document_id(raw_id)
        doc = self._source.find_document_by_id(database, collection, document_id, self._timeout)
        if doc is None:
            raise DocumentNotFoundError(raw_id)
        return ListingResult([render_document(doc)])
