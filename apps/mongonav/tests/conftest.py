"""Pytest configuration and fixtures for mongonav tests."""

from __future__ import annotations

from typing import Optional

import pytest
from bson import ObjectId

from mongonav.dispatcher import CommandDispatcher
from mongonav.errors import BackendError
from mongonav.lister import Lister
from mongonav.models import Document
from mongonav.resolver import PathResolver
from mongonav.session import Session


class FakeDataSource:
    """In-memory DataSource recording every call.

    ``data`` maps database → collection → list of documents, in server order.
    """

    def __init__(self, data: dict[str, dict[str, list[Document]]]) -> None:
        self.data = data
        self.calls: list[tuple] = []
        self.fail_with: Optional[BackendError] = None

    def _record(self, *call) -> None:
        self.calls.append(call)
        if self.fail_with is not None:
            raise self.fail_with

    def list_database_names(self, timeout: float) -> list[str]:
        self._record("list_database_names", timeout)
        return list(self.data)

    def list_collection_names(self, database: str, timeout: float) -> list[str]:
        self._record("list_collection_names", database, timeout)
        return list(self.data.get(database, {}))

    def find_documents(
        self,
        database: str,
        collection: str,
        limit: Optional[int],
        timeout: float,
    ) -> list[Document]:
        self._record("find_documents", database, collection, limit, timeout)
        docs = self.data.get(database, {}).get(collection, [])
        return list(docs if limit is None else docs[:limit])

    def find_document_by_id(
        self,
        database: str,
        collection: str,
        document_id: ObjectId,
        timeout: float,
    ) -> Optional[Document]:
        self._record("find_document_by_id", database, collection, document_id, timeout)
        for doc in self.data.get(database, {}).get(collection, []):
            if doc.get("_id") == document_id:
                return doc
        return None


EXISTING_ID = ObjectId("6512abf0c0ffee0000000001")
MISSING_ID = "6512abf0c0ffee00000000ff"


def make_docs(count: int) -> list[Document]:
    return [{"_id": ObjectId(f"6512abf0c0ffee{i:010x}"), "n": i} for i in range(count)]


@pytest.fixture
def sample_data() -> dict[str, dict[str, list[Document]]]:
    return {
        "admin": {name: [] for name in "abcdefg"},
        "app": {
            "logs": [
                {"_id": EXISTING_ID, "msg": "boot", "level": 1},
                {"_id": ObjectId("6512abf0c0ffee0000000002"), "msg": "ready", "level": 2},
                {"_id": ObjectId("6512abf0c0ffee0000000003"), "msg": "stop", "level": 1},
            ],
            "users": make_docs(7),
            "five": make_docs(5),
        },
        "local": {"startup_log": []},
    }


@pytest.fixture
def source(sample_data) -> FakeDataSource:
    return FakeDataSource(sample_data)


@pytest.fixture
def session() -> Session:
    return Session()


@pytest.fixture
def dispatcher(session, source) -> CommandDispatcher:
    return CommandDispatcher(session, PathResolver(source), Lister(source))
