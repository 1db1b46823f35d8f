"""Server access for mongonav: DataSource contract and pymongo adapter."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import pymongo
from bson import ObjectId
from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from .constants import CONNECT_TIMEOUT_SEC
from .errors import BackendError, ConnectionFailedError
from .logging import log_event, sanitize_connection_string
from .models import Document

# Decoding failures (e.g. out-of-range dates) come from bson, not pymongo.
_DRIVER_ERRORS = (PyMongoError, BSONError)


class DataSource(Protocol):
    """Read-only queries the resolver and lister need.

    Every call is bounded by the caller-supplied timeout in seconds and raises
    ``BackendError`` on any driver, connectivity or timeout failure.
    """

    def list_database_names(self, timeout: float) -> list[str]:
        """Database names in server order."""

    def list_collection_names(self, database: str, timeout: float) -> list[str]:
        """Collection names of one database in server order."""

    def find_documents(
        self,
        database: str,
        collection: str,
        limit: Optional[int],
        timeout: float,
    ) -> list[Document]:
        """Unfiltered documents in server order; ``limit=None`` means unbounded."""

    def find_document_by_id(
        self,
        database: str,
        collection: str,
        document_id: ObjectId,
        timeout: float,
    ) -> Optional[Document]:
        """One document by ``_id``, or None when it does not exist."""


class MongoDataSource:
    """DataSource backed by a long-lived pymongo client."""

    def __init__(self, client: MongoClient) -> None:
        self._client = client

    def list_database_names(self, timeout: float) -> list[str]:
        try:
            with pymongo.timeout(timeout):
                return list(self._client.list_database_names())
        except _DRIVER_ERRORS as exc:
            raise BackendError("listing databases", exc) from exc

    def list_collection_names(self, database: str, timeout: float) -> list[str]:
        try:
            with pymongo.timeout(timeout):
                return list(self._client[database].list_collection_names())
        except _DRIVER_ERRORS as exc:
            raise BackendError(f"listing collections of '{database}'", exc) from exc

    def find_documents(
        self,
        database: str,
        collection: str,
        limit: Optional[int],
        timeout: float,
    ) -> list[Document]:
        find_kwargs: dict[str, Any] = {}
        if limit is not None:
            find_kwargs["limit"] = limit

        try:
            with pymongo.timeout(timeout):
                with self._client[database][collection].find({}, **find_kwargs) as cursor:
                    return [dict(doc) for doc in cursor]
        except _DRIVER_ERRORS as exc:
            raise BackendError(f"listing documents of '{database}/{collection}'", exc) from exc

    def find_document_by_id(
        self,
        database: str,
        collection: str,
        document_id: ObjectId,
        timeout: float,
    ) -> Optional[Document]:
        try:
            with pymongo.timeout(timeout):
                doc = self._client[database][collection].find_one({"_id": document_id})
        except _DRIVER_ERRORS as exc:
            raise BackendError(f"fetching document '{document_id}'", exc) from exc
        return dict(doc) if doc is not None else None

    def close(self) -> None:
        self._client.close()


def connect(
    connection_string: str,
    timeout: float = CONNECT_TIMEOUT_SEC,
) -> MongoDataSource:
    """Open the client and ping the primary.

    Raises:
        ConnectionFailedError: If the client cannot be created or the ping fails
    """
    timeout_ms = int(timeout * 1000)
    safe_uri = sanitize_connection_string(connection_string)

    try:
        client: MongoClient = MongoClient(
            connection_string,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
        )
    except (PyMongoError, ValueError, TypeError) as exc:
        log_event(
            "connect_error",
            level=logging.ERROR,
            connection=safe_uri,
            stage="connect",
            error_type=type(exc).__name__,
            error=str(exc),
        )
        raise ConnectionFailedError(f"failed to connect to MongoDB: {exc}") from exc

    try:
        with pymongo.timeout(timeout):
            client.admin.command("ping")
    except PyMongoError as exc:
        client.close()
        log_event(
            "connect_error",
            level=logging.ERROR,
            connection=safe_uri,
            stage="ping",
            error_type=type(exc).__name__,
            error=str(exc),
        )
        raise ConnectionFailedError(f"failed to ping MongoDB: {exc}") from exc

    return MongoDataSource(client)
