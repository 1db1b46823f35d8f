"""Tests for the pymongo-backed data source."""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from bson.errors import InvalidBSON
from pymongo.errors import (
    ConfigurationError,
    NetworkTimeout,
    ServerSelectionTimeoutError,
)

import mongonav.datasource as datasource_module
from conftest import EXISTING_ID
from mongonav.datasource import MongoDataSource, connect
from mongonav.errors import BackendError, ConnectionFailedError


def _client_with_cursor(docs=None, cursor_side_effect=None):
    client = MagicMock()
    cursor = MagicMock()
    if cursor_side_effect is not None:
        cursor.__enter__.side_effect = cursor_side_effect
    else:
        cursor.__enter__.return_value = iter(docs or [])
    client.__getitem__.return_value.__getitem__.return_value.find.return_value = cursor
    return client, cursor


class TestMongoDataSource:
    def test_list_database_names(self):
        client = MagicMock()
        client.list_database_names.return_value = ["admin", "app"]

        assert MongoDataSource(client).list_database_names(5) == ["admin", "app"]

    def test_list_database_names_wraps_driver_error(self):
        client = MagicMock()
        client.list_database_names.side_effect = ServerSelectionTimeoutError("no servers")

        with pytest.raises(BackendError, match="listing databases: no servers"):
            MongoDataSource(client).list_database_names(5)

    def test_list_collection_names(self):
        client = MagicMock()
        client.__getitem__.return_value.list_collection_names.return_value = ["logs"]

        assert MongoDataSource(client).list_collection_names("app", 5) == ["logs"]
        client.__getitem__.assert_called_with("app")

    def test_list_collection_names_wraps_driver_error(self):
        client = MagicMock()
        client.__getitem__.return_value.list_collection_names.side_effect = NetworkTimeout("slow")

        with pytest.raises(BackendError, match="listing collections of 'app': slow"):
            MongoDataSource(client).list_collection_names("app", 5)

    def test_find_documents_with_limit(self):
        client, cursor = _client_with_cursor([{"_id": 1}, {"_id": 2}])
        collection = client.__getitem__.return_value.__getitem__.return_value

        docs = MongoDataSource(client).find_documents("app", "logs", 5, 5)

        assert docs == [{"_id": 1}, {"_id": 2}]
        collection.find.assert_called_once_with({}, limit=5)
        cursor.__exit__.assert_called_once()

    def test_find_documents_unbounded(self):
        client, _cursor = _client_with_cursor([{"_id": 1}])
        collection = client.__getitem__.return_value.__getitem__.return_value

        MongoDataSource(client).find_documents("app", "logs", None, 5)

        collection.find.assert_called_once_with({})

    def test_find_documents_closes_cursor_on_error(self):
        def failing_docs():
            yield {"_id": 1}
            raise NetworkTimeout("cursor timed out")

        client, cursor = _client_with_cursor(failing_docs())

        with pytest.raises(BackendError, match="listing documents of 'app/logs': cursor timed out"):
            MongoDataSource(client).find_documents("app", "logs", 5, 5)

        cursor.__exit__.assert_called_once()

    def test_find_document_by_id(self):
        client = MagicMock()
        collection = client.__getitem__.return_value.__getitem__.return_value
        collection.find_one.return_value = {"_id": EXISTING_ID, "msg": "boot"}

        doc = MongoDataSource(client).find_document_by_id("app", "logs", EXISTING_ID, 5)

        assert doc == {"_id": EXISTING_ID, "msg": "boot"}
        collection.find_one.assert_called_once_with({"_id": EXISTING_ID})

    def test_find_document_by_id_missing(self):
        client = MagicMock()
        client.__getitem__.return_value.__getitem__.return_value.find_one.return_value = None

        assert MongoDataSource(client).find_document_by_id("app", "logs", ObjectId(), 5) is None

    def test_find_document_by_id_wraps_driver_error(self):
        client = MagicMock()
        collection = client.__getitem__.return_value.__getitem__.return_value
        collection.find_one.side_effect = NetworkTimeout("slow")

        with pytest.raises(BackendError, match=f"fetching document '{EXISTING_ID}': slow"):
            MongoDataSource(client).find_document_by_id("app", "logs", EXISTING_ID, 5)

    def test_find_documents_wraps_decode_error(self):
        def undecodable_docs():
            yield {"_id": 1}
            raise InvalidBSON("year 0 is out of range")

        client, cursor = _client_with_cursor(undecodable_docs())

        with pytest.raises(BackendError, match="listing documents of 'app/logs': year 0 is out of range"):
            MongoDataSource(client).find_documents("app", "logs", 5, 5)

        cursor.__exit__.assert_called_once()

    def test_find_document_by_id_wraps_decode_error(self):
        client = MagicMock()
        collection = client.__getitem__.return_value.__getitem__.return_value
        collection.find_one.side_effect = InvalidBSON("year 0 is out of range")

        with pytest.raises(BackendError, match="year 0 is out of range"):
            MongoDataSource(client).find_document_by_id("app", "logs", EXISTING_ID, 5)

    def test_close_closes_client(self):
        client = MagicMock()

        MongoDataSource(client).close()

        client.close.assert_called_once()


class TestConnect:
    def test_connect_pings_primary(self, monkeypatch):
        client_cls = MagicMock()
        monkeypatch.setattr(datasource_module, "MongoClient", client_cls)

        source = connect("mongodb://db.example:27017", timeout=2)

        assert isinstance(source, MongoDataSource)
        client_cls.assert_called_once_with(
            "mongodb://db.example:27017",
            serverSelectionTimeoutMS=2000,
            connectTimeoutMS=2000,
        )
        client_cls.return_value.admin.command.assert_called_once_with("ping")

    def test_connect_invalid_uri(self, monkeypatch):
        client_cls = MagicMock(side_effect=ConfigurationError("bad uri"))
        monkeypatch.setattr(datasource_module, "MongoClient", client_cls)

        with pytest.raises(ConnectionFailedError, match="failed to connect to MongoDB: bad uri"):
            connect("nonsense")

    def test_connect_ping_failure_closes_client(self, monkeypatch):
        client_cls = MagicMock()
        client_cls.return_value.admin.command.side_effect = ServerSelectionTimeoutError("refused")
        monkeypatch.setattr(datasource_module, "MongoClient", client_cls)

        with pytest.raises(ConnectionFailedError, match="failed to ping MongoDB: refused"):
            connect("mongodb://localhost:27017")

        client_cls.return_value.close.assert_called_once()
