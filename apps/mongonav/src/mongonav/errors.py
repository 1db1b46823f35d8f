"""Custom exception types for mongonav."""

from __future__ import annotations


class MongonavError(Exception):
    """Base class for all mongonav errors."""


class ConnectionFailedError(MongonavError):
    """Connecting to or pinging the server failed at session start."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class UnknownCommandError(MongonavError):
    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"unknown command: {command}")


class NavigationError(MongonavError):
    """Recoverable failure of a cd or ls command."""


class DatabaseNotFoundError(NavigationError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"database '{name}' does not exist")


class CollectionNotFoundError(NavigationError):
    def __init__(self, name: str, database: str) -> None:
        self.name = name
        self.database = database
        super().__init__(f"collection '{name}' does not exist in database '{database}'")


class InvalidDocumentIdError(NavigationError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid document ID: {value}")


class DocumentNotFoundError(NavigationError):
    def __init__(self, document_id: str) -> None:
        self.document_id = document_id
        super().__init__(f"document with ID '{document_id}' not found")


class InvalidPathDepthError(NavigationError):
    def __init__(self) -> None:
        super().__init__("invalid path depth")


class InvalidNamePatternError(NavigationError):
    def __init__(self, segment: str, reason: str) -> None:
        self.segment = segment
        super().__init__(f"invalid name pattern '{segment}': {reason}")


class BackendError(NavigationError):
    """Driver, connectivity or timeout failure, wrapped with call context."""

    def __init__(self, context: str, cause: Exception | str) -> None:
        self.context = context
        super().__init__(f"{context}: {cause}")
