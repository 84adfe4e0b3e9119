"""DocumentStore abstract interface.

The analytics backend keeps games, classes and activities in a document
database. Migrations reach it only through this interface so that they can
run against MongoDB in production and an in-memory store in tests.
"""

from abc import ABC, abstractmethod
from typing import Any

Document = dict[str, Any]


class DocumentStoreError(Exception):
    """Raised when a document store operation cannot be performed."""


class DocumentStore(ABC):
    """Abstract interface for collection-oriented document storage.

    Queries are equality filters: a document matches when every key of the
    query is present with an equal value. An empty or missing query
    matches every document.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection. Calling it twice is a no-op."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the connection."""
        pass

    @abstractmethod
    async def list_collection_names(self) -> list[str]:
        """Names of the collections that currently exist."""
        pass

    @abstractmethod
    async def find(self, collection: str, query: Document | None = None) -> list[Document]:
        """All documents of a collection matching the query."""
        pass

    @abstractmethod
    async def find_one(self, collection: str, query: Document) -> Document | None:
        """First document matching the query, or None."""
        pass

    @abstractmethod
    async def insert_one(self, collection: str, document: Document) -> Any:
        """Insert a document, creating the collection if needed. Returns its _id."""
        pass

    @abstractmethod
    async def replace_one(
        self,
        collection: str,
        query: Document,
        document: Document,
        *,
        upsert: bool = False,
    ) -> bool:
        """Replace the first matching document.

        Returns True when a document was replaced or inserted.
        """
        pass

    @abstractmethod
    async def unset_fields(
        self,
        collection: str,
        fields: list[str],
        query: Document | None = None,
    ) -> int:
        """Remove fields from every matching document. Returns the modified count."""
        pass

    @abstractmethod
    async def rename_collection(self, old_name: str, new_name: str) -> None:
        """Rename a collection.

        Raises:
            DocumentStoreError: If old_name does not exist or new_name does
        """
        pass

    @abstractmethod
    async def drop_collection(self, name: str) -> None:
        """Drop a collection if it exists."""
        pass
