"""MongoDB implementation of DocumentStore using the pymongo async client."""

from typing import Any

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import OperationFailure, PyMongoError

from rage.observability.logging import get_logger
from rage.store.base import Document, DocumentStore, DocumentStoreError

logger = get_logger(__name__)


class MongoDocumentStore(DocumentStore):
    """DocumentStore backed by a MongoDB database.

    The client owns a connection pool shared by every controller that
    receives this store through the upgrade context.
    """

    def __init__(
        self,
        connection_url: str,
        database: str,
        server_selection_timeout_ms: int = 5000,
    ) -> None:
        self._connection_url = connection_url
        self._database_name = database
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._client: AsyncMongoClient | None = None
        self._db: AsyncDatabase | None = None

    @property
    def db(self) -> AsyncDatabase:
        if self._db is None:
            raise DocumentStoreError("MongoDocumentStore is not connected")
        return self._db

    async def connect(self) -> None:
        if self._client is not None:
            return
        client: AsyncMongoClient = AsyncMongoClient(
            self._connection_url,
            serverSelectionTimeoutMS=self._server_selection_timeout_ms,
        )
        try:
            # Fail during connect rather than on the first query
            await client.admin.command("ping")
        except PyMongoError as e:
            await client.close()
            raise DocumentStoreError(f"Cannot reach MongoDB: {e}") from e

        self._client = client
        self._db = client[self._database_name]
        logger.info("mongodb_connected", database=self._database_name)

    async def close(self) -> None:
        if self._client is None:
            return
        await self._client.close()
        self._client = None
        self._db = None
        logger.info("mongodb_closed", database=self._database_name)

    async def list_collection_names(self) -> list[str]:
        return await self.db.list_collection_names()

    async def find(self, collection: str, query: Document | None = None) -> list[Document]:
        cursor = self.db[collection].find(query or {})
        return await cursor.to_list(None)

    async def find_one(self, collection: str, query: Document) -> Document | None:
        return await self.db[collection].find_one(query)

    async def insert_one(self, collection: str, document: Document) -> Any:
        result = await self.db[collection].insert_one(dict(document))
        return result.inserted_id

    async def replace_one(
        self,
        collection: str,
        query: Document,
        document: Document,
        *,
        upsert: bool = False,
    ) -> bool:
        result = await self.db[collection].replace_one(query, document, upsert=upsert)
        return result.matched_count > 0 or result.upserted_id is not None

    async def unset_fields(
        self,
        collection: str,
        fields: list[str],
        query: Document | None = None,
    ) -> int:
        result = await self.db[collection].update_many(
            query or {},
            {"$unset": {field: "" for field in fields}},
        )
        return result.modified_count

    async def rename_collection(self, old_name: str, new_name: str) -> None:
        try:
            await self.db[old_name].rename(new_name)
        except OperationFailure as e:
            raise DocumentStoreError(
                f"Cannot rename collection '{old_name}' to '{new_name}': {e}"
            ) from e

    async def drop_collection(self, name: str) -> None:
        await self.db.drop_collection(name)
