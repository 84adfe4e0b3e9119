"""In-memory implementation of DocumentStore."""

import copy
from typing import Any
from uuid import uuid4

from rage.store.base import Document, DocumentStore, DocumentStoreError


def _matches(document: Document, query: Document | None) -> bool:
    if not query:
        return True
    return all(key in document and document[key] == value for key, value in query.items())


class InMemoryDocumentStore(DocumentStore):
    """In-memory implementation of DocumentStore for testing and development.

    Collections are plain lists scanned linearly. Documents are deep-copied
    on the way in and out so callers cannot mutate stored state.
    Not suitable for production use.
    """

    def __init__(self, collections: dict[str, list[Document]] | None = None) -> None:
        self._collections: dict[str, list[Document]] = {
            name: [copy.deepcopy(doc) for doc in docs]
            for name, docs in (collections or {}).items()
        }
        self.connected = False

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.connected = False

    async def list_collection_names(self) -> list[str]:
        return list(self._collections)

    async def find(self, collection: str, query: Document | None = None) -> list[Document]:
        return [
            copy.deepcopy(doc)
            for doc in self._collections.get(collection, [])
            if _matches(doc, query)
        ]

    async def find_one(self, collection: str, query: Document) -> Document | None:
        for doc in self._collections.get(collection, []):
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, collection: str, document: Document) -> Any:
        stored = copy.deepcopy(document)
        stored.setdefault("_id", str(uuid4()))
        self._collections.setdefault(collection, []).append(stored)
        return stored["_id"]

    async def replace_one(
        self,
        collection: str,
        query: Document,
        document: Document,
        *,
        upsert: bool = False,
    ) -> bool:
        docs = self._collections.get(collection, [])
        for index, existing in enumerate(docs):
            if _matches(existing, query):
                replacement = copy.deepcopy(document)
                replacement["_id"] = existing["_id"]
                docs[index] = replacement
                return True
        if not upsert:
            return False
        new_document = {**query, **document}
        await self.insert_one(collection, new_document)
        return True

    async def unset_fields(
        self,
        collection: str,
        fields: list[str],
        query: Document | None = None,
    ) -> int:
        modified = 0
        for doc in self._collections.get(collection, []):
            if not _matches(doc, query):
                continue
            removed = [field for field in fields if field in doc]
            for field in removed:
                del doc[field]
            if removed:
                modified += 1
        return modified

    async def rename_collection(self, old_name: str, new_name: str) -> None:
        if old_name not in self._collections:
            raise DocumentStoreError(f"Collection '{old_name}' does not exist")
        if new_name in self._collections:
            raise DocumentStoreError(f"Collection '{new_name}' already exists")
        self._collections[new_name] = self._collections.pop(old_name)

    async def drop_collection(self, name: str) -> None:
        self._collections.pop(name, None)
