"""Document storage used by the upgrader's migrations."""

from rage.store.base import Document, DocumentStore, DocumentStoreError
from rage.store.factory import create_document_store
from rage.store.inmemory import InMemoryDocumentStore
from rage.store.mongodb import MongoDocumentStore

__all__ = [
    "Document",
    "DocumentStore",
    "DocumentStoreError",
    "InMemoryDocumentStore",
    "MongoDocumentStore",
    "create_document_store",
]
