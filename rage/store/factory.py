"""DocumentStore factory for creating backend instances."""

from rage.config.models.storage import DocumentStoreConfig
from rage.observability.logging import get_logger
from rage.store.base import DocumentStore
from rage.store.inmemory import InMemoryDocumentStore
from rage.store.mongodb import MongoDocumentStore

logger = get_logger(__name__)


def create_document_store(config: DocumentStoreConfig) -> DocumentStore:
    """Create a DocumentStore instance based on configuration.

    Raises:
        ValueError: If backend type is not supported
    """
    backend = config.backend

    if backend == "inmemory":
        logger.info("creating_document_store", backend="inmemory")
        return InMemoryDocumentStore()

    elif backend == "mongodb":
        logger.info(
            "creating_document_store",
            backend="mongodb",
            connection_url=config.connection_url,
            database=config.database,
        )
        return MongoDocumentStore(
            connection_url=config.connection_url,
            database=config.database,
            server_selection_timeout_ms=config.server_selection_timeout_ms,
        )

    raise ValueError(f"Unsupported document store backend: {backend}")
