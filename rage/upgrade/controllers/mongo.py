"""Upgrade controller for the analytics document store."""

from rage.observability.logging import get_logger
from rage.store.base import DocumentStore
from rage.store.factory import create_document_store
from rage.upgrade.controller import TransformerController
from rage.upgrade.models import UpgradeContext, Version
from rage.upgrade.transformer import Transformer
from rage.upgrade.transformers.mongo import MONGO_TRANSFORMERS

logger = get_logger(__name__)

STORE_NAME = "mongodb"


class MongoController(TransformerController):
    """Migrates games, classes and activities kept in the document store.

    Opens the configured document store during connect and shares it with
    the rest of the run under ``mongodb`` in the context.
    """

    # Earliest layout the transformer chain can migrate from
    baseline_version = Version(number=2)

    def __init__(
        self,
        *,
        store: DocumentStore | None = None,
        transformers: list[Transformer] | None = None,
        version_collection: str = "versions",
        name: str = "mongo",
    ) -> None:
        super().__init__(
            name,
            transformers or [cls() for cls in MONGO_TRANSFORMERS],
            store_name=STORE_NAME,
            version_collection=version_collection,
        )
        self._store = store

    async def connect(self, context: UpgradeContext) -> UpgradeContext:
        if self._store is None:
            self._store = create_document_store(context.settings.storage.documents)
        await self._store.connect()
        context.stores[STORE_NAME] = self._store
        await self.stamp_fresh_install(context)
        logger.info("mongo_controller_connected", controller=self.name)
        return context

    async def is_fresh_install(self, context: UpgradeContext) -> bool:
        collections = await context.store(STORE_NAME).list_collection_names()
        return not [name for name in collections if name != self.version_collection]

    async def close(self, context: UpgradeContext) -> None:  # noqa: ARG002
        if self._store is not None:
            await self._store.close()
