"""Upgrade controllers.

A controller owns one category of persisted data (the document store, the
search index, ...) and knows how to move it forward one version per
transform. The orchestrator only talks to controllers through
``UpgradeController``; ``TransformerController`` implements it on top of an
ordered chain of transformers and a version record kept in a document store.
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Sequence

from rage.observability.logging import get_logger
from rage.observability.metrics import UPGRADE_STEP_LATENCY
from rage.store.base import DocumentStore
from rage.upgrade.errors import CheckFailedError, TransformError
from rage.upgrade.models import RefreshResult, RefreshStatus, UpgradeContext, Version
from rage.upgrade.transformer import PHASES, Transformer

logger = get_logger(__name__)


class UpgradeController(ABC):
    """Abstract interface the orchestrator drives."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    async def connect(self, context: UpgradeContext) -> UpgradeContext:
        """Open whatever the controller needs and return the context for the next one."""
        pass

    @abstractmethod
    async def refresh(self, context: UpgradeContext) -> RefreshResult:
        """Read the current state of the controller's data."""
        pass

    @abstractmethod
    async def transform(self, context: UpgradeContext) -> UpgradeContext:
        """Move the data forward by one version."""
        pass

    async def restore(self, context: UpgradeContext) -> UpgradeContext:
        """Manual recovery lever. Never invoked by the orchestrator."""
        return context

    async def close(self, context: UpgradeContext) -> None:  # noqa: ARG002
        """Release whatever connect opened."""
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class TransformerController(UpgradeController):
    """Controller driven by an ordered chain of transformers.

    The version of the controller's data is kept in ``version_collection``
    of the store named ``store_name`` in the context, one record per
    controller: ``{"_id": <name>, "version": <int>}``.
    """

    # Version assumed when existing data has no version record
    baseline_version: Version = Version(number=1)

    def __init__(
        self,
        name: str,
        transformers: Sequence[Transformer],
        *,
        store_name: str,
        version_collection: str = "versions",
    ) -> None:
        super().__init__(name)
        if not transformers:
            raise ValueError(f"Controller '{name}' needs at least one transformer")
        for previous, current in zip(transformers, transformers[1:], strict=False):
            if previous.version.destination != current.version.origin:
                raise ValueError(
                    f"Controller '{name}': {current.name} does not continue from "
                    f"{previous.name}"
                )
        self.transformers = list(transformers)
        self.store_name = store_name
        self.version_collection = version_collection

    @property
    def latest_version(self) -> Version:
        return self.transformers[-1].version.destination

    def transformer_for(self, version: Version) -> Transformer | None:
        """The transformer whose origin is ``version``, if any."""
        for transformer in self.transformers:
            if transformer.version.origin == version:
                return transformer
        return None

    async def is_fresh_install(self, context: UpgradeContext) -> bool:  # noqa: ARG002
        """Whether unversioned data is a new install rather than legacy data."""
        return False

    async def stamp_fresh_install(self, context: UpgradeContext) -> bool:
        """Record the latest version for a new install that has no version record.

        Called from ``connect`` so that refresh only ever reads.

        Returns:
            True if a version record was written.
        """
        store = context.store(self.store_name)
        if await store.find_one(self.version_collection, {"_id": self.name}) is not None:
            return False
        if not await self.is_fresh_install(context):
            return False

        logger.info(
            "upgrade_fresh_install",
            controller=self.name,
            version=str(self.latest_version),
        )
        await self.write_version(store, self.latest_version)
        return True

    async def read_version(self, context: UpgradeContext) -> Version:
        """Read the stored data version, falling back to ``baseline_version``."""
        store = context.store(self.store_name)
        record = await store.find_one(self.version_collection, {"_id": self.name})
        if record is not None:
            return Version.parse(record["version"])

        logger.info(
            "upgrade_version_missing",
            controller=self.name,
            assumed_version=str(self.baseline_version),
        )
        return self.baseline_version

    async def write_version(self, store: DocumentStore, version: Version) -> None:
        await store.replace_one(
            self.version_collection,
            {"_id": self.name},
            {"_id": self.name, "version": version.number},
            upsert=True,
        )

    async def refresh(self, context: UpgradeContext) -> RefreshResult:
        current = await self.read_version(context)
        if current == self.latest_version:
            return RefreshResult.up_to_date(detail=f"At version {current}")

        transformer = self.transformer_for(current)
        if transformer is None:
            return RefreshResult.fatal(
                f"No transformer for version {current} "
                f"(latest known version is {self.latest_version})"
            )

        return RefreshResult(
            status=RefreshStatus.NEEDS_TRANSFORM,
            version=transformer.version,
            requirements=dict(transformer.requires),
            detail=transformer.name,
        )

    async def _pending_transformer(self, context: UpgradeContext) -> Transformer:
        current = await self.read_version(context)
        transformer = self.transformer_for(current)
        if transformer is None:
            raise TransformError(
                f"No transformer for version {current}",
                controller=self.name,
            )
        return transformer

    async def transform(self, context: UpgradeContext) -> UpgradeContext:
        transformer = await self._pending_transformer(context)
        log = logger.bind(controller=self.name, transformer=transformer.name)

        for phase in PHASES:
            started = time.perf_counter()
            log.info("upgrade_phase_started", phase=phase)
            try:
                context = await getattr(transformer, phase)(context)
            except CheckFailedError as e:
                if phase != "check":
                    log.error("upgrade_phase_failed", phase=phase, error=e.message)
                    raise TransformError(
                        f"{transformer.name} failed during {phase}: {e.message}",
                        controller=self.name,
                        phase=phase,
                    ) from e
                log.error("upgrade_check_failed", error=e.message)
                raise CheckFailedError(e.message, controller=self.name) from e
            except Exception as e:
                log.error("upgrade_phase_failed", phase=phase, error=str(e))
                raise TransformError(
                    f"{transformer.name} failed during {phase}: {e}",
                    controller=self.name,
                    phase=phase,
                ) from e
            finally:
                UPGRADE_STEP_LATENCY.labels(controller=self.name, phase=phase).observe(
                    time.perf_counter() - started
                )
            log.info("upgrade_phase_finished", phase=phase)

        try:
            await self.write_version(context.store(self.store_name), transformer.version.destination)
        except Exception as e:
            raise TransformError(
                f"Could not record version {transformer.version.destination}: {e}",
                controller=self.name,
                phase="record",
            ) from e

        log.info("upgrade_version_recorded", version=str(transformer.version.destination))
        return context

    async def restore(self, context: UpgradeContext) -> UpgradeContext:
        transformer = await self._pending_transformer(context)
        logger.warning("upgrade_restore_started", controller=self.name, transformer=transformer.name)
        context = await transformer.restore(context)
        logger.warning("upgrade_restore_finished", controller=self.name, transformer=transformer.name)
        return context
