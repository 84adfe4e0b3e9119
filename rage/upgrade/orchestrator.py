"""Upgrade orchestrator.

Drives every registered controller through
IDLE -> CONNECTING -> REFRESHING -> (TRANSFORMING -> REFRESHING)* -> DONE | FATAL.

Each round refreshes all controllers concurrently and collects every
outcome before deciding anything. Selected transforms then run one after
another, never concurrently, since most controllers share the same store.
Any failure is fatal: the orchestrator raises an UpgradeError carrying the
results gathered so far and never invokes ``restore`` on its own.
"""

import asyncio
from enum import Enum

from rage.observability.logging import get_logger
from rage.observability.metrics import UPGRADE_ROUNDS, UPGRADE_TRANSFORMS
from rage.upgrade.errors import (
    ConnectError,
    FatalStatusError,
    RefreshError,
    TransformError,
    UpgradeError,
    UpgradeStalledError,
)
from rage.upgrade.models import RefreshResult, RefreshStatus, UpgradeContext
from rage.upgrade.registry import ControllerRegistry
from rage.upgrade.resolver import RequirementLedger, select_transforms

logger = get_logger(__name__)


class UpgradeState(str, Enum):
    """Orchestrator lifecycle state."""

    IDLE = "idle"
    CONNECTING = "connecting"
    REFRESHING = "refreshing"
    TRANSFORMING = "transforming"
    DONE = "done"
    FATAL = "fatal"


def summarize(results: dict[str, RefreshResult]) -> dict[str, dict]:
    return {name: result.summary() for name, result in results.items()}


class UpgradeOrchestrator:
    """Runs refresh/transform rounds until every controller is up to date."""

    def __init__(
        self,
        registry: ControllerRegistry,
        context: UpgradeContext,
        *,
        max_stalled_rounds: int | None = None,
    ) -> None:
        """Initialize orchestrator.

        Args:
            registry: Controllers to upgrade, fixed for the whole run
            context: Shared context threaded through every hook
            max_stalled_rounds: Fail after this many consecutive rounds in
                which every pending controller was pinned. None loops until
                convergence.
        """
        self._registry = registry
        self.context = context
        self._max_stalled_rounds = max_stalled_rounds
        self.state = UpgradeState.IDLE
        self.rounds = 0
        self.stalled_rounds = 0
        self.results: dict[str, RefreshResult] = {}

    def _fail(self, error: UpgradeError) -> UpgradeError:
        self.state = UpgradeState.FATAL
        if not error.results:
            error.results = summarize(self.results)
        return error

    async def connect(self) -> UpgradeContext:
        """Connect every controller in registration order, threading the context."""
        self.state = UpgradeState.CONNECTING
        logger.info("upgrade_connect_started", controllers=self._registry.names())

        context = self.context
        for name, controller in self._registry.items():
            try:
                context = await controller.connect(context)
            except Exception as e:
                logger.error("upgrade_connect_failed", controller=name, error=str(e))
                raise self._fail(
                    ConnectError(f"Controller '{name}' failed to connect: {e}", controller=name)
                ) from e

        self.context = context
        logger.info("upgrade_connect_finished")
        return context

    async def refresh(self) -> dict[str, RefreshResult]:
        """Refresh every controller concurrently.

        Raises:
            RefreshError: If any controller's refresh raised; results of the
                controllers that did refresh are attached but not used.
        """
        self.state = UpgradeState.REFRESHING
        names = self._registry.names()
        logger.info("upgrade_refresh_started", round=self.rounds + 1)

        outcomes = await asyncio.gather(
            *(self._registry.get(name).refresh(self.context) for name in names),
            return_exceptions=True,
        )

        results: dict[str, RefreshResult] = {}
        errors: dict[str, BaseException] = {}
        for name, outcome in zip(names, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                errors[name] = outcome
            else:
                results[name] = outcome

        self.results = results
        if errors:
            for name, error in errors.items():
                logger.error("upgrade_refresh_failed", controller=name, error=str(error))
            raise self._fail(
                RefreshError(
                    f"Refresh failed for: {', '.join(errors)}",
                    errors=errors,
                )
            ) from next(iter(errors.values()))

        logger.info("upgrade_refresh_finished", results=summarize(results))
        return results

    async def transform(self, names: list[str]) -> None:
        """Run the selected controllers' transforms one after another."""
        self.state = UpgradeState.TRANSFORMING
        for name in names:
            controller = self._registry.get(name)
            logger.info("upgrade_transform_started", controller=name)
            try:
                self.context = await controller.transform(self.context)
            except TransformError as e:
                UPGRADE_TRANSFORMS.labels(controller=name, outcome="failed").inc()
                e.controller = e.controller or name
                self._fail(e)
                raise
            except Exception as e:
                UPGRADE_TRANSFORMS.labels(controller=name, outcome="failed").inc()
                raise self._fail(
                    TransformError(
                        f"Controller '{name}' failed to transform: {e}",
                        controller=name,
                    )
                ) from e
            UPGRADE_TRANSFORMS.labels(controller=name, outcome="success").inc()
            logger.info("upgrade_transform_finished", controller=name)

    async def run_round(self) -> bool:
        """Run one refresh-then-transform round.

        Returns:
            True once every controller reported it is up to date.
        """
        results = await self.refresh()
        self.rounds += 1
        UPGRADE_ROUNDS.inc()

        if all(r.status == RefreshStatus.UP_TO_DATE for r in results.values()):
            return True

        for name, result in results.items():
            if result.status == RefreshStatus.FATAL:
                logger.error("upgrade_fatal_status", controller=name, detail=result.detail)
                raise self._fail(
                    FatalStatusError(
                        f"Controller '{name}' reported a fatal status: {result.detail}",
                        controller=name,
                    )
                )

        ledger = RequirementLedger.from_results(results)
        selected = select_transforms(results, ledger)
        if not selected:
            # Every pending controller is pinned by another one
            self.stalled_rounds += 1
            logger.warning(
                "upgrade_round_stalled",
                round=self.rounds,
                stalled_rounds=self.stalled_rounds,
                pinned={
                    name: sorted(ledger.pinned_by(name, result.origin))
                    for name, result in results.items()
                    if result.origin is not None
                },
            )
        else:
            self.stalled_rounds = 0
            await self.transform(selected)
        return False

    async def run(self) -> dict[str, RefreshResult]:
        """Run rounds until convergence. Call ``connect`` first."""
        while not await self.run_round():
            if (
                self._max_stalled_rounds is not None
                and self.stalled_rounds >= self._max_stalled_rounds
            ):
                raise self._fail(
                    UpgradeStalledError(
                        f"No controller could transform for {self.stalled_rounds} rounds in a row",
                        rounds=self.stalled_rounds,
                    )
                )

        self.state = UpgradeState.DONE
        logger.info("upgrade_finished", rounds=self.rounds)
        return self.results

    async def upgrade(self) -> dict[str, RefreshResult]:
        """Connect every controller, then run rounds until convergence."""
        await self.connect()
        return await self.run()

    async def close(self) -> None:
        """Close every controller, logging rather than raising on failure."""
        for name, controller in self._registry.items():
            try:
                await controller.close(self.context)
            except Exception as e:
                logger.warning("upgrade_close_failed", controller=name, error=str(e))
