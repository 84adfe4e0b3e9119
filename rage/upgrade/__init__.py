"""Schema upgrader.

Runs named controllers round by round until every controller's data is at
its latest version, holding back controllers whose current version another
controller still depends on.

    registry = ControllerRegistry()
    registry.register("mongo", MongoController())
    orchestrator = UpgradeOrchestrator(registry, UpgradeContext(settings=settings))
    await orchestrator.upgrade()
"""

from rage.upgrade.controller import TransformerController, UpgradeController
from rage.upgrade.errors import (
    CheckFailedError,
    ConnectError,
    FatalStatusError,
    RefreshError,
    TransformError,
    UpgradeError,
    UpgradeStalledError,
)
from rage.upgrade.models import (
    ControllerVersion,
    RefreshResult,
    RefreshStatus,
    UpgradeContext,
    Version,
)
from rage.upgrade.orchestrator import UpgradeOrchestrator, UpgradeState
from rage.upgrade.registry import ControllerRegistry
from rage.upgrade.resolver import RequirementLedger, is_eligible, select_transforms
from rage.upgrade.transformer import Transformer

__all__ = [
    "CheckFailedError",
    "ConnectError",
    "ControllerRegistry",
    "ControllerVersion",
    "FatalStatusError",
    "RefreshError",
    "RefreshResult",
    "RefreshStatus",
    "RequirementLedger",
    "TransformError",
    "Transformer",
    "TransformerController",
    "UpgradeContext",
    "UpgradeController",
    "UpgradeError",
    "UpgradeOrchestrator",
    "UpgradeStalledError",
    "UpgradeState",
    "Version",
    "is_eligible",
    "select_transforms",
]
