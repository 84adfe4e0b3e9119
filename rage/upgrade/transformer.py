"""Migration step contract.

A Transformer moves one controller's data from ``version.origin`` to
``version.destination``. Its phases run in order backup, upgrade, check,
clean. ``restore`` is a manual recovery lever and is never run by the
upgrader itself.
"""

from abc import ABC, abstractmethod
from typing import ClassVar

from rage.upgrade.models import ControllerVersion, UpgradeContext, Version

PHASES: tuple[str, ...] = ("backup", "upgrade", "check", "clean")


class Transformer(ABC):
    """One migration step of a controller's transformer chain.

    Subclasses declare ``version`` and, when they read another
    controller's data, ``requires`` mapping that controller's name to the
    version its data must still be at.

    Contract for each phase:
    - backup: snapshot before upgrading; running it again once the snapshot
      exists must not change anything.
    - upgrade: transform the data; the transformer owns consistency.
    - check: validate the result, raising CheckFailedError when it is wrong.
    - clean: drop whatever backup or scratch data is no longer needed.
    """

    version: ClassVar[ControllerVersion]
    requires: ClassVar[dict[str, Version]] = {}

    @property
    def name(self) -> str:
        return f"{type(self).__name__}({self.version.origin}->{self.version.destination})"

    async def backup(self, context: UpgradeContext) -> UpgradeContext:
        return context

    @abstractmethod
    async def upgrade(self, context: UpgradeContext) -> UpgradeContext:
        pass

    @abstractmethod
    async def check(self, context: UpgradeContext) -> UpgradeContext:
        pass

    async def clean(self, context: UpgradeContext) -> UpgradeContext:
        return context

    async def restore(self, context: UpgradeContext) -> UpgradeContext:
        return context
