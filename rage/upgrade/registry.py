"""Registry of upgrade controllers.

Built once at startup and handed to the orchestrator. Controllers are
never removed; registering a name again replaces the earlier controller
but keeps its position in iteration order.
"""

from collections.abc import Iterator

from rage.observability.logging import get_logger
from rage.upgrade.controller import UpgradeController

logger = get_logger(__name__)


class ControllerRegistry:
    """Named upgrade controllers in registration order."""

    def __init__(self) -> None:
        self._controllers: dict[str, UpgradeController] = {}

    def register(self, name: str, controller: UpgradeController) -> None:
        if name in self._controllers:
            logger.warning("upgrade_controller_replaced", controller=name)
        self._controllers[name] = controller

    def get(self, name: str) -> UpgradeController:
        """Get a controller by name.

        Raises:
            KeyError: If no controller is registered under that name
        """
        try:
            return self._controllers[name]
        except KeyError:
            raise KeyError(f"No controller registered as '{name}'") from None

    def names(self) -> list[str]:
        return list(self._controllers)

    def items(self) -> list[tuple[str, UpgradeController]]:
        return list(self._controllers.items())

    def __contains__(self, name: object) -> bool:
        return name in self._controllers

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._controllers))

    def __len__(self) -> int:
        return len(self._controllers)
