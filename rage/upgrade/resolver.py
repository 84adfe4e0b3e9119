"""Dependency resolution between upgrade controllers.

Each round the requirements every controller declared in its refresh
result are gathered into a ledger: controller name -> versions other
controllers still need it to be at. A controller may transform only when
nobody needs it to stay at its current origin version.
"""

from collections.abc import Mapping

from rage.upgrade.models import RefreshResult, RefreshStatus, Version


class RequirementLedger:
    """Versions each controller is pinned at for the current round."""

    def __init__(self) -> None:
        self._pins: dict[str, dict[Version, set[str]]] = {}

    @classmethod
    def from_results(cls, results: Mapping[str, RefreshResult]) -> "RequirementLedger":
        ledger = cls()
        for requirer, result in results.items():
            for required, version in result.requirements.items():
                ledger.add(requirer, required, version)
        return ledger

    def add(self, requirer: str, required: str, version: Version | int | str) -> None:
        """Record that ``requirer`` needs ``required`` to be at ``version``.

        A controller's requirement on itself pins nothing.
        """
        if requirer == required:
            return
        by_version = self._pins.setdefault(required, {})
        by_version.setdefault(Version.parse(version), set()).add(requirer)

    def is_pinned(self, name: str, version: Version) -> bool:
        return version in self._pins.get(name, {})

    def pinned_by(self, name: str, version: Version) -> set[str]:
        """Controllers that need ``name`` to stay at ``version``."""
        return set(self._pins.get(name, {}).get(version, set()))

    def versions(self, name: str) -> set[Version]:
        return set(self._pins.get(name, {}))

    def __contains__(self, name: object) -> bool:
        return name in self._pins


def is_eligible(name: str, result: RefreshResult, ledger: RequirementLedger) -> bool:
    """Whether a controller may transform this round."""
    if result.status == RefreshStatus.UP_TO_DATE or result.version is None:
        return False
    return not ledger.is_pinned(name, result.version.origin)


def select_transforms(
    results: Mapping[str, RefreshResult],
    ledger: RequirementLedger | None = None,
) -> list[str]:
    """Names of the controllers allowed to transform, in ``results`` order."""
    if ledger is None:
        ledger = RequirementLedger.from_results(results)
    return [name for name, result in results.items() if is_eligible(name, result, ledger)]
