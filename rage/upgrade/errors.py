"""Upgrader exception hierarchy.

Every exception carries the controller results gathered so far, so the
entry point can log the full result set before exiting.
"""

from typing import Any


class UpgradeError(Exception):
    """Base exception for all fatal upgrader conditions."""

    def __init__(self, message: str, results: dict[str, Any] | None = None) -> None:
        self.message = message
        self.results = results or {}
        super().__init__(message)


class ConnectError(UpgradeError):
    """Raised when a controller fails to connect. Never retried."""

    def __init__(
        self, message: str, controller: str, results: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message, results)
        self.controller = controller


class RefreshError(UpgradeError):
    """Raised when one or more controllers fail to refresh."""

    def __init__(
        self,
        message: str,
        errors: dict[str, BaseException],
        results: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, results)
        self.errors = errors


class FatalStatusError(UpgradeError):
    """Raised when a controller reports an unrecoverable state during refresh."""

    def __init__(
        self, message: str, controller: str, results: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message, results)
        self.controller = controller


class TransformError(UpgradeError):
    """Raised when a controller's transform fails.

    ``phase`` names the transformer phase that failed (backup, upgrade,
    check, clean, record) or None when the failure came from outside them.
    """

    def __init__(
        self,
        message: str,
        controller: str,
        phase: str | None = None,
        results: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, results)
        self.controller = controller
        self.phase = phase


class CheckFailedError(TransformError):
    """Raised when post-upgrade validation finds the data inconsistent."""

    def __init__(
        self,
        message: str,
        controller: str = "",
        results: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, controller, phase="check", results=results)


class UpgradeStalledError(UpgradeError):
    """Raised when the configured round limit is reached without converging."""

    def __init__(
        self, message: str, rounds: int, results: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message, results)
        self.rounds = rounds
