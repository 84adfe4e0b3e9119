"""Access table evaluation.

A role may use a verb on a resource when one of its allow rules lists a
pattern matching the resource together with that verb or the ``*``
wildcard. Unknown roles are denied everything.
"""

from collections.abc import Iterable
from pathlib import Path

from rage.access.models import WILDCARD_PERMISSION, AccessTable
from rage.access.patterns import ResourcePattern, compile_pattern
from rage.config.loader import read_toml
from rage.observability.logging import get_logger

logger = get_logger(__name__)


class AccessPolicy:
    """Evaluates requests against an AccessTable."""

    def __init__(self, table: AccessTable) -> None:
        self.table = table
        self._grants: dict[str, list[tuple[ResourcePattern, frozenset[str]]]] = {}
        for entry in table.roles:
            for role in entry.roles:
                grants = self._grants.setdefault(role, [])
                for rule in entry.allows:
                    permissions = frozenset(rule.permissions)
                    for resource in rule.resources:
                        grants.append((compile_pattern(resource), permissions))
        self._anonymous = [compile_pattern(pattern) for pattern in table.anonymous]
        self._autoroles = frozenset(table.autoroles)

    @classmethod
    def from_toml(cls, path: Path) -> "AccessPolicy":
        """Load a table from a TOML file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            pydantic.ValidationError: If the table is malformed
        """
        return cls(AccessTable.model_validate(read_toml(path)))

    def roles(self) -> list[str]:
        return list(self._grants)

    def allowed_permissions(self, role: str, resource: str) -> set[str]:
        """Verbs ``role`` may use on ``resource``; may contain ``*``."""
        allowed: set[str] = set()
        for pattern, permissions in self._grants.get(role, []):
            if pattern.matches(resource):
                allowed |= permissions
        return allowed

    def is_allowed(self, roles: str | Iterable[str], resource: str, verb: str) -> bool:
        """Whether any of ``roles`` may use ``verb`` on ``resource``."""
        roles = [roles] if isinstance(roles, str) else list(roles)
        verb = verb.strip().lower()
        for role in roles:
            allowed = self.allowed_permissions(role, resource)
            if verb in allowed or WILDCARD_PERMISSION in allowed:
                return True
        logger.debug("access_denied", roles=list(roles), resource=resource, verb=verb)
        return False

    def is_anonymous(self, path: str) -> bool:
        """Whether ``path`` is reachable without authorization."""
        return any(pattern.matches(path) for pattern in self._anonymous)

    def is_autorole(self, role: str) -> bool:
        return role in self._autoroles
