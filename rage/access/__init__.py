"""Role-based access table for the analytics backend routes.

    from rage.access import default_policy

    default_policy().is_allowed("student", "/classes/123", "put")  # True
"""

from functools import lru_cache

from rage.access.defaults import DEFAULT_ACCESS_TABLE
from rage.access.models import AccessTable, AllowRule, RoleEntry
from rage.access.patterns import ResourcePattern, compile_pattern, normalize_path
from rage.access.policy import AccessPolicy


@lru_cache(maxsize=1)
def default_policy() -> AccessPolicy:
    """Policy for the built-in table, built once per process."""
    return AccessPolicy(DEFAULT_ACCESS_TABLE)


__all__ = [
    "AccessPolicy",
    "AccessTable",
    "AllowRule",
    "DEFAULT_ACCESS_TABLE",
    "ResourcePattern",
    "RoleEntry",
    "compile_pattern",
    "default_policy",
    "normalize_path",
]
