"""Access table models.

The table maps roles to the resource patterns they may reach and the HTTP
verbs allowed on them, plus the routes exempt from authorization and the
roles users may be given automatically.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

WILDCARD_PERMISSION = "*"


class AllowRule(BaseModel):
    """Resources sharing one set of permitted verbs."""

    model_config = ConfigDict(frozen=True)

    resources: list[str] = Field(..., min_length=1, description="Resource path patterns")
    permissions: list[str] = Field(
        ..., min_length=1, description="Allowed HTTP verbs, or '*' for all"
    )

    @field_validator("permissions")
    @classmethod
    def lowercase_permissions(cls, value: list[str]) -> list[str]:
        return [permission.strip().lower() for permission in value]

    @field_validator("resources")
    @classmethod
    def check_resources(cls, value: list[str]) -> list[str]:
        for resource in value:
            if not resource.startswith("/"):
                raise ValueError(f"Resource pattern must start with '/': {resource!r}")
        return value


class RoleEntry(BaseModel):
    """Allow rules granted to one or more roles."""

    model_config = ConfigDict(frozen=True)

    roles: list[str] = Field(..., min_length=1, description="Role names")
    allows: list[AllowRule] = Field(default_factory=list, description="Granted rules")

    @field_validator("roles", mode="before")
    @classmethod
    def wrap_single_role(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value


class AccessTable(BaseModel):
    """The full role/permission table."""

    model_config = ConfigDict(frozen=True)

    roles: list[RoleEntry] = Field(default_factory=list, description="Role entries")
    anonymous: list[str] = Field(
        default_factory=list,
        description="Path patterns reachable without authorization",
    )
    autoroles: list[str] = Field(
        default_factory=list,
        description="Roles users may be assigned automatically",
    )
