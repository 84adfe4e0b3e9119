"""Upgrader configuration models.

Defines how the schema upgrader runs and where it records versions.
"""

from pydantic import BaseModel, Field


class UpgradeConfig(BaseModel):
    """Upgrader loop configuration."""

    max_stalled_rounds: int | None = Field(
        default=None,
        ge=1,
        description=(
            "Fail once this many rounds in a row could not transform any controller. "
            "Unset keeps looping until every controller is up to date."
        ),
    )
    version_collection: str = Field(
        default="versions",
        min_length=1,
        description="Collection holding one version record per controller",
    )
