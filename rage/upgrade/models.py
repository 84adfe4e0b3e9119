"""Upgrader models.

Defines the typed schema version, the per-round refresh snapshot of a
controller and the context object threaded through every controller hook.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from rage.config.settings import Settings
    from rage.store.base import DocumentStore


class Version(BaseModel):
    """A schema version of one controller's persisted data.

    Accepts an int, an integral float or a numeric string wherever a Version
    is expected, so requirements declared as "2" and as 2 name the same
    version, and a stored 2.0 reads back as version 2.
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., ge=0, description="Version number")

    @model_validator(mode="before")
    @classmethod
    def coerce_number(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("A version cannot be a boolean")
        if isinstance(value, int):
            return {"number": value}
        if isinstance(value, float):
            # Version records written by older drivers may hold doubles
            if not value.is_integer():
                raise ValueError(f"Invalid version: {value!r}")
            return {"number": int(value)}
        if isinstance(value, str):
            text = value.strip()
            if not text.isdigit():
                raise ValueError(f"Invalid version: {value!r}")
            return {"number": int(text)}
        return value

    @classmethod
    def parse(cls, value: "Version | int | float | str") -> "Version":
        """Build a Version from a number, a numeric string or another Version."""
        if isinstance(value, Version):
            return value
        return cls.model_validate(value)

    def next(self) -> "Version":
        return Version(number=self.number + 1)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.number < other.number

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.number <= other.number

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.number > other.number

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.number >= other.number

    def __str__(self) -> str:
        return str(self.number)


class ControllerVersion(BaseModel):
    """The version step a controller's next transform performs."""

    model_config = ConfigDict(frozen=True)

    origin: Version = Field(..., description="Version the data is at")
    destination: Version = Field(..., description="Version the transform produces")

    @model_validator(mode="after")
    def check_order(self) -> "ControllerVersion":
        if self.destination <= self.origin:
            raise ValueError(
                f"Destination version ({self.destination}) must be greater than "
                f"origin version ({self.origin})"
            )
        return self


class RefreshStatus(IntEnum):
    """Status a controller reports at the start of a round."""

    UP_TO_DATE = 0
    NEEDS_TRANSFORM = 1
    FATAL = 2


class RefreshResult(BaseModel):
    """Snapshot of one controller taken at the start of a round."""

    model_config = ConfigDict(frozen=True)

    status: RefreshStatus = Field(..., description="Refresh status")
    version: ControllerVersion | None = Field(
        default=None,
        description="Pending version step, absent when nothing is left to do",
    )
    requirements: dict[str, Version] = Field(
        default_factory=dict,
        description="Controller name -> version it must be at before this one transforms",
    )
    detail: str | None = Field(default=None, description="Human-readable explanation")

    @model_validator(mode="after")
    def check_version(self) -> "RefreshResult":
        if self.status == RefreshStatus.NEEDS_TRANSFORM and self.version is None:
            raise ValueError("A controller needing a transform must declare its version step")
        return self

    @classmethod
    def up_to_date(cls, detail: str | None = None) -> "RefreshResult":
        return cls(status=RefreshStatus.UP_TO_DATE, detail=detail)

    @classmethod
    def fatal(cls, detail: str) -> "RefreshResult":
        return cls(status=RefreshStatus.FATAL, detail=detail)

    @property
    def origin(self) -> Version | None:
        return self.version.origin if self.version else None

    def summary(self) -> dict[str, Any]:
        """Plain dict used when logging result sets."""
        return {
            "status": self.status.name.lower(),
            "origin": str(self.version.origin) if self.version else None,
            "destination": str(self.version.destination) if self.version else None,
            "requirements": {name: str(v) for name, v in self.requirements.items()},
            "detail": self.detail,
        }


@dataclass
class UpgradeContext:
    """Shared configuration object threaded through every controller hook.

    Controllers add the handles they open during connect to ``stores``
    so that later controllers and transformers can reach them.
    """

    settings: "Settings"
    stores: dict[str, "DocumentStore"] = field(default_factory=dict)

    def store(self, name: str) -> "DocumentStore":
        """Get a store opened during connect.

        Raises:
            KeyError: If no controller registered a store under that name
        """
        try:
            return self.stores[name]
        except KeyError:
            raise KeyError(f"No store named '{name}' was opened during connect") from None
