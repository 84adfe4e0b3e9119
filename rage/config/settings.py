"""Upgrader settings: storage, upgrade loop and observability sections."""

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from rage.config.loader import load_config
from rage.config.models.observability import ObservabilityConfig
from rage.config.models.storage import StorageConfig
from rage.config.models.upgrade import UpgradeConfig

# Merged TOML files, read by FileSectionsSource
_file_sections: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    global _file_sections
    _file_sections = config


class FileSectionsSource(PydanticBaseSettingsSource):
    """Feeds the merged TOML sections to Settings below the environment."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        value = _file_sections.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return {
            name: section
            for name, section in _file_sections.items()
            if name in self.settings_cls.model_fields
        }


class Settings(BaseSettings):
    """Everything the upgrader reads at startup.

    Sources, lowest precedence first: field defaults, config/default.toml,
    config/{RAGE_ENV}.toml, RAGE_* variables (``__`` separates nested keys,
    e.g. RAGE_UPGRADE__MAX_STALLED_ROUNDS), constructor arguments.
    """

    model_config = SettingsConfigDict(
        env_prefix="RAGE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    storage: StorageConfig = Field(
        default_factory=StorageConfig,
        description="Document store the controllers migrate",
    )
    upgrade: UpgradeConfig = Field(
        default_factory=UpgradeConfig,
        description="Upgrade loop and version record settings",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Logging and metrics",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            FileSectionsSource(settings_cls),
        )

    @classmethod
    def from_files(cls, directory: Path | None = None, env: str | None = None) -> "Settings":
        """Build settings from the TOML files in ``directory`` plus RAGE_* variables."""
        set_toml_config(load_config(directory, env))
        return cls()
