"""Locates and reads the upgrader's TOML configuration.

``default.toml`` holds the base configuration and ``{RAGE_ENV}.toml`` an
optional overlay for the active environment, both in ``RAGE_CONFIG_DIR``
(``./config`` when unset).
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_VAR = "RAGE_CONFIG_DIR"
ENV_VAR = "RAGE_ENV"
DEFAULT_ENV = "development"


def config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_VAR)
    if not override:
        return Path.cwd() / "config"
    path = Path(override)
    if not path.is_dir():
        raise FileNotFoundError(f"{CONFIG_DIR_VAR} points at a missing directory: {override}")
    return path


def active_environment() -> str:
    return os.environ.get(ENV_VAR) or DEFAULT_ENV


def config_files(directory: Path | None = None, env: str | None = None) -> list[Path]:
    """Files to read, base first.

    Raises:
        FileNotFoundError: If the directory has no default.toml
    """
    directory = directory or config_dir()
    default = directory / "default.toml"
    if not default.is_file():
        raise FileNotFoundError(
            f"No default.toml in {directory}; set {CONFIG_DIR_VAR} to the config directory"
        )

    overlay = directory / f"{env or active_environment()}.toml"
    return [default, overlay] if overlay.is_file() else [default]


def read_toml(path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    with path.open("rb") as f:
        return tomllib.load(f)


def merge_sections(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Overlay one TOML document on another, table by table.

    Tables such as ``[storage.documents]`` merge key by key; any other value
    in ``overlay`` replaces the base value. Neither argument is modified.
    """
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_sections(current, value)
        else:
            merged[key] = value
    return merged


def load_config(directory: Path | None = None, env: str | None = None) -> dict[str, Any]:
    """Read default.toml and the environment overlay into one mapping."""
    config: dict[str, Any] = {}
    for path in config_files(directory, env):
        config = merge_sections(config, read_toml(path))
    return config
