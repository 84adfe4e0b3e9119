"""Shared test fixtures for the RAGE test suite."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog

from rage.config.models.storage import DocumentStoreConfig, StorageConfig
from rage.config.settings import Settings
from rage.observability.logging import setup_logging
from rage.upgrade.models import UpgradeContext


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "[upgrade]\nmax_stalled_rounds = 5",
                "development.toml": "[upgrade]\nmax_stalled_rounds = 1",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            original = self.original_env[key]
            if original is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = original


@pytest.fixture
def env_override() -> Callable[[dict[str, str]], EnvOverrideContext]:
    """Temporarily set environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"RAGE_UPGRADE__MAX_STALLED_ROUNDS": "2"}):
                ...
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    return _env_override


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test."""
    from rage.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the in-memory document store."""
    return Settings(
        storage=StorageConfig(documents=DocumentStoreConfig(backend="inmemory")),
    )


@pytest.fixture
def context(settings: Settings) -> UpgradeContext:
    return UpgradeContext(settings=settings)


@pytest.fixture(autouse=True)
def route_logging_to_stderr() -> Generator[None, None, None]:
    """Send log events to this test's stderr and restore structlog defaults afterwards."""
    setup_logging(level="DEBUG", format="json", redact_pii=True)
    yield
    structlog.reset_defaults()
