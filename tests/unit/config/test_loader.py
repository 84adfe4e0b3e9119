"""Unit tests for TOML configuration loading."""

import tomllib
from pathlib import Path

import pytest

from rage.config.loader import (
    active_environment,
    config_dir,
    config_files,
    load_config,
    merge_sections,
    read_toml,
)


class TestMergeSections:
    """Tests for merge_sections function."""

    def test_nested_tables_merge_key_by_key(self) -> None:
        base = {"storage": {"documents": {"backend": "mongodb", "database": "a2"}}}
        overlay = {"storage": {"documents": {"backend": "inmemory"}}}
        assert merge_sections(base, overlay) == {
            "storage": {"documents": {"backend": "inmemory", "database": "a2"}}
        }

    def test_overlay_value_replaces_table(self) -> None:
        assert merge_sections({"upgrade": {"max_stalled_rounds": 3}}, {"upgrade": "off"}) == {
            "upgrade": "off"
        }

    def test_inputs_unmodified(self) -> None:
        base = {"upgrade": {"version_collection": "versions"}}
        overlay = {"upgrade": {"version_collection": "schema_versions"}}
        merge_sections(base, overlay)
        assert base == {"upgrade": {"version_collection": "versions"}}
        assert overlay == {"upgrade": {"version_collection": "schema_versions"}}


class TestReadToml:
    """Tests for read_toml function."""

    def test_reads_tables(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "roles.toml"
        toml_file.write_text('autoroles = ["student"]\n[upgrade]\nmax_stalled_rounds = 2')
        assert read_toml(toml_file) == {
            "autoroles": ["student"],
            "upgrade": {"max_stalled_rounds": 2},
        }

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_toml(tmp_path / "nonexistent.toml")


class TestLocation:
    """Tests for locating the config directory and environment."""

    def test_environment_from_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RAGE_ENV", "production")
        assert active_environment() == "production"

    def test_environment_defaults_to_development(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("RAGE_ENV", raising=False)
        assert active_environment() == "development"

    def test_config_dir_from_env_var(
        self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RAGE_CONFIG_DIR", str(test_config_dir))
        assert config_dir() == test_config_dir

    def test_config_dir_defaults_to_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("RAGE_CONFIG_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        assert config_dir() == tmp_path / "config"

    def test_missing_config_dir_raises(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RAGE_CONFIG_DIR", str(tmp_path / "missing"))
        with pytest.raises(FileNotFoundError):
            config_dir()

    def test_config_files_base_then_overlay(self, test_config_dir: Path, mock_toml_files) -> None:
        mock_toml_files({"default.toml": "", "test.toml": ""})
        assert config_files(test_config_dir, "test") == [
            test_config_dir / "default.toml",
            test_config_dir / "test.toml",
        ]
        assert config_files(test_config_dir, "production") == [test_config_dir / "default.toml"]


class TestLoadConfig:
    """Tests for load_config function."""

    def test_merges_environment_overlay(
        self,
        test_config_dir: Path,
        mock_toml_files,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """The environment file overrides default.toml."""
        mock_toml_files({
            "default.toml": '[storage.documents]\nbackend = "mongodb"\ndatabase = "a2"',
            "test.toml": '[storage.documents]\nbackend = "inmemory"',
        })
        monkeypatch.setenv("RAGE_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("RAGE_ENV", "test")

        assert load_config() == {"storage": {"documents": {"backend": "inmemory", "database": "a2"}}}

    def test_explicit_directory_and_env(self, test_config_dir: Path, mock_toml_files) -> None:
        mock_toml_files({
            "default.toml": "[upgrade]\nmax_stalled_rounds = 5",
            "ci.toml": "[upgrade]\nmax_stalled_rounds = 1",
        })
        assert load_config(test_config_dir, "ci") == {"upgrade": {"max_stalled_rounds": 1}}

    def test_missing_environment_file_ignored(
        self, test_config_dir: Path, mock_toml_files
    ) -> None:
        mock_toml_files({"default.toml": '[upgrade]\nversion_collection = "versions"'})
        assert load_config(test_config_dir, "nonexistent") == {
            "upgrade": {"version_collection": "versions"}
        }

    def test_missing_default_raises(self, test_config_dir: Path) -> None:
        with pytest.raises(FileNotFoundError, match="default.toml"):
            load_config(test_config_dir)

    def test_invalid_toml_raises(self, test_config_dir: Path, mock_toml_files) -> None:
        mock_toml_files({"default.toml": "invalid = [unclosed"})
        with pytest.raises(tomllib.TOMLDecodeError):
            load_config(test_config_dir)
