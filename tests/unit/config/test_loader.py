"""Unit tests for TOML configuration loader."""

import tomllib
from pathlib import Path

import pytest

from tagvars.config.loader import (
    deep_merge,
    get_config_dir,
    get_environment,
    load_config,
    load_toml,
)


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_merge_nested_dicts(self) -> None:
        """Nested dictionaries are merged recursively."""
        base = {"expansion": {"max_iterations": 2, "encode": True}, "debug": False}
        override = {"expansion": {"max_iterations": 4}}
        result = deep_merge(base, override)
        assert result == {"expansion": {"max_iterations": 4, "encode": True}, "debug": False}

    def test_override_replaces_non_dict(self) -> None:
        """Non-dict values in override replace base values."""
        result = deep_merge({"digest": {"enabled": True}}, {"digest": "off"})
        assert result == {"digest": "off"}

    def test_base_unmodified(self) -> None:
        """Original base dictionary is not modified."""
        base = {"a": 1}
        deep_merge(base, {"b": 2})
        assert base == {"a": 1}


class TestLoadToml:
    """Tests for load_toml function."""

    def test_load_valid_toml(self, tmp_path: Path) -> None:
        """Valid TOML file is loaded correctly."""
        toml_file = tmp_path / "test.toml"
        toml_file.write_text('[digest]\nalgorithm = "sha256"\n[expansion]\nmax_iterations = 3')

        result = load_toml(toml_file)
        assert result == {"digest": {"algorithm": "sha256"}, "expansion": {"max_iterations": 3}}

    def test_load_missing_file_raises(self, tmp_path: Path) -> None:
        """Missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_toml(tmp_path / "nonexistent.toml")

    def test_load_invalid_toml_raises(self, tmp_path: Path) -> None:
        """Invalid TOML syntax raises error."""
        invalid_file = tmp_path / "invalid.toml"
        invalid_file.write_text("invalid = [unclosed")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml(invalid_file)


class TestGetEnvironment:
    """Tests for get_environment function."""

    def test_returns_env_var_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TAGVARS_ENV", "production")
        assert get_environment() == "production"

    def test_defaults_to_development(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TAGVARS_ENV", raising=False)
        assert get_environment() == "development"


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_uses_env_var_when_set(self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Uses TAGVARS_CONFIG_DIR when set."""
        monkeypatch.setenv("TAGVARS_CONFIG_DIR", str(test_config_dir))
        assert get_config_dir() == test_config_dir

    def test_raises_for_missing_env_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Raises error when TAGVARS_CONFIG_DIR doesn't exist."""
        monkeypatch.setenv("TAGVARS_CONFIG_DIR", str(tmp_path / "missing"))

        with pytest.raises(FileNotFoundError):
            get_config_dir()


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_default_config(
        self, test_config_dir: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Loads default.toml configuration."""
        mock_toml_files({"default.toml": "app_name = 'test'\ndebug = false"})
        monkeypatch.setenv("TAGVARS_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("TAGVARS_ENV", "nonexistent")

        assert load_config() == {"app_name": "test", "debug": False}

    def test_merges_environment_config(
        self, test_config_dir: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Environment config overrides default config."""
        mock_toml_files(
            {
                "default.toml": "[expansion]\nmax_iterations = 2\nencode = true",
                "staging.toml": "[expansion]\nencode = false",
            }
        )
        monkeypatch.setenv("TAGVARS_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("TAGVARS_ENV", "staging")

        assert load_config() == {"expansion": {"max_iterations": 2, "encode": False}}

    def test_missing_files_yield_empty_config(
        self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without TOML files the model defaults apply."""
        monkeypatch.setenv("TAGVARS_CONFIG_DIR", str(test_config_dir))

        assert load_config() == {}
