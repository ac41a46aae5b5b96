"""TOML configuration loader with deep merge support."""

import os
import tomllib
from pathlib import Path
from typing import Any


def get_config_dir() -> Path:
    """Get the configuration directory path.

    TAGVARS_CONFIG_DIR takes precedence. Without it, the nearest `config/`
    directory at or above the working directory is used, searching at most
    five levels up.

    Returns:
        Path to the configuration directory

    Raises:
        FileNotFoundError: If TAGVARS_CONFIG_DIR names a missing directory
    """
    config_dir_env = os.environ.get("TAGVARS_CONFIG_DIR")
    if config_dir_env:
        path = Path(config_dir_env)
        if not path.exists():
            raise FileNotFoundError(f"Config directory not found: {config_dir_env}")
        return path

    current = Path.cwd()
    for _ in range(5):
        config_path = current / "config"
        if config_path.exists():
            return config_path
        current = current.parent

    # Nothing found; resolved relative to the working directory
    return Path("config")


def get_environment() -> str:
    """Get the deployment environment name.

    Returns:
        Value of TAGVARS_ENV, or 'development' when unset
    """
    return os.environ.get("TAGVARS_ENV", "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Read one TOML file.

    Args:
        file_path: TOML file to read

    Returns:
        Parsed table as a dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base.

    Tables present in both are merged key by key; any other value in
    override replaces the one in base. Neither input is modified.

    Args:
        base: Lower-precedence settings
        override: Higher-precedence settings

    Returns:
        New merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_config() -> dict[str, Any]:
    """Load expansion settings from TOML files.

    Loading order:
    1. config/default.toml (optional; model defaults apply without it)
    2. config/{TAGVARS_ENV}.toml (optional)

    Returns:
        Merged configuration dictionary, empty when neither file exists
    """
    config_dir = get_config_dir()
    config: dict[str, Any] = {}

    default_path = config_dir / "default.toml"
    if default_path.exists():
        config = load_toml(default_path)

    env_path = config_dir / f"{get_environment()}.toml"
    if env_path.exists():
        config = deep_merge(config, load_toml(env_path))

    return config
