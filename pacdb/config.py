"""Configuration loading and management for pacdb."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from .core.exceptions import ConfigFileError, ConfigValidationError
from .core.models.database import SignatureLevel
from .core.settings import CONFIG_ENV_VAR, default_config_locations, find_config_file, load_settings

# Config keys that can be set via `pacdb config`
CONFIGURABLE_KEYS = {
    "paths.root": {
        "type": str,
        "default": "/",
        "description": "Root directory of the managed system",
    },
    "paths.dbpath": {
        "type": str,
        "default": None,
        "description": "Database directory (default: <root>/var/lib/pacman)",
    },
    "signatures.default_level": {
        "type": list,
        "default": ["package", "database_optional"],
        "description": "Default signature level flags (comma-separated)",
    },
    "logging.level": {
        "type": str,
        "default": "warning",
        "description": "Log level (debug, info, warning, error)",
    },
    "logging.console": {
        "type": bool,
        "default": False,
        "description": "Output debug logs to stderr",
    },
    "logging.file": {
        "type": bool,
        "default": True,
        "description": "Output debug logs to ~/.cache/pacdb/pacdb.log",
    },
}

VALID_LOG_LEVELS = {"debug", "info", "warning", "error"}


def _get_default_config() -> dict:
    """Get default config from Pydantic models."""
    from .core.models.config import PacdbConfig

    return PacdbConfig().to_dict()


def _get_nested(d: dict, key: str, default=None):
    """Get a nested key like 'paths.root'."""
    for part in key.split("."):
        if isinstance(d, dict) and part in d:
            d = d[part]
        else:
            return default
    return d


def _set_nested(d: dict, key: str, value):
    """Set a nested key like 'paths.root'."""
    parts = key.split(".")
    for part in parts[:-1]:
        if part not in d:
            d[part] = {}
        d = d[part]
    d[parts[-1]] = value


def load_config(config_path: Path | None = None) -> dict:
    """
    Load configuration from file and environment.

    Args:
        config_path: Explicit path to config file

    Returns:
        Configuration dict with defaults applied
    """
    return load_settings(config_path=config_path).to_dict()


def get_config_path_for_write(config_path: Path | None = None) -> Path:
    """
    Get the path where config should be written.

    Prefers an explicit path, then $PACDB_CONFIG, then an existing config
    file, then the per-user location.
    """
    if config_path is not None:
        return Path(config_path)
    if os.environ.get(CONFIG_ENV_VAR):
        return Path(os.environ[CONFIG_ENV_VAR])
    existing = find_config_file()
    if existing is not None:
        return existing
    return default_config_locations()[0]


def _format_toml_value(val: Any) -> str:
    if isinstance(val, bool):
        return str(val).lower()
    if isinstance(val, str):
        escaped = val.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(val, (list, tuple)):
        return "[" + ", ".join(_format_toml_value(v) for v in val) + "]"
    return str(val)


def save_config(config: dict, config_path: Path):
    """
    Save configuration to a TOML file.

    Only saves non-default values. Sections are written in the order of
    the default config.
    """
    # Build TOML content manually (to avoid adding tomlkit dependency)
    lines = []
    defaults = _get_default_config()

    for section, section_defaults in defaults.items():
        section_lines = []
        for key, val in config.get(section, {}).items():
            if val is None or val == section_defaults.get(key):
                continue
            section_lines.append(f"{key} = {_format_toml_value(val)}")

        if section_lines:
            lines.append(f"[{section}]")
            lines.extend(section_lines)
            lines.append("")

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text("\n".join(lines))
    except OSError as e:
        raise ConfigFileError(
            "Failed to write config file", file_path=str(config_path), cause=e
        ) from e


def config_get(key: str, config_path: Path | None = None):
    """Get a config value."""
    config = load_config(config_path=config_path)
    return _get_nested(config, key)


def _parse_value(key: str, value: str) -> Any:
    key_info = CONFIGURABLE_KEYS[key]
    typed_value: Any

    if key_info["type"] is bool:  # type: ignore[index]
        if value.lower() in ("true", "1", "yes", "on"):
            typed_value = True
        elif value.lower() in ("false", "0", "no", "off"):
            typed_value = False
        else:
            raise ConfigValidationError(f"Invalid boolean value: {value}", key=key, value=value)
    elif key_info["type"] is list:  # type: ignore[index]
        if value.strip() == "":
            typed_value = []
        else:
            typed_value = [v.strip() for v in value.split(",")]
    else:
        typed_value = value

    if key == "signatures.default_level":
        try:
            SignatureLevel.from_names(typed_value)
        except ValueError as e:
            raise ConfigValidationError(str(e), key=key, value=value) from e
        typed_value = [v.lower() for v in typed_value]
    elif key == "logging.level" and typed_value not in VALID_LOG_LEVELS:
        raise ConfigValidationError(
            f"Invalid log level: {value}. Valid levels: {', '.join(sorted(VALID_LOG_LEVELS))}",
            key=key,
            value=value,
        )

    return typed_value


def config_set(key: str, value: str, config_path: Path | None = None):
    """Set a config value and save it to the config file."""
    if key not in CONFIGURABLE_KEYS:
        raise ConfigValidationError(
            f"Unknown config key: {key}. Valid keys: {', '.join(CONFIGURABLE_KEYS.keys())}",
            key=key,
        )

    typed_value = _parse_value(key, value)

    config = load_config(config_path=config_path)
    _set_nested(config, key, typed_value)

    write_path = get_config_path_for_write(config_path)
    save_config(config, write_path)

    return write_path, typed_value


def config_list():
    """List all configurable keys with descriptions."""
    return CONFIGURABLE_KEYS
