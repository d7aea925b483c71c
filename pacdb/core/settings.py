"""
Pydantic Settings for pacdb configuration.

Provides settings loading from TOML files, environment variables, and defaults.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from .exceptions import ConfigValidationError
from .models.config import LoggingConfig, PathsConfig, SignaturesConfig

CONFIG_ENV_VAR = "PACDB_CONFIG"


def _get_logger():
    from .di import get_logger

    return get_logger()


def default_config_locations() -> list[Path]:
    """Locations searched, in order, when no config path is given."""
    return [
        Path.home() / ".config" / "pacdb" / "config.toml",
        Path("/etc/pacdb.toml"),
    ]


def find_config_file(config_path: Path | None = None) -> Path | None:
    """
    Find the config file to load.

    Order: explicit path, $PACDB_CONFIG, then default_config_locations().
    An explicit path or $PACDB_CONFIG is returned even if it does not exist,
    so the caller reports it instead of silently falling back.

    Returns:
        Path to config file, or None if not found.
    """
    if config_path is not None:
        return Path(config_path)

    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)

    for candidate in default_config_locations():
        if candidate.is_file():
            return candidate
    return None


class TomlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from TOML config files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._data: dict[str, Any] | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        self._data = {}

        path = find_config_file(self._config_path)
        if path is None:
            return self._data

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            self._data = data
            self._data["_config_file"] = str(path)
        except tomllib.TOMLDecodeError as e:
            _get_logger().warning("Failed to parse config file %s: %s", path, e)
            self._data["_config_error"] = f"Failed to parse config file: {e}"
        except OSError as e:
            _get_logger().warning("Failed to read config file %s: %s", path, e)
            self._data["_config_error"] = f"Failed to read config file: {e}"

        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        data = self._load_toml()
        return data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return TOML data for settings initialization, minus bookkeeping keys."""
        return {k: v for k, v in self._load_toml().items() if not k.startswith("_")}


class PacdbSettings(BaseSettings):
    """pacdb configuration settings with TOML and environment variable support.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (PACDB_<section>__<field>)
    3. TOML config file
    4. Model defaults
    """

    model_config = {
        "env_prefix": "PACDB_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    paths: PathsConfig = PathsConfig()
    signatures: SignaturesConfig = SignaturesConfig()
    logging: LoggingConfig = LoggingConfig()

    # Internal fields (not from config)
    _config_file: str | None = None
    _config_error: str | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Add the TOML source below environment variables.

        The config path cannot be passed through here, so load_settings()
        hands it over in a module-level variable.
        """
        toml_source = TomlConfigSource(settings_cls, config_path=_current_config_path)
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a plain dict."""
        result: dict[str, Any] = {
            "paths": self.paths.model_dump(),
            "signatures": self.signatures.model_dump(),
            "logging": self.logging.model_dump(),
        }
        if self._config_file:
            result["_config_file"] = self._config_file
        if self._config_error:
            result["_config_error"] = self._config_error
        return result


# Module-level variable for passing to settings_customise_sources
_current_config_path: Path | None = None


def load_settings(config_path: Path | None = None, **overrides: Any) -> PacdbSettings:
    """Load pacdb settings from config file and environment.

    Args:
        config_path: Explicit path to config file
        **overrides: Section values taking precedence over every source

    Returns:
        PacdbSettings instance with all sources merged

    Raises:
        ConfigValidationError: If a merged value fails validation
    """
    global _current_config_path

    _current_config_path = config_path

    try:
        try:
            settings = PacdbSettings(**overrides)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid configuration: {e}", cause=e) from e

        toml_data = TomlConfigSource(PacdbSettings, config_path)._load_toml()
        if "_config_file" in toml_data:
            settings._config_file = toml_data["_config_file"]
        if "_config_error" in toml_data:
            settings._config_error = toml_data["_config_error"]

        return settings
    finally:
        _current_config_path = None
