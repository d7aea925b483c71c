"""
Tests for pacdb configuration loading and saving.

Tests verify:
- Config file lookup order
- TOML values, environment overrides and defaults are merged correctly
- Config round-trip (save -> load) preserves values
- Invalid keys and values are rejected
"""

from pathlib import Path

import pytest

from pacdb.config import (
    CONFIGURABLE_KEYS,
    _get_default_config,
    config_get,
    config_set,
    load_config,
    save_config,
)
from pacdb.core.exceptions import ConfigFileError, ConfigValidationError
from pacdb.core.models.database import SignatureLevel
from pacdb.core.settings import find_config_file, load_settings


class TestFindConfigFile:
    """Tests for config file lookup."""

    def test_explicit_path_wins(self, tmp_path: Path, monkeypatch) -> None:
        """An explicit path is used even if $PACDB_CONFIG is set."""
        monkeypatch.setenv("PACDB_CONFIG", str(tmp_path / "env.toml"))
        explicit = tmp_path / "explicit.toml"

        assert find_config_file(explicit) == explicit

    def test_env_var_before_defaults(self, tmp_path: Path, monkeypatch) -> None:
        """$PACDB_CONFIG is returned even when the file does not exist yet."""
        monkeypatch.setenv("PACDB_CONFIG", str(tmp_path / "env.toml"))

        assert find_config_file() == tmp_path / "env.toml"

    def test_first_existing_default(self, tmp_path: Path, monkeypatch) -> None:
        """The first existing default location is used."""
        user = tmp_path / "user.toml"
        system = tmp_path / "system.toml"
        system.write_text("")
        monkeypatch.setattr(
            "pacdb.core.settings.default_config_locations", lambda: [user, system]
        )

        assert find_config_file() == system

        user.write_text("")
        assert find_config_file() == user

    def test_no_config_found(self) -> None:
        """Nothing is found when no default location exists."""
        assert find_config_file() is None


class TestConfigLoading:
    """Tests for load_config and load_settings."""

    def test_load_config_without_file_returns_defaults(self) -> None:
        """Without a config file the model defaults apply."""
        config = load_config()

        assert config["paths"]["root"] == "/"
        assert config["paths"]["dbpath"] is None
        assert config["signatures"]["default_level"] == ["package", "database_optional"]
        assert config["logging"]["level"] == "warning"

    def test_load_config_merges_with_defaults(self, tmp_path: Path) -> None:
        """Values from the file replace defaults; other keys keep them."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[paths]\ndbpath = "/srv/pacman"\n')

        config = load_config(config_path=config_file)

        assert config["paths"]["dbpath"] == "/srv/pacman"
        assert config["paths"]["root"] == "/"
        assert config["_config_file"] == str(config_file)

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch) -> None:
        """PACDB_<SECTION>__<KEY> takes precedence over the file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[paths]\nroot = "/mnt/from-file"\n')
        monkeypatch.setenv("PACDB_PATHS__ROOT", "/mnt/from-env")

        settings = load_settings(config_path=config_file)

        assert settings.paths.root == "/mnt/from-env"

    def test_overrides_win(self, monkeypatch) -> None:
        """Explicit overrides take precedence over the environment."""
        monkeypatch.setenv("PACDB_PATHS__ROOT", "/mnt/from-env")

        settings = load_settings(paths={"root": "/mnt/explicit"})

        assert settings.paths.root == "/mnt/explicit"

    def test_signature_level_as_comma_string(self, tmp_path: Path) -> None:
        """default_level accepts a comma separated string."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[signatures]\ndefault_level = "package, database"\n')

        settings = load_settings(config_path=config_file)

        assert settings.signatures.level == SignatureLevel.PACKAGE | SignatureLevel.DATABASE

    def test_malformed_toml_is_reported(self, tmp_path: Path) -> None:
        """A broken file falls back to defaults and records the error."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[paths\nroot = \n")

        config = load_config(config_path=config_file)

        assert config["paths"]["root"] == "/"
        assert "Failed to parse config file" in config["_config_error"]

    def test_unknown_signature_name_is_rejected(self, tmp_path: Path) -> None:
        """An invalid signature level name in the file fails validation."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[signatures]\ndefault_level = ["bogus"]\n')

        with pytest.raises(ValueError, match="Unknown signature level"):
            load_settings(config_path=config_file)

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        """Validation failures surface as ConfigValidationError."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[logging]\nconsole = "maybe"\n')

        with pytest.raises(ConfigValidationError, match="Invalid configuration"):
            load_settings(config_path=config_file)

    def test_config_get_nested_keys(self, tmp_path: Path) -> None:
        """config_get reads dotted keys."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[logging]\nlevel = "debug"\n')

        assert config_get("logging.level", config_path=config_file) == "debug"
        assert config_get("logging.nonexistent", config_path=config_file) is None


class TestConfigSaveLoad:
    """Tests for save_config and config_set."""

    def test_save_and_reload_preserves_values(self, tmp_path: Path) -> None:
        """Values written by save_config load back unchanged."""
        config_file = tmp_path / "nested" / "config.toml"
        config = _get_default_config()
        config["paths"]["root"] = '/mnt/with "quotes"'
        config["signatures"]["default_level"] = ["package_optional"]
        config["logging"]["console"] = True

        save_config(config, config_file)
        reloaded = load_config(config_path=config_file)

        assert reloaded["paths"]["root"] == '/mnt/with "quotes"'
        assert reloaded["signatures"]["default_level"] == ["package_optional"]
        assert reloaded["logging"]["console"] is True

    def test_save_only_writes_non_defaults(self, tmp_path: Path) -> None:
        """Defaults and unset values are left out of the file."""
        config_file = tmp_path / "config.toml"
        config = _get_default_config()
        config["logging"]["level"] = "info"

        save_config(config, config_file)
        content = config_file.read_text()

        assert "[logging]" in content
        assert 'level = "info"' in content
        assert "[paths]" not in content
        assert "[signatures]" not in content

    def test_config_set_writes_typed_value(self, tmp_path: Path) -> None:
        """config_set parses the value by key type and saves it."""
        config_file = tmp_path / "config.toml"

        path, value = config_set("logging.console", "yes", config_path=config_file)

        assert path == config_file
        assert value is True
        assert config_get("logging.console", config_path=config_file) is True

    def test_config_set_uses_env_path(self, tmp_path: Path, monkeypatch) -> None:
        """Without an explicit path, $PACDB_CONFIG is written."""
        config_file = tmp_path / "env.toml"
        monkeypatch.setenv("PACDB_CONFIG", str(config_file))

        path, _ = config_set("paths.dbpath", "/srv/pacman")

        assert path == config_file
        assert 'dbpath = "/srv/pacman"' in config_file.read_text()

    def test_unwritable_location(self, tmp_path: Path) -> None:
        """A config path below a regular file cannot be written."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(ConfigFileError):
            save_config(_get_default_config(), blocker / "config.toml")

    @pytest.mark.parametrize(
        ("key", "value", "message"),
        [
            ("paths.bogus", "x", "Unknown config key"),
            ("logging.level", "loud", "Invalid log level"),
            ("logging.console", "maybe", "Invalid boolean value"),
            ("signatures.default_level", "package,bogus", "Unknown signature level"),
        ],
    )
    def test_config_set_rejects_invalid(self, tmp_path: Path, key, value, message) -> None:
        """Invalid keys and values raise ConfigValidationError without writing."""
        config_file = tmp_path / "config.toml"

        with pytest.raises(ConfigValidationError, match=message):
            config_set(key, value, config_path=config_file)

        assert not config_file.exists()


class TestConfigurableKeys:
    """Tests for CONFIGURABLE_KEYS consistency."""

    def test_all_configurable_keys_are_valid(self) -> None:
        """Every configurable key exists in the default config."""
        defaults = _get_default_config()
        for key in CONFIGURABLE_KEYS:
            section, name = key.split(".")
            assert name in defaults[section], f"{key} missing from defaults"

    def test_documented_defaults_match_models(self) -> None:
        """Documented defaults equal the Pydantic model defaults."""
        defaults = _get_default_config()
        for key, info in CONFIGURABLE_KEYS.items():
            section, name = key.split(".")
            assert defaults[section][name] == info["default"], key
