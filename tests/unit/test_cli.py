"""
Unit tests for the pacdb CLI commands.

Runs the real command group against a database built in tmp_path:
- status output and exit codes
- query listing and filtering
- info for a single package
- config get/set round trips through a config file
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from pacdb.cli import cli


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def installed(make_package):
    make_package(
        "foo",
        "1.0-1",
        DESC="The foo tool",
        ARCH="x86_64",
        SIZE=2048,
        DEPENDS=["bar"],
        files=["usr/", "usr/bin/", "usr/bin/foo"],
    )
    make_package("bar", "2.3-4", DESC="The bar library", REASON=1)


def invoke(runner: CliRunner, dbpath: Path, *args: str):
    return runner.invoke(cli, ["--dbpath", str(dbpath), *args])


class TestStatusCommand:
    def test_valid_database(self, runner, installed, dbpath):
        result = invoke(runner, dbpath, "status")

        assert result.exit_code == 0, result.output
        assert "Status:   valid" in result.output
        assert "Packages: 2" in result.output

    def test_missing_database(self, runner, dbpath):
        result = invoke(runner, dbpath, "status")

        assert result.exit_code == 1
        assert "Status:   missing" in result.output

    def test_outdated_database(self, runner, local_dir, dbpath):
        (local_dir / "ALPM_DB_VERSION").write_text("8\n")

        result = invoke(runner, dbpath, "status")

        assert result.exit_code == 1
        assert "Status:   invalid" in result.output

    def test_malformed_package_directory(self, runner, local_dir, dbpath):
        (local_dir / "garbage").mkdir()

        result = invoke(runner, dbpath, "status")

        assert result.exit_code == 1
        assert "invalid local package directory: garbage" in result.output

    def test_root_option_sets_default_dbpath(self, runner, tmp_path):
        local = tmp_path / "var" / "lib" / "pacman" / "local"
        local.mkdir(parents=True)

        result = runner.invoke(cli, ["--root", str(tmp_path), "status"])

        assert result.exit_code == 0, result.output
        assert str(local) in result.output
        assert (local / "ALPM_DB_VERSION").read_text() == "9\n"


class TestQueryCommand:
    def test_lists_all_packages_sorted(self, runner, installed, dbpath):
        result = invoke(runner, dbpath, "query")

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["bar 2.3-4", "foo 1.0-1"]

    def test_named_package(self, runner, installed, dbpath):
        result = invoke(runner, dbpath, "query", "foo")

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "foo 1.0-1"

    def test_explicit_only(self, runner, installed, dbpath):
        result = invoke(runner, dbpath, "query", "--explicit")
        assert result.output.splitlines() == ["foo 1.0-1"]

    def test_deps_only(self, runner, installed, dbpath):
        result = invoke(runner, dbpath, "query", "-d")
        assert result.output.splitlines() == ["bar 2.3-4"]

    def test_unknown_package(self, runner, installed, dbpath):
        result = invoke(runner, dbpath, "query", "baz")

        assert result.exit_code == 1
        assert "invalid local package: baz" in result.output

    def test_refuses_invalid_database(self, runner, local_dir, dbpath):
        (local_dir / "ALPM_DB_VERSION").write_text("7\n")

        result = invoke(runner, dbpath, "query")

        assert result.exit_code == 1
        assert "is invalid" in result.output


class TestInfoCommand:
    def test_shows_fields(self, runner, installed, dbpath):
        result = invoke(runner, dbpath, "info", "foo")

        assert result.exit_code == 0, result.output
        assert "Name           : foo" in result.output
        assert "Version        : 1.0-1" in result.output
        assert "Description    : The foo tool" in result.output
        assert "Depends On     : bar" in result.output
        assert "Installed Size : 2.0KB" in result.output
        assert "Install Reason : Explicitly installed" in result.output

    def test_exact_version(self, runner, installed, dbpath):
        result = invoke(runner, dbpath, "info", "bar", "2.3-4")

        assert result.exit_code == 0, result.output
        assert "Installed as a dependency" in result.output

    def test_files(self, runner, installed, dbpath):
        result = invoke(runner, dbpath, "info", "--files", "foo")

        assert result.exit_code == 0, result.output
        assert "foo usr/bin/foo" in result.output

    def test_unparseable_package(self, runner, local_dir, dbpath):
        (local_dir / "broken-1.0-1").mkdir()

        result = invoke(runner, dbpath, "info", "broken")

        assert result.exit_code == 1
        assert "missing desc file" in result.output


class TestConfigCommand:
    def test_set_then_get(self, runner, tmp_path):
        config_file = tmp_path / "pacdb.toml"

        result = runner.invoke(
            cli, ["--config", str(config_file), "config", "set", "logging.level", "debug"]
        )
        assert result.exit_code == 0, result.output
        assert f"Saved to {config_file}" in result.output

        result = runner.invoke(cli, ["--config", str(config_file), "config", "get", "logging.level"])
        assert result.output.strip() == "logging.level: debug"

    def test_set_signature_levels(self, runner, tmp_path):
        config_file = tmp_path / "pacdb.toml"

        result = runner.invoke(
            cli,
            [
                "--config",
                str(config_file),
                "config",
                "set",
                "signatures.default_level",
                "package_optional,database",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "package_optional" in config_file.read_text()

    def test_set_unknown_key(self, runner, tmp_path):
        result = runner.invoke(
            cli, ["--config", str(tmp_path / "pacdb.toml"), "config", "set", "bogus.key", "1"]
        )

        assert result.exit_code == 1
        assert "Unknown config key" in result.output

    def test_set_invalid_log_level(self, runner, tmp_path):
        result = runner.invoke(
            cli,
            ["--config", str(tmp_path / "pacdb.toml"), "config", "set", "logging.level", "loud"],
        )

        assert result.exit_code == 1
        assert "Invalid log level" in result.output

    def test_get_unset_value(self, runner, tmp_path):
        result = runner.invoke(
            cli, ["--config", str(tmp_path / "missing.toml"), "config", "get", "paths.dbpath"]
        )

        assert result.exit_code == 0, result.output
        assert "paths.dbpath: (not set)" in result.output

    def test_dbpath_from_config_file(self, runner, installed, dbpath, tmp_path):
        config_file = tmp_path / "pacdb.toml"
        config_file.write_text(f'[paths]\ndbpath = "{dbpath}"\n')

        result = runner.invoke(cli, ["--config", str(config_file), "query"])

        assert result.exit_code == 0, result.output
        assert "foo 1.0-1" in result.output

    def test_list(self, runner):
        result = runner.invoke(cli, ["config", "list"])

        assert result.exit_code == 0, result.output
        assert "paths.dbpath" in result.output
        assert "signatures.default_level" in result.output

    def test_invalid_config_value_is_reported(self, runner, tmp_path):
        config_file = tmp_path / "pacdb.toml"
        config_file.write_text('[signatures]\ndefault_level = ["bogus"]\n')

        result = runner.invoke(cli, ["--config", str(config_file), "config", "get", "paths.root"])

        assert result.exit_code == 1
        assert "Unknown signature level" in result.output
        assert "Traceback" not in result.output
