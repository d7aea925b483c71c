"""
Shared pytest fixtures for pacdb tests.

- isolate_environment: keeps user/system config and log files out of tests
- dbpath: an empty database directory (no local/ yet)
- local_dir: <dbpath>/local, created with a current version marker
- write_desc: writes a desc file from a section mapping
- make_package: writes an installed-package directory with desc/files
- handle: a Handle pointed at dbpath
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from pacdb.core.bootstrap import reset
from pacdb.handle import Handle


def _write_desc(pkg_dir: Path, fields: dict[str, object]) -> None:
    """Write a desc file from a {SECTION: value or list} mapping."""
    lines: list[str] = []
    for key, value in fields.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        lines.append(f"%{key}%")
        lines.extend(str(v) for v in values)
        lines.append("")
    (pkg_dir / "desc").write_text("\n".join(lines) + "\n")


@pytest.fixture(autouse=True)
def isolate_environment(tmp_path_factory, monkeypatch):
    """Make every test independent of the machine's config and log files."""
    for var in ("PACDB_CONFIG", "PACDB_PATHS__ROOT", "PACDB_PATHS__DBPATH"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("PACDB_LOGGING__FILE", "false")

    no_config = tmp_path_factory.mktemp("noconfig") / "config.toml"
    monkeypatch.setattr(
        "pacdb.core.settings.default_config_locations",
        lambda: [no_config],
    )

    reset()
    yield
    reset()


@pytest.fixture
def dbpath(tmp_path: Path) -> Path:
    path = tmp_path / "db"
    path.mkdir()
    return path


@pytest.fixture
def local_dir(dbpath: Path) -> Path:
    path = dbpath / "local"
    path.mkdir()
    (path / "ALPM_DB_VERSION").write_text("9\n")
    return path


@pytest.fixture
def write_desc() -> Callable[[Path, dict[str, object]], None]:
    return _write_desc


@pytest.fixture
def make_package(local_dir: Path) -> Callable[..., Path]:
    """
    Provide a helper writing one installed package.

    Usage:
        make_package("foo", "1.0-1", DESC="Foo tool", DEPENDS=["glibc"])
    """

    def make(
        name: str,
        version: str,
        *,
        files: list[str] | None = None,
        **fields: object,
    ) -> Path:
        pkg_dir = local_dir / f"{name}-{version}"
        pkg_dir.mkdir()
        _write_desc(pkg_dir, {"NAME": name, "VERSION": version, **fields})
        if files is not None:
            (pkg_dir / "files").write_text("%FILES%\n" + "\n".join(files) + "\n\n")
        return pkg_dir

    return make


@pytest.fixture
def handle(dbpath: Path, tmp_path: Path) -> Handle:
    return Handle(root_path=tmp_path, database_path=dbpath)
