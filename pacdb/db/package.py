"""
Installed package records and the parser for their on-disk metadata.

Every installed package owns a directory in the local database holding a
`desc` file (package metadata) and usually a `files` file (installed
paths). Both use the same layout: a `%SECTION%` header line, one value per
line, and a blank line closing the section.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from pathlib import Path
from typing import TYPE_CHECKING

from ..core.di import get_logger
from ..core.exceptions import DatabaseIOError, PackageParseError
from ..core.models.base import ImmutableModel
from ..core.models.database import SignatureLevel

if TYPE_CHECKING:
    from ..handle import Handle

DESC_FILE = "desc"
FILES_FILE = "files"


class InstallReason(IntEnum):
    """Why a package was installed."""

    EXPLICIT = 0
    DEPEND = 1


class ValidationMethod(str, Enum):
    """How the package payload was validated at install time."""

    NONE = "none"
    MD5 = "md5"
    SHA256 = "sha256"
    PGP = "pgp"


class LocalPackage(ImmutableModel):
    """An installed package, as recorded in the local database."""

    name: str
    version: str
    path: Path
    sig_level: SignatureLevel
    base: str | None = None
    description: str | None = None
    url: str | None = None
    arch: str | None = None
    build_date: int | None = None
    install_date: int | None = None
    packager: str | None = None
    size: int = 0
    reason: InstallReason = InstallReason.EXPLICIT
    licenses: tuple[str, ...] = ()
    groups: tuple[str, ...] = ()
    validation: frozenset[ValidationMethod] = frozenset()
    depends: tuple[str, ...] = ()
    optdepends: tuple[str, ...] = ()
    conflicts: tuple[str, ...] = ()
    provides: tuple[str, ...] = ()
    replaces: tuple[str, ...] = ()

    def files(self) -> tuple[str, ...]:
        """Paths installed by this package, relative to the root.

        Read from disk on every call. An absent `files` entry means no files.
        """
        return tuple(read_sections(self.path / FILES_FILE, missing_ok=True).get("FILES", []))

    def backup_files(self) -> dict[str, str]:
        """Backed-up config files mapped to their recorded md5sum."""
        entries = read_sections(self.path / FILES_FILE, missing_ok=True).get("BACKUP", [])
        backup: dict[str, str] = {}
        for entry in entries:
            file_path, _, digest = entry.partition("\t")
            backup[file_path] = digest
        return backup


def parse_sections(text: str, *, source: str | None = None) -> dict[str, list[str]]:
    """
    Split `%SECTION%` formatted text into a dict of value lists.

    Raises:
        PackageParseError: If a value line appears outside a section
    """
    sections: dict[str, list[str]] = {}
    current: list[str] | None = None

    for lineno, line in enumerate(text.splitlines(), start=1):
        if current is None:
            if not line:
                continue
            if len(line) > 2 and line.startswith("%") and line.endswith("%"):
                current = sections.setdefault(line[1:-1], [])
                continue
            raise PackageParseError(
                f"expected a %SECTION% header on line {lineno}, found {line!r}",
                path=source,
            )
        if not line:
            current = None
        else:
            current.append(line)

    return sections


def read_sections(path: Path, *, missing_ok: bool = False) -> dict[str, list[str]]:
    """Read and parse a sectioned metadata file."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        if missing_ok:
            return {}
        raise PackageParseError(f"missing {path.name} file", path=str(path), cause=e) from e
    except (OSError, UnicodeDecodeError) as e:
        raise DatabaseIOError(f"could not read {path.name} file", path=str(path), cause=e) from e
    return parse_sections(text, source=str(path))


def _single(sections: dict[str, list[str]], key: str, path: Path) -> str | None:
    values = sections.get(key)
    if not values:
        return None
    if len(values) > 1:
        raise PackageParseError(
            f"%{key}% must hold a single value, found {len(values)}",
            path=str(path),
            field=key,
        )
    return values[0]


def _integer(sections: dict[str, list[str]], key: str, path: Path) -> int | None:
    raw = _single(sections, key, path)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError as e:
        raise PackageParseError(
            f"%{key}% is not an integer: {raw!r}", path=str(path), field=key, cause=e
        ) from e
    if value < 0:
        raise PackageParseError(f"%{key}% is negative: {raw!r}", path=str(path), field=key)
    return value


def load_local_package(
    path: Path,
    name: str,
    version: str,
    handle: Handle,
    sig_level: SignatureLevel = SignatureLevel.USE_DEFAULT,
) -> LocalPackage:
    """
    Build a LocalPackage from its directory in the local database.

    Args:
        path: The package directory
        name: Package name taken from the directory name
        version: Package version taken from the directory name
        handle: Live handle used to resolve defaults at load time
        sig_level: Level configured on the database; USE_DEFAULT defers to
            the handle's default level

    Raises:
        PackageParseError: If desc is missing, malformed or disagrees with
            the directory name
        DatabaseIOError: If desc cannot be read
    """
    desc_path = path / DESC_FILE
    get_logger().debug("loading package %s-%s from %s", name, version, desc_path)
    sections = read_sections(desc_path)

    for key, expected in (("NAME", name), ("VERSION", version)):
        found = _single(sections, key, desc_path)
        if found is None:
            raise PackageParseError(f"%{key}% missing", path=str(desc_path), field=key)
        if found != expected:
            raise PackageParseError(
                f"%{key}% is {found!r} but the directory says {expected!r}",
                path=str(desc_path),
                field=key,
            )

    reason_raw = _integer(sections, "REASON", desc_path)
    try:
        reason = InstallReason(reason_raw) if reason_raw is not None else InstallReason.EXPLICIT
    except ValueError as e:
        raise PackageParseError(
            f"unknown install reason {reason_raw}", path=str(desc_path), field="REASON", cause=e
        ) from e

    validation: set[ValidationMethod] = set()
    for method in sections.get("VALIDATION", []):
        try:
            validation.add(ValidationMethod(method))
        except ValueError as e:
            raise PackageParseError(
                f"unknown validation method {method!r}",
                path=str(desc_path),
                field="VALIDATION",
                cause=e,
            ) from e

    known = {
        "NAME", "VERSION", "BASE", "DESC", "URL", "ARCH", "BUILDDATE", "INSTALLDATE",
        "PACKAGER", "SIZE", "REASON", "LICENSE", "GROUPS", "VALIDATION", "DEPENDS",
        "OPTDEPENDS", "CONFLICTS", "PROVIDES", "REPLACES",
    }  # fmt: skip
    for key in sections.keys() - known:
        get_logger().debug("ignoring unknown section %%%s%% in %s", key, desc_path)

    if sig_level & SignatureLevel.USE_DEFAULT:
        sig_level = handle.sig_level

    return LocalPackage(
        name=name,
        version=version,
        path=path,
        sig_level=sig_level,
        base=_single(sections, "BASE", desc_path),
        description=_single(sections, "DESC", desc_path),
        url=_single(sections, "URL", desc_path),
        arch=_single(sections, "ARCH", desc_path),
        build_date=_integer(sections, "BUILDDATE", desc_path),
        install_date=_integer(sections, "INSTALLDATE", desc_path),
        packager=_single(sections, "PACKAGER", desc_path),
        size=_integer(sections, "SIZE", desc_path) or 0,
        reason=reason,
        licenses=tuple(sections.get("LICENSE", [])),
        groups=tuple(sections.get("GROUPS", [])),
        validation=frozenset(validation),
        depends=tuple(sections.get("DEPENDS", [])),
        optdepends=tuple(sections.get("OPTDEPENDS", [])),
        conflicts=tuple(sections.get("CONFLICTS", [])),
        provides=tuple(sections.get("PROVIDES", [])),
        replaces=tuple(sections.get("REPLACES", [])),
    )
