"""
The local database: packages currently installed on the system.

The database lives in `<dbpath>/local/`. It holds one directory per
installed package plus an `ALPM_DB_VERSION` marker recording the layout
version. Package directories are listed once when the engine is created;
each package's metadata is parsed the first time it is requested and then
kept for the lifetime of the engine. Packages installed or removed on disk
afterwards are not picked up.
"""

from __future__ import annotations

import os
import stat
import threading
import weakref
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..core.di import get_logger
from ..core.exceptions import DatabaseIOError, InvalidLocalPackageError, InvariantViolation
from ..core.interfaces.database import IDatabase
from ..core.interfaces.logger import ILogger
from ..core.models.database import DbStatus, DbUsage, SignatureLevel
from ..core.models.package import PackageKey
from .base import LOCAL_DB_NAME, split_package_dirname
from .package import LocalPackage, load_local_package

if TYPE_CHECKING:
    from ..handle import Handle

LOCAL_DB_VERSION_FILE = "ALPM_DB_VERSION"
LOCAL_DB_CURRENT_VERSION = 9


def _parse_leading_uint(raw: bytes) -> int | None:
    """Parse the leading ASCII digits of raw, ignoring anything after them."""
    digits = bytearray()
    for byte in raw:
        if 0x30 <= byte <= 0x39:
            digits.append(byte)
        else:
            break
    if not digits:
        return None
    return int(digits.decode("ascii"))


class LazyPackage:
    """
    Cache slot for one installed package.

    Starts out holding only where the package lives. The first load()
    parses it and keeps the record; later calls return that same object.
    The lock makes the transition happen exactly once across threads.
    """

    __slots__ = ("_lock", "_package", "name", "path", "version")

    def __init__(self, path: Path, name: str, version: str) -> None:
        self.path = path
        self.name = name
        self.version = version
        self._package: LocalPackage | None = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._package is not None

    def load(
        self,
        handle_ref: weakref.ReferenceType[Handle],
        sig_level: SignatureLevel = SignatureLevel.USE_DEFAULT,
    ) -> LocalPackage:
        """
        Return the parsed package, parsing it on first use.

        Raises:
            InvariantViolation: If the handle has been released
            PackageParseError: If the package metadata is malformed
            DatabaseIOError: If the package metadata cannot be read
        """
        package = self._package
        if package is not None:
            return package

        with self._lock:
            if self._package is None:
                handle = handle_ref()
                if handle is None:
                    raise InvariantViolation(
                        f"handle released before package {self.name}-{self.version} was loaded"
                    )
                self._package = load_local_package(
                    self.path, self.name, self.version, handle, sig_level
                )
            return self._package

    def __repr__(self) -> str:
        state = "loaded" if self.is_loaded else "unloaded"
        return f"LazyPackage({self.name!r}, {self.version!r}, {state})"


class LocalDatabaseEngine:
    """
    State behind every LocalDatabase facade of one Handle.

    Not created directly; Handle.local_database() builds and populates it.
    """

    def __init__(
        self,
        handle: Handle,
        sig_level: SignatureLevel = SignatureLevel.USE_DEFAULT,
        usage: DbUsage = DbUsage.ALL,
        logger: ILogger | None = None,
    ) -> None:
        self._handle_ref: weakref.ReferenceType[Handle] = weakref.ref(handle)
        self.sig_level = sig_level
        self.usage = usage
        self.path: Path = handle.database_path / LOCAL_DB_NAME
        self._package_cache: dict[PackageKey, LazyPackage] = {}
        self._package_count = 0
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            self._logger = get_logger()
        return self._logger

    @property
    def package_count(self) -> int:
        return self._package_count

    # -------------------------------------------------------------------------
    # Population
    # -------------------------------------------------------------------------

    def populate(self) -> None:
        """
        Fill the package cache from a single listing of the database directory.

        Each package directory becomes an unloaded slot. The version marker
        is skipped; other plain files are skipped with a warning. The cache
        is replaced only if every entry was read successfully.

        Raises:
            InvalidLocalPackageError: If a directory name is not <name>-<pkgver>-<pkgrel>
            DatabaseIOError: If the directory cannot be listed
            InvariantViolation: If two directories give the same name and version
        """
        self.logger.debug('searching for local packages in "%s"', self.path)
        cache: dict[PackageKey, LazyPackage] = {}

        try:
            with os.scandir(self.path) as entries:
                for entry in entries:
                    if not entry.is_dir():
                        if entry.name != LOCAL_DB_VERSION_FILE:
                            self.logger.warning(
                                "unexpected file %s found in local db directory", entry.path
                            )
                        continue

                    split = split_package_dirname(entry.name)
                    if split is None:
                        raise InvalidLocalPackageError(
                            entry.name,
                            message=f"invalid local package directory: {entry.name}",
                            context={"path": entry.path},
                        )
                    name, version = split
                    self.logger.debug('found "%s", version: "%s"', name, version)

                    key = PackageKey(name, version)
                    if key in cache:
                        raise InvariantViolation(
                            f"found package in local db with duplicate name/version: {key}"
                        )
                    cache[key] = LazyPackage(Path(entry.path), name, version)
        except OSError as e:
            raise DatabaseIOError(
                "could not read local database directory", path=str(self.path), cause=e
            ) from e

        self._package_cache = cache
        self._package_count = len(cache)

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def _create_version_file(self) -> None:
        version_path = self.path / LOCAL_DB_VERSION_FILE
        with open(version_path, "w", encoding="ascii") as f:
            f.write(f"{LOCAL_DB_CURRENT_VERSION}\n")

    def _check_version(self) -> bool:
        version_path = self.path / LOCAL_DB_VERSION_FILE
        self.logger.debug("checking local database version")

        try:
            raw = version_path.read_bytes()
        except FileNotFoundError:
            return self._init_version()
        except OSError as e:
            self.logger.error(
                "could not read version file for the local database at %s", self.path
            )
            self.logger.error("caused by %s", e)
            return False

        version = _parse_leading_uint(raw)
        if version is None:
            self.logger.error('"%s" is not a valid version', raw.decode("utf-8", "replace"))
            return False
        if version != LOCAL_DB_CURRENT_VERSION:
            self.logger.warning(
                'local database version is "%d" which is not the latest ("%d")',
                version,
                LOCAL_DB_CURRENT_VERSION,
            )
            return False
        return True

    def _init_version(self) -> bool:
        """Stamp an empty database with the current version. Non-empty means corrupt."""
        self.logger.debug("local database version file not found - creating")
        try:
            with os.scandir(self.path) as entries:
                if next(entries, None) is not None:
                    return False
        except OSError as e:
            self.logger.error(
                "could not check contents of local database directory at %s", self.path
            )
            self.logger.error("caused by %s", e)
            return False

        try:
            self._create_version_file()
        except OSError as e:
            self.logger.error(
                "could not create version file for local database at %s", self.path
            )
            self.logger.error("caused by %s", e)
            return False
        return True

    def status(self) -> DbStatus:
        """
        Classify the database directory. Recomputed on every call.

        Only the directory and its version marker are checked, never the
        installed packages. An empty directory without a marker is stamped
        with the current version.

        Raises:
            DatabaseIOError: If the directory cannot be stat'ed for a reason
                other than not existing
        """
        try:
            st = self.path.stat()
        except FileNotFoundError:
            return DbStatus.MISSING
        except OSError as e:
            raise DatabaseIOError(
                "could not query local database directory", path=str(self.path), cause=e
            ) from e

        if not stat.S_ISDIR(st.st_mode):
            return DbStatus.INVALID

        return DbStatus.VALID if self._check_version() else DbStatus.INVALID

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def _load(self, slot: LazyPackage) -> LocalPackage:
        return slot.load(self._handle_ref, self.sig_level)

    def package(self, name: str, version: str) -> LocalPackage:
        slot = self._package_cache.get(PackageKey(name, version))
        if slot is None:
            raise InvalidLocalPackageError(name)
        return self._load(slot)

    def package_latest(self, name: str) -> LocalPackage:
        """
        Get the newest installed version of a package.

        Scans the whole cache, so cost grows with the number of installed
        packages. Normally only one version of a package is installed.
        """
        candidates = [key for key in self._package_cache if key.name == name]
        if not candidates:
            raise InvalidLocalPackageError(name)
        latest = max(candidates, key=PackageKey.version_key)
        return self._load(self._package_cache[latest])

    def packages(self, visitor: Callable[[LocalPackage], Any]) -> None:
        for slot in self._package_cache.values():
            visitor(self._load(slot))

    def iter_packages(self) -> Iterator[LocalPackage]:
        for slot in self._package_cache.values():
            yield self._load(slot)

    def slots(self) -> dict[PackageKey, LazyPackage]:
        """A copy of the key to slot mapping."""
        return dict(self._package_cache)


class LocalDatabase(IDatabase[LocalPackage]):
    """
    The database of installed packages.

    A thin facade: every LocalDatabase obtained from the same Handle shares
    one LocalDatabaseEngine, exposed as `engine`.
    """

    def __init__(self, engine: LocalDatabaseEngine) -> None:
        self._engine = engine

    @property
    def engine(self) -> LocalDatabaseEngine:
        return self._engine

    @property
    def name(self) -> str:
        return LOCAL_DB_NAME

    @property
    def path(self) -> Path:
        return self._engine.path

    @property
    def sig_level(self) -> SignatureLevel:
        return self._engine.sig_level

    @property
    def usage(self) -> DbUsage:
        return self._engine.usage

    def status(self) -> DbStatus:
        return self._engine.status()

    def count(self) -> int:
        return self._engine.package_count

    def package(self, name: str, version: str) -> LocalPackage:
        return self._engine.package(name, version)

    def package_latest(self, name: str) -> LocalPackage:
        return self._engine.package_latest(name)

    def packages(self, visitor: Callable[[LocalPackage], Any]) -> None:
        self._engine.packages(visitor)

    def iter_packages(self) -> Iterator[LocalPackage]:
        return self._engine.iter_packages()

    def __repr__(self) -> str:
        return f"LocalDatabase({str(self.path)!r}, packages={self.count()})"
