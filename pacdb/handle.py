"""
The session handle: where the managed system lives and how to verify it.

A Handle owns the databases derived from it. Databases only keep a weak
reference back, so the Handle must outlive every database and package
obtained through it.

Usage:
    handle = HandleBuilder().with_root_path("/mnt/system").build()
    local = handle.local_database()
    print(local.status(), local.count())
"""

from __future__ import annotations

import os
from pathlib import Path

from .core.di import get_logger
from .core.exceptions import InvalidArgumentError
from .core.models.database import DbUsage, SignatureLevel
from .core.settings import PacdbSettings
from .db.local import LocalDatabase, LocalDatabaseEngine

DEFAULT_DATABASE_SUBPATH = Path("var/lib/pacman")
DEFAULT_SIG_LEVEL = SignatureLevel.PACKAGE | SignatureLevel.DATABASE_OPTIONAL


class Handle:
    """
    Process-wide configuration shared by every database of a session.

    Attributes:
        root_path: Root directory of the managed system
        database_path: Directory holding the databases
        sig_level: Default signature level for databases that defer to it
    """

    def __init__(
        self,
        root_path: str | os.PathLike[str] = "/",
        database_path: str | os.PathLike[str] | None = None,
        sig_level: SignatureLevel = DEFAULT_SIG_LEVEL,
        local_db_usage: DbUsage = DbUsage.ALL,
    ) -> None:
        self.root_path = Path(root_path)
        if database_path is None:
            self.database_path = self.root_path / DEFAULT_DATABASE_SUBPATH
        else:
            self.database_path = Path(database_path)
        if sig_level & SignatureLevel.USE_DEFAULT:
            raise InvalidArgumentError(
                "the handle's signature level is the default and cannot defer to one",
                argument="sig_level",
                value=repr(sig_level),
            )
        self.sig_level = sig_level
        self.local_db_usage = local_db_usage
        self._local_engine: LocalDatabaseEngine | None = None

    @classmethod
    def from_settings(cls, settings: PacdbSettings) -> Handle:
        """Create a handle from loaded settings."""
        return cls(
            root_path=settings.paths.root,
            database_path=settings.paths.dbpath,
            sig_level=settings.signatures.level,
        )

    def local_database(self) -> LocalDatabase:
        """
        Get the local database, creating and populating it on first use.

        If the database directory does not exist or is not a directory the
        database starts out empty and status() reports why.

        Raises:
            InvalidLocalPackageError: If a package directory name is malformed
            DatabaseIOError: If the database directory cannot be listed
        """
        if self._local_engine is None:
            engine = LocalDatabaseEngine(self, usage=self.local_db_usage)
            if engine.path.is_dir():
                engine.populate()
            else:
                get_logger().debug("local database %s not present, not populating", engine.path)
            self._local_engine = engine
        return LocalDatabase(self._local_engine)

    def __repr__(self) -> str:
        return (
            f"Handle(root_path={str(self.root_path)!r}, "
            f"database_path={str(self.database_path)!r}, sig_level={self.sig_level!r})"
        )


class HandleBuilder:
    """Step-by-step construction of a Handle."""

    def __init__(self) -> None:
        self._root_path: Path = Path("/")
        self._database_path: Path | None = None
        self._sig_level: SignatureLevel = DEFAULT_SIG_LEVEL
        self._local_db_usage: DbUsage = DbUsage.ALL

    def with_root_path(self, root_path: str | os.PathLike[str]) -> HandleBuilder:
        self._root_path = Path(root_path)
        return self

    def with_database_path(self, database_path: str | os.PathLike[str]) -> HandleBuilder:
        self._database_path = Path(database_path)
        return self

    def with_sig_level(self, sig_level: SignatureLevel) -> HandleBuilder:
        self._sig_level = sig_level
        return self

    def with_local_db_usage(self, usage: DbUsage) -> HandleBuilder:
        self._local_db_usage = usage
        return self

    def build(self) -> Handle:
        return Handle(
            root_path=self._root_path,
            database_path=self._database_path,
            sig_level=self._sig_level,
            local_db_usage=self._local_db_usage,
        )
