"""
Database-level enums shared by the handle, the settings and the databases.
"""

from __future__ import annotations

from enum import Enum, IntFlag


class DbStatus(str, Enum):
    """Structural health of a database directory, recomputed on each query."""

    MISSING = "missing"
    INVALID = "invalid"
    VALID = "valid"


class DbUsage(IntFlag):
    """Which operations a database is used for."""

    SYNC = 1
    SEARCH = 1 << 1
    INSTALL = 1 << 2
    UPGRADE = 1 << 3
    ALL = SYNC | SEARCH | INSTALL | UPGRADE


class SignatureLevel(IntFlag):
    """Signature verification requirements, with the same bits as pacman."""

    NONE = 0
    PACKAGE = 1
    PACKAGE_OPTIONAL = 1 << 1
    PACKAGE_MARGINAL_OK = 1 << 2
    PACKAGE_UNKNOWN_OK = 1 << 3
    DATABASE = 1 << 10
    DATABASE_OPTIONAL = 1 << 11
    DATABASE_MARGINAL_OK = 1 << 12
    DATABASE_UNKNOWN_OK = 1 << 13
    USE_DEFAULT = 1 << 30

    @classmethod
    def from_names(cls, names: list[str] | tuple[str, ...]) -> SignatureLevel:
        """Combine flag names such as ["package", "database_optional"]."""
        level = cls.NONE
        for name in names:
            key = name.strip().upper().replace("-", "_")
            try:
                level |= cls[key]
            except KeyError:
                raise ValueError(f"Unknown signature level: {name}") from None
        return level

    def to_names(self) -> list[str]:
        """Inverse of from_names, lowercased single-bit names."""
        return [
            member.name.lower()
            for member in type(self)
            if member.value and member.value & (member.value - 1) == 0 and member in self
        ]
