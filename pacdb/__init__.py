"""
pacdb - read-only access to a package manager's local database.

Tracks which packages are installed on a system by reading the
directory-based local database, checking its layout version, and looking
up installed package records.
"""

from .core.exceptions import (
    DatabaseIOError,
    InvalidLocalPackageError,
    InvariantViolation,
    PackageParseError,
    PacdbException,
)
from .core.models.database import DbStatus, DbUsage, SignatureLevel
from .core.models.package import PackageKey
from .core.version import Version, vercmp
from .db import InstallReason, LocalDatabase, LocalPackage, ValidationMethod
from .handle import Handle, HandleBuilder

__all__ = [
    "DatabaseIOError",
    "DbStatus",
    "DbUsage",
    "Handle",
    "HandleBuilder",
    "InstallReason",
    "InvalidLocalPackageError",
    "InvariantViolation",
    "LocalDatabase",
    "LocalPackage",
    "PackageKey",
    "PackageParseError",
    "PacdbException",
    "SignatureLevel",
    "ValidationMethod",
    "Version",
    "vercmp",
]
