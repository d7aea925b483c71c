"""
Package databases.
"""

from .base import LOCAL_DB_NAME, split_package_dirname
from .local import (
    LOCAL_DB_CURRENT_VERSION,
    LOCAL_DB_VERSION_FILE,
    LazyPackage,
    LocalDatabase,
    LocalDatabaseEngine,
)
from .package import InstallReason, LocalPackage, ValidationMethod, load_local_package

__all__ = [
    "LOCAL_DB_CURRENT_VERSION",
    "LOCAL_DB_NAME",
    "LOCAL_DB_VERSION_FILE",
    "InstallReason",
    "LazyPackage",
    "LocalDatabase",
    "LocalDatabaseEngine",
    "LocalPackage",
    "ValidationMethod",
    "load_local_package",
    "split_package_dirname",
]
