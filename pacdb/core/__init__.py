"""
Core infrastructure for pacdb.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- Interface definitions for databases and logging
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container, resolve, try_resolve
from .exceptions import (
    ConfigFileError,
    ConfigValidationError,
    DatabaseIOError,
    InvalidArgumentError,
    InvalidLocalPackageError,
    InvariantViolation,
    PackageParseError,
    PacdbConfigError,
    PacdbDatabaseError,
    PacdbException,
    PacdbValidationError,
)

__all__ = [
    "ConfigFileError",
    "ConfigValidationError",
    "DatabaseIOError",
    "InvalidArgumentError",
    "InvalidLocalPackageError",
    "InvariantViolation",
    "PackageParseError",
    "PacdbConfigError",
    "PacdbDatabaseError",
    "PacdbException",
    "PacdbValidationError",
    "ServiceContainer",
    "bootstrap",
    "get_container",
    "is_initialized",
    "reset",
    "resolve",
    "try_resolve",
]
