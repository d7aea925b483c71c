"""
Pydantic models and value types for pacdb.
"""

from .base import ImmutableModel, PacdbBaseModel
from .config import LoggingConfig, PacdbConfig, PathsConfig, SignaturesConfig
from .database import DbStatus, DbUsage, SignatureLevel
from .package import PackageKey

__all__ = [
    "DbStatus",
    "DbUsage",
    "ImmutableModel",
    "LoggingConfig",
    "PackageKey",
    "PacdbBaseModel",
    "PacdbConfig",
    "PathsConfig",
    "SignatureLevel",
    "SignaturesConfig",
]
