"""
Abstract interfaces for pacdb's services and databases.
"""

from .database import IDatabase
from .logger import ILogger

__all__ = [
    "IDatabase",
    "ILogger",
]
