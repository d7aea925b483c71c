"""
Query contract shared by package databases.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, Generic, TypeVar

from ..models.database import DbStatus

P = TypeVar("P")


class IDatabase(ABC, Generic[P]):
    """
    A read-only view over a package database.

    P is the package record type the database hands out.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Constant identifier of the database."""
        pass

    @property
    @abstractmethod
    def path(self) -> Path:
        """Root file or directory of the database."""
        pass

    @abstractmethod
    def status(self) -> DbStatus:
        """Classify the on-disk structure of the database."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of packages in the database."""
        pass

    @abstractmethod
    def package(self, name: str, version: str) -> P:
        """
        Get the package with exactly this name and version.

        Raises:
            InvalidLocalPackageError: If no such package exists
        """
        pass

    @abstractmethod
    def package_latest(self, name: str) -> P:
        """
        Get the newest version of a package.

        Raises:
            InvalidLocalPackageError: If no package has this name
        """
        pass

    @abstractmethod
    def packages(self, visitor: Callable[[P], Any]) -> None:
        """
        Call visitor with every package.

        The first exception, from loading or from the visitor, stops the
        iteration and propagates unchanged.
        """
        pass

    def iter_packages(self) -> Iterator[P]:
        """Yield every package once all of them have loaded."""
        collected: list[P] = []
        self.packages(collected.append)
        yield from collected

    # Short names for the query operations.
    def lookup(self, name: str, version: str) -> P:
        return self.package(name, version)

    def lookup_latest(self, name: str) -> P:
        return self.package_latest(name)

    def for_each(self, visitor: Callable[[P], Any]) -> None:
        self.packages(visitor)
