"""
ILogger: where pacdb sends its diagnostics.

The local database engine reports its directory scan and version marker
checks through this interface. Anything a user is meant to read is printed by
the CLI commands instead.
"""

from abc import ABC, abstractmethod
from typing import Any


class ILogger(ABC):
    """
    Level-based diagnostic sink resolved from the service container.

    Arguments follow stdlib %-formatting and are only interpolated when the
    record passes the level threshold.
    """

    @abstractmethod
    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Something was skipped or fell back to a default."""

    @abstractmethod
    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """A read or write failed, or the database was found invalid."""

    @abstractmethod
    def set_level(self, level: str) -> None:
        """Change the threshold to ``debug``, ``info``, ``warning`` or ``error``."""
