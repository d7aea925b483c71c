"""
Diagnostic logging for pacdb.

Database scans and package parsing report through ILogger. PacdbLogger
writes those records to a rotating file under ~/.cache/pacdb and, when
the ``logging.console`` setting is on, to stderr as well.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from ..core.interfaces.logger import ILogger

if TYPE_CHECKING:
    from ..core.models.config import LoggingConfig


class PacdbLogger(ILogger):
    """ILogger backed by a stdlib ``logging.Logger`` that does not propagate."""

    LOG_FILE_PATH = Path.home() / ".cache" / "pacdb" / "pacdb.log"
    MAX_FILE_SIZE = 5 * 1024 * 1024
    BACKUP_COUNT = 2
    RECORD_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    LEVEL_MAP: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        name: str = "pacdb",
        level: str = "warning",
        console_enabled: bool = False,
        file_enabled: bool = True,
        log_file: Path | None = None,
    ) -> None:
        """
        Args:
            name: Name of the underlying stdlib logger
            level: Threshold applied to every handler
            console_enabled: Also write records to stderr
            file_enabled: Write records to the rotating log file
            log_file: Log file to use instead of LOG_FILE_PATH
        """
        self.log_file = log_file or self.LOG_FILE_PATH
        self._handlers: list[logging.Handler] = []

        self._logger = logging.getLogger(name)
        # Handlers do the level filtering; the logger itself passes everything.
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers.clear()
        self._logger.propagate = False

        if console_enabled:
            self._add_handler(logging.StreamHandler(sys.stderr))
        if file_enabled:
            file_handler = self._open_log_file()
            if file_handler is not None:
                self._add_handler(file_handler)

        self.set_level(level)

    @classmethod
    def from_config(cls, config: LoggingConfig, log_file: Path | None = None) -> PacdbLogger:
        """Build a logger from the ``[logging]`` section of the settings."""
        return cls(
            level=config.level,
            console_enabled=config.console,
            file_enabled=config.file,
            log_file=log_file,
        )

    @property
    def handlers(self) -> list[logging.Handler]:
        return list(self._handlers)

    def _add_handler(self, handler: logging.Handler) -> None:
        handler.setFormatter(logging.Formatter(self.RECORD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        self._logger.addHandler(handler)
        self._handlers.append(handler)

    def _open_log_file(self) -> RotatingFileHandler | None:
        # A read-only home directory leaves pacdb usable, just without a log file.
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            return RotatingFileHandler(
                self.log_file,
                maxBytes=self.MAX_FILE_SIZE,
                backupCount=self.BACKUP_COUNT,
            )
        except OSError as e:
            print(f"pacdb: file logging disabled: {e}", file=sys.stderr)
            return None

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        """Apply a level name to every handler. Unknown names mean warning."""
        threshold = self.LEVEL_MAP.get(level.lower(), logging.WARNING)
        for handler in self._handlers:
            handler.setLevel(threshold)


class NullLogger(ILogger):
    """Discards everything. Used until bootstrap registers a real logger."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def set_level(self, level: str) -> None:
        pass
