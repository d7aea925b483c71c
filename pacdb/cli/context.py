"""
Click context extension for pacdb CLI.

Provides PacdbContext dataclass that holds pacdb-specific data
passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..core.settings import PacdbSettings
    from ..handle import Handle


@dataclass
class PacdbContext:
    """Extended context passed through Click command chain.

    Attributes:
        settings: Loaded settings, with command-line overrides applied
        config_path: Explicit config file given with --config, if any
    """

    settings: PacdbSettings
    config_path: Path | None = None
    _handle: Handle | None = field(default=None, repr=False)

    @classmethod
    def create(
        cls,
        root: str | None = None,
        dbpath: str | None = None,
        config_path: Path | None = None,
    ) -> PacdbContext:
        """Load settings and apply --root/--dbpath overrides.

        Args:
            root: Root directory override
            dbpath: Database directory override
            config_path: Explicit config file

        Returns:
            Configured PacdbContext instance
        """
        from ..core.settings import load_settings

        settings = load_settings(config_path=config_path)
        paths: dict[str, Any] = {}
        if root is not None:
            paths["root"] = root
        if dbpath is not None:
            paths["dbpath"] = dbpath
        if paths:
            settings.paths = settings.paths.model_copy(update=paths)

        return cls(settings=settings, config_path=config_path)

    @property
    def handle(self) -> Handle:
        """The session handle, created on first access."""
        if self._handle is None:
            from ..handle import Handle

            self._handle = Handle.from_settings(self.settings)
        return self._handle
