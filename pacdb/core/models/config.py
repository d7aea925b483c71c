"""
Configuration models.

Provides Pydantic models for pacdb configuration with validation.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import ConfigDict, Field, field_validator

from .base import PacdbBaseModel
from .database import SignatureLevel

# Type aliases
LogLevel = Literal["debug", "info", "warning", "error"]


class ConfigBaseModel(PacdbBaseModel):
    """Config section base. TOML values are coerced and unknown keys dropped."""

    model_config = ConfigDict(strict=False, extra="ignore")


class PathsConfig(ConfigBaseModel):
    """Filesystem locations of the managed system."""

    root: str = "/"
    dbpath: str | None = None  # defaults to <root>/var/lib/pacman

    @field_validator("root", mode="before")
    @classmethod
    def validate_root(cls, v: Any) -> Any:
        if v is None or v == "":
            return "/"
        return v

    @field_validator("dbpath", mode="before")
    @classmethod
    def validate_dbpath(cls, v: Any) -> Any:
        if v == "":
            return None
        return v


class SignaturesConfig(ConfigBaseModel):
    """Default signature verification level."""

    default_level: list[str] = Field(
        default_factory=lambda: ["package", "database_optional"]
    )

    @field_validator("default_level", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: Any) -> list[str]:
        """Parse comma-separated string to list."""
        if isinstance(v, str):
            return [x.strip() for x in v.split(",") if x.strip()]
        return v if v else []

    @field_validator("default_level")
    @classmethod
    def validate_names(cls, v: list[str]) -> list[str]:
        SignatureLevel.from_names(v)
        return [name.strip().lower() for name in v]

    @property
    def level(self) -> SignatureLevel:
        return SignatureLevel.from_names(self.default_level)


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = True


class PacdbConfig(ConfigBaseModel):
    """Complete pacdb configuration.

    This model represents the full configuration with all sections.
    It can be loaded from TOML files or constructed programmatically.
    """

    paths: PathsConfig = Field(default_factory=PathsConfig)
    signatures: SignaturesConfig = Field(default_factory=SignaturesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()
