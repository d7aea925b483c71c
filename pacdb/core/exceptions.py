"""
Custom exception hierarchy for pacdb.

All recoverable failures derive from PacdbException so callers can tell
database problems apart from bugs. InvariantViolation sits outside that
hierarchy on purpose: it marks states the database model does not allow.
"""

from __future__ import annotations


class PacdbException(Exception):
    """
    Base exception for all pacdb errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (paths, package names, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
        recoverable: Whether retry/recovery may be possible
    """

    exit_code: int = 1
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class PacdbConfigError(PacdbException):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(PacdbConfigError):
    """
    Error reading or parsing a configuration file.

    Raised for TOML parsing errors, unreadable files, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(PacdbConfigError, ValueError):
    """
    Invalid or unknown configuration value.

    Inherits from ValueError so `pacdb config set` can report it like any
    other bad input.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Database Errors
# =============================================================================


class PacdbDatabaseError(PacdbException):
    """Base class for database-related errors."""

    pass


class DatabaseIOError(PacdbDatabaseError):
    """
    Filesystem error while reading or writing the database.

    Wraps the underlying OSError, available as __cause__.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx, cause=cause)
        self.path = path


class InvalidLocalPackageError(PacdbDatabaseError):
    """
    A local package could not be found or its directory name is malformed.

    Raised by lookups that miss and by population when a package directory
    name cannot be split into name and version.
    """

    def __init__(
        self,
        name: str,
        *,
        message: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        ctx["name"] = name
        super().__init__(message or f"invalid local package: {name}", context=ctx, cause=cause)
        self.name = name


class PackageParseError(PacdbDatabaseError):
    """
    The metadata of an installed package could not be parsed.

    Raised for a missing or malformed desc file, or when its contents do
    not match the package directory.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        field: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        if field:
            ctx["field"] = field
        super().__init__(message, context=ctx, cause=cause)
        self.path = path
        self.field = field


# =============================================================================
# Validation Errors
# =============================================================================


class PacdbValidationError(PacdbException, ValueError):
    """Base class for input validation errors."""

    pass


class InvalidArgumentError(PacdbValidationError):
    """
    Invalid command-line argument or function parameter.

    Raised when user input fails validation.
    """

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if argument:
            ctx["argument"] = argument
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Fatal Errors
# =============================================================================


class InvariantViolation(RuntimeError):
    """
    A state the database model rules out has been reached.

    Fired for two package directories that split to the same name and
    version, and for a package load after the owning Handle was released.
    Not a PacdbException, so handlers for database errors do not catch it.
    """

    exit_code: int = 70
    recoverable: bool = False
