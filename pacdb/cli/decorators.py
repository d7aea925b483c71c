"""
Click decorators for pacdb CLI commands.

- report_errors: Turns pacdb errors into a clean CLI failure
- require_valid_database: Refuses to query a missing or invalid database
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import click

from ..core.exceptions import PacdbException
from ..core.models.database import DbStatus

if TYPE_CHECKING:
    from .context import PacdbContext

F = TypeVar("F", bound=Callable[..., Any])


class PacdbClickException(click.ClickException):
    """ClickException carrying the exit code of the pacdb error."""

    def __init__(self, error: PacdbException) -> None:
        super().__init__(str(error))
        self.exit_code = error.exit_code


def report_errors(f: F) -> F:
    """Decorator reporting PacdbException as a CLI error.

    InvariantViolation is not a PacdbException and still produces a
    traceback.
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except PacdbException as e:
            raise PacdbClickException(e) from e

    return wrapper  # type: ignore[return-value]


def require_valid_database(f: F) -> F:
    """Decorator to require a valid local database.

    Usage:
        @cli.command()
        @click.pass_obj
        @report_errors
        @require_valid_database
        def query(ctx: PacdbContext):
            ...

    Note:
        This decorator should be applied AFTER @click.pass_obj so that
        the PacdbContext is available.
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        ctx_maybe: Any = args[0] if args else kwargs.get("ctx")

        if ctx_maybe is None:
            raise click.ClickException(
                "Internal error: PacdbContext not available. "
                "Ensure @click.pass_obj is applied before @require_valid_database."
            )
        ctx: PacdbContext = ctx_maybe

        local = ctx.handle.local_database()
        status = local.status()
        if status is not DbStatus.VALID:
            raise click.ClickException(f"local database at {local.path} is {status.value}")

        return f(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
