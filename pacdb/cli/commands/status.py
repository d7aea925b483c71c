"""
Native Click implementation of the status command.

Usage: pacdb status
"""

from __future__ import annotations

import click

from ...core.models.database import DbStatus
from ..context import PacdbContext
from ..decorators import report_errors


@click.command("status")
@click.pass_obj
@report_errors
def status(ctx: PacdbContext) -> None:
    """Check the structure of the local database.

    Exits with status 1 unless the database is valid. An empty database
    directory is stamped with the current layout version.
    """
    local = ctx.handle.local_database()
    db_status = local.status()

    click.echo(f"Database: {local.path}")
    click.echo(f"Status:   {db_status.value}")
    if db_status is DbStatus.VALID:
        click.echo(f"Packages: {local.count()}")
    else:
        raise SystemExit(1)
