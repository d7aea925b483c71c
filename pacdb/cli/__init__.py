"""
Click-based CLI for pacdb.

This module provides the main Click command group and serves as the
entry point for the pacdb CLI.

Usage:
    from pacdb.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

from pathlib import Path

import click

from ..core.bootstrap import bootstrap
from ..core.exceptions import PacdbException
from .context import PacdbContext
from .decorators import PacdbClickException

# Version is loaded from package metadata
try:
    from importlib.metadata import version

    __version__ = version("pacdb")
except Exception:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pacdb")
@click.option("--root", "-r", metavar="PATH", help="Root directory of the managed system.")
@click.option("--dbpath", "-b", metavar="PATH", help="Database directory.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file to use instead of the default locations.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    root: str | None,
    dbpath: str | None,
    config_path: Path | None,
) -> None:
    """pacdb - inspect the local package database

    \b
    Commands:
        pacdb status             Check the local database
        pacdb query [NAME]       List installed packages
        pacdb info NAME          Show an installed package
        pacdb config             View or set configuration
    """
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    else:
        try:
            bootstrap(config_path)
            ctx.obj = PacdbContext.create(root=root, dbpath=dbpath, config_path=config_path)
        except PacdbException as e:
            raise PacdbClickException(e) from e


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


# Register commands at module load time
register_commands()


__all__ = [
    "PacdbContext",
    "__version__",
    "cli",
    "register_commands",
]
