"""
Native Click implementation of the config command.

Usage: pacdb config [list|get|set] [key] [value]
"""

from __future__ import annotations

import click

from ...config import config_get, config_list, config_set
from ..context import PacdbContext
from ..decorators import report_errors


@click.group("config", invoke_without_command=True)
@click.pass_context
def config(ctx: click.Context) -> None:
    """View or set configuration.

    Config is read from --config, $PACDB_CONFIG, ~/.config/pacdb/config.toml
    or /etc/pacdb.toml, in that order.

    \b
    Examples:

        pacdb config list                      # List all options

        pacdb config get paths.root            # Get a value

        pacdb config set logging.level debug   # Set a value
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@config.command("list")
def config_list_cmd() -> None:
    """List all config options."""
    keys = config_list()
    click.echo("Available config options:")
    click.echo("")

    for key, info in keys.items():
        click.echo(f"  {key}")
        click.echo(f"    {info['description']}")
        click.echo(f"    Default: {info['default']}")
        click.echo("")


@config.command("get")
@click.argument("key")
@click.pass_obj
@report_errors
def config_get_cmd(ctx: PacdbContext, key: str) -> None:
    """Get a config value.

    Arguments:

        KEY    The config key to get (e.g. paths.dbpath)
    """
    value = config_get(key, config_path=ctx.config_path)
    if value is None:
        click.echo(f"{key}: (not set)")
    else:
        click.echo(f"{key}: {value}")


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
@report_errors
def config_set_cmd(ctx: PacdbContext, key: str, value: str) -> None:
    """Set a config value.

    Arguments:

        KEY    The config key to set

        VALUE  The value to set
    """
    try:
        config_path, typed_value = config_set(key, value, config_path=ctx.config_path)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Set {key} = {typed_value}")
    click.echo(f"Saved to {config_path}")
