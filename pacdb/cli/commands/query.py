"""
Native Click implementation of the query command.

Usage: pacdb query [NAME]
"""

from __future__ import annotations

import click

from ...db.package import InstallReason, LocalPackage
from ..context import PacdbContext
from ..decorators import report_errors, require_valid_database


@click.command("query")
@click.argument("name", required=False)
@click.option("--explicit", "-e", is_flag=True, help="Only explicitly installed packages.")
@click.option("--deps", "-d", is_flag=True, help="Only packages installed as dependencies.")
@click.pass_obj
@report_errors
@require_valid_database
def query(ctx: PacdbContext, name: str | None, explicit: bool, deps: bool) -> None:
    """List installed packages.

    \b
    Examples:

        pacdb query            # All installed packages

        pacdb query -e         # Explicitly installed packages

        pacdb query bash       # Installed version of bash
    """
    local = ctx.handle.local_database()

    if name is not None:
        pkg = local.package_latest(name)
        click.echo(f"{pkg.name} {pkg.version}")
        return

    selected: list[LocalPackage] = []

    def collect(pkg: LocalPackage) -> None:
        if explicit and pkg.reason is not InstallReason.EXPLICIT:
            return
        if deps and pkg.reason is not InstallReason.DEPEND:
            return
        selected.append(pkg)

    if explicit or deps:
        local.packages(collect)
        rows = [(pkg.name, pkg.version) for pkg in selected]
    else:
        # Listing names and versions needs no package metadata.
        rows = [(key.name, key.version) for key in local.engine.slots()]

    for pkg_name, pkg_version in sorted(rows):
        click.echo(f"{pkg_name} {pkg_version}")
