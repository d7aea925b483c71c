"""
Native Click implementation of the info command.

Usage: pacdb info NAME [VERSION]
"""

from __future__ import annotations

import click

from ...db.package import InstallReason
from ...presenters.formatting import format_list, format_size, format_timestamp
from ..context import PacdbContext
from ..decorators import report_errors, require_valid_database


@click.command("info")
@click.argument("name")
@click.argument("version", required=False)
@click.option("--files", "-l", "show_files", is_flag=True, help="List installed files.")
@click.pass_obj
@report_errors
@require_valid_database
def info(ctx: PacdbContext, name: str, version: str | None, show_files: bool) -> None:
    """Show details of an installed package.

    Without VERSION the newest installed version is shown.
    """
    local = ctx.handle.local_database()
    pkg = local.package(name, version) if version else local.package_latest(name)

    reason = (
        "Explicitly installed"
        if pkg.reason is InstallReason.EXPLICIT
        else "Installed as a dependency for another package"
    )
    fields = [
        ("Name", pkg.name),
        ("Version", pkg.version),
        ("Description", pkg.description or "None"),
        ("Architecture", pkg.arch or "None"),
        ("URL", pkg.url or "None"),
        ("Licenses", format_list(pkg.licenses)),
        ("Groups", format_list(pkg.groups)),
        ("Provides", format_list(pkg.provides)),
        ("Depends On", format_list(pkg.depends)),
        ("Optional Deps", format_list(pkg.optdepends)),
        ("Conflicts With", format_list(pkg.conflicts)),
        ("Replaces", format_list(pkg.replaces)),
        ("Installed Size", format_size(pkg.size)),
        ("Packager", pkg.packager or "Unknown Packager"),
        ("Build Date", format_timestamp(pkg.build_date)),
        ("Install Date", format_timestamp(pkg.install_date)),
        ("Install Reason", reason),
        ("Validated By", format_list(sorted(m.value for m in pkg.validation))),
    ]
    for label, value in fields:
        click.echo(f"{label:<15}: {value}")

    if show_files:
        click.echo("")
        for path in pkg.files():
            click.echo(f"{pkg.name} {path}")
