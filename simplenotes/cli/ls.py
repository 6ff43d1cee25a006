"""List command for Simple Notes CLI."""

from __future__ import annotations

import click

from ..catalog import DirectoryUnavailableError, filter_entries, scan_catalog
from ._common import SimpleNotesCliError, get_app


@click.command(name="ls")
@click.argument("pattern", required=False, default="")
@click.option(
    "-r",
    "--reverse",
    is_flag=True,
    help="Reverse order (Z to A)",
)
@click.pass_context
def ls(ctx: click.Context, pattern: str, reverse: bool) -> None:
    """List notes whose name or tags contain PATTERN (case-insensitive)."""

    app = get_app(ctx)

    try:
        entries = list(filter_entries(scan_catalog(app.notes_dir), pattern))
    except DirectoryUnavailableError as exc:  # pragma: no cover - pass-through
        raise SimpleNotesCliError(str(exc)) from exc

    if reverse:
        entries = list(reversed(entries))

    for entry in entries:
        tag_suffix = f"  [tags: {', '.join(entry.tags)}]" if entry.tags else ""
        click.echo(f"{entry.display_name}{tag_suffix}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(ls)
