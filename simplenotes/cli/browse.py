"""Interactive browse command for Simple Notes CLI."""

from __future__ import annotations

import click

from ..catalog import DirectoryUnavailableError, scan_catalog
from ..editor import EditorError, handoff
from ..session import SelectionSession
from ..tui import run_session
from ._common import SimpleNotesCliError, get_app


@click.command(name="browse")
@click.option(
    "-y",
    "--yes",
    "assume_yes",
    is_flag=True,
    help="Create a missing notes directory without asking.",
)
@click.pass_context
def browse(ctx: click.Context, assume_yes: bool) -> None:
    """Browse and filter notes, open one, or create a new one."""

    app = get_app(ctx, assume_yes=assume_yes)

    try:
        entries = scan_catalog(app.notes_dir)
    except DirectoryUnavailableError as exc:
        raise SimpleNotesCliError(str(exc)) from exc

    # The editor only starts once the full-screen UI has exited.
    session = SelectionSession(entries, app.notes_dir)
    result = run_session(session, title=str(app.notes_dir), theme=app.config.theme)

    try:
        handoff(result)
    except EditorError as exc:
        raise SimpleNotesCliError(str(exc)) from exc


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(browse)
