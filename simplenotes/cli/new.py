"""New note command for Simple Notes CLI."""

from __future__ import annotations

import click

from ..editor import EditorError, handoff
from ..session import Created, normalize_filename, validate_filename
from ._common import SimpleNotesCliError, get_app


@click.command(name="new")
@click.argument("name")
@click.option(
    "-t",
    "--tags",
    "tag_text",
    default="",
    help="Space-separated tags written on the first line, e.g. 'work todo'.",
)
@click.pass_context
def new(ctx: click.Context, name: str, tag_text: str) -> None:
    """Create the note NAME unless it exists, then open it in $EDITOR."""

    error = validate_filename(name)
    if error is not None:
        raise SimpleNotesCliError(error)

    app = get_app(ctx)
    result = Created(app.notes_dir / normalize_filename(name), tag_text)

    try:
        handoff(result)
    except EditorError as exc:
        raise SimpleNotesCliError(str(exc)) from exc


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(new)
