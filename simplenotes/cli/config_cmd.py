"""``sn config``: locate, seed and edit the settings file."""

from __future__ import annotations

from pathlib import Path

import click

from .. import config as config_module
from ._common import SimpleNotesCliError


def _settings_path(ctx: click.Context) -> Path:
    chosen: Path | None = ctx.obj.get("config_path")
    return (chosen or config_module.DEFAULT_CONFIG_PATH).expanduser()


@click.command(name="config")
@click.option(
    "-p",
    "--path",
    "print_path",
    is_flag=True,
    help="Print where the settings file lives and exit.",
)
@click.pass_context
def config(ctx: click.Context, print_path: bool) -> None:
    """Edit the settings file, seeding it with defaults when missing.

    The file is checked once the editor closes; a setting that would make
    ``sn`` fail is reported right away.
    """

    settings_path = _settings_path(ctx)
    if print_path:
        click.echo(str(settings_path))
        return

    if config_module.bootstrap_config_file(settings_path):
        click.echo(f"Wrote default settings to {settings_path}")

    try:
        click.edit(filename=str(settings_path))
    except click.ClickException as exc:
        raise SimpleNotesCliError(f"Failed to launch editor: {exc.message}") from exc

    try:
        settings = config_module.load_config(settings_path)
    except config_module.ConfigError as exc:
        raise SimpleNotesCliError(str(exc)) from exc
    click.echo(f"Notes directory: {settings.notes_dir}")


def register(cli: click.Group) -> None:
    cli.add_command(config)
