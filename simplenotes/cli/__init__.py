"""Simple Notes CLI package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import click

from . import browse, config_cmd, ls, new
from ._common import CONTEXT_SETTINGS, SimpleNotesCliError

__all__ = ["cli", "main", "SimpleNotesCliError"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.option(
    "-c",
    "--config",
    "config_path_opt",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration TOML file.",
)
@click.option(
    "-d",
    "--dir",
    "notes_dir_opt",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Notes directory (overrides the configuration).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug details to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path_opt: Path | None,
    notes_dir_opt: Path | None,
    verbose: bool,
) -> None:
    """Simple Notes: browse, filter, and create tagged Markdown notes.

    Without a command, starts the interactive browser.
    """

    logging.basicConfig(
        format=LOG_FORMAT,
        level=logging.DEBUG if verbose else logging.WARNING,
    )

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path_opt
    ctx.obj["notes_dir"] = notes_dir_opt

    if ctx.invoked_subcommand is None:
        ctx.invoke(browse.browse)


for register_command in (
    browse.register,
    ls.register,
    new.register,
    config_cmd.register,
):
    register_command(cli)


def main(argv: Sequence[str] | None = None) -> int:
    args = list(argv) if argv is not None else None
    try:
        result = cli.main(args=args, prog_name="sn", standalone_mode=False)
    except click.ClickException as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    except SystemExit as exc:
        return int(exc.code or 0)
    return result if isinstance(result, int) else 0
