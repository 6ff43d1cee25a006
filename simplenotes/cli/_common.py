"""Shared helpers for Simple Notes CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from ..app import AppContext, bootstrap
from ..catalog import DirectoryUnavailableError
from ..config import ConfigError

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}


class SimpleNotesCliError(click.ClickException):
    """Shared Click exception wrapper for CLI failures."""


def confirm_create_dir(path: Path) -> bool:
    return click.confirm(
        f"Notes directory {path} does not exist. Create it?", default=True
    )


def get_app(ctx: click.Context, *, assume_yes: bool = False) -> AppContext:
    """Return a cached AppContext for the current CLI invocation."""

    app: AppContext | None = ctx.obj.get("app")
    if app is not None:
        return app

    config_path_opt: Path | None = ctx.obj.get("config_path")
    notes_dir_opt: Path | None = ctx.obj.get("notes_dir")

    try:
        app = bootstrap(
            config_path_opt,
            notes_dir=notes_dir_opt,
            confirm=None if assume_yes else confirm_create_dir,
        )
    except (ConfigError, DirectoryUnavailableError) as exc:
        raise SimpleNotesCliError(str(exc)) from exc

    ctx.obj["app"] = app
    return app
