"""Application bootstrap and context container for Simple Notes."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .catalog import ensure_notes_dir
from .config import SimpleNotesConfig, load_config


@dataclass(slots=True)
class AppContext:
    """Aggregates configuration and the resolved notes directory."""

    config: SimpleNotesConfig
    notes_dir: Path


def bootstrap(
    config_path: Path | None,
    *,
    notes_dir: Path | None = None,
    confirm: Callable[[Path], bool] | None = None,
) -> AppContext:
    """Load configuration and make sure the notes directory exists.

    ``notes_dir`` overrides the configured directory. ``confirm`` is asked
    before a missing directory is created, unless the configuration disables
    confirmation.
    """

    # Defer error mapping to the CLI, which knows how to present messages.
    config = load_config(config_path)

    target = (notes_dir or config.notes_dir).expanduser()
    ensure_notes_dir(target, confirm if config.confirm_create_dir else None)

    return AppContext(config=config, notes_dir=target)
