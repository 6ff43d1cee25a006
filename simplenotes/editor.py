"""Hand a selection over to the user's editor, creating new notes first."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Callable, Mapping

from .catalog import strip_note_extension
from .session import Cancelled, Chosen, Created, SelectionResult
from .tags import encode_tags

logger = logging.getLogger(__name__)

EDITOR_ENV_VAR = "EDITOR"

RunFunc = Callable[..., subprocess.CompletedProcess]


class EditorError(RuntimeError):
    """Base error for editor handoff failures."""


class EditorNotConfiguredError(EditorError):
    """Raised when no editor is set in the environment."""

    def __init__(self) -> None:
        super().__init__(f"{EDITOR_ENV_VAR} environment variable not set")


class EditorLaunchFailedError(EditorError):
    """Raised when the editor cannot be started or exits unsuccessfully."""


def note_title(path: Path) -> str:
    """Title for a note: base name without extension, first letter upper-cased."""

    stem = strip_note_extension(path.name)
    return stem[:1].upper() + stem[1:]


def initial_body(path: Path, tag_text: str = "") -> str:
    """Render the starting content of a newly created note."""

    lines: list[str] = []
    tag_line = encode_tags(tag_text)
    if tag_line is not None:
        lines.append(tag_line)
    lines.append(f"# {note_title(path)}")
    return "\n".join(lines) + "\n\n"


def resolve_editor(environ: Mapping[str, str] | None = None) -> list[str]:
    """Return the editor command line from ``$EDITOR``.

    The value is split with shell rules so that ``EDITOR="code --wait"`` works.
    """

    env = os.environ if environ is None else environ
    raw = env.get(EDITOR_ENV_VAR, "")
    try:
        command = shlex.split(raw)
    except ValueError as exc:
        raise EditorLaunchFailedError(
            f"Cannot parse {EDITOR_ENV_VAR} value {raw!r}: {exc}"
        ) from exc
    if not command:
        raise EditorNotConfiguredError()
    return command


def launch_editor(
    command: list[str], path: Path, *, run: RunFunc | None = None
) -> None:
    """Run ``command`` on ``path`` in the foreground and wait for it to exit.

    The editor inherits this process's standard streams.
    """

    runner = run or subprocess.run
    argv = [*command, str(path)]
    logger.debug("Launching editor: %s", shlex.join(argv))
    try:
        process = runner(argv, check=False)
    except OSError as exc:
        raise EditorLaunchFailedError(
            f"Failed to launch editor '{command[0]}': {exc}"
        ) from exc
    if process.returncode != 0:
        raise EditorLaunchFailedError(
            f"Editor '{command[0]}' exited with status {process.returncode}"
        )


def materialize(path: Path, tag_text: str = "") -> bool:
    """Write the initial body of a new note unless the file already exists.

    Returns True when the file was created.
    """

    try:
        with path.open("x", encoding="utf-8") as fh:
            fh.write(initial_body(path, tag_text))
    except FileExistsError:
        logger.debug("%s already exists, opening it unmodified", path)
        return False
    except OSError as exc:
        raise EditorError(f"Failed to create note {path}: {exc}") from exc
    logger.debug("Created note %s", path)
    return True


def handoff(
    result: SelectionResult,
    *,
    environ: Mapping[str, str] | None = None,
    run: RunFunc | None = None,
) -> Path | None:
    """Act on the outcome of a selection session.

    ``Cancelled`` does nothing. ``Chosen`` opens the note as is. ``Created``
    first writes the initial body when the file does not exist yet. Returns
    the path handed to the editor, or None when cancelled.

    The editor is resolved only here, so a session can be cancelled without
    ``$EDITOR`` being set.
    """

    if isinstance(result, Cancelled):
        return None

    command = resolve_editor(environ)
    if isinstance(result, Created):
        materialize(result.path, result.tag_text)
        path = result.path
    elif isinstance(result, Chosen):
        path = result.path
    else:  # pragma: no cover - exhaustive over SelectionResult
        raise TypeError(f"Unsupported selection result: {result!r}")

    launch_editor(command, path, run=run)
    return path
