"""Discovery of note files and their tags in the notes directory."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from .tags import decode_tags

logger = logging.getLogger(__name__)

NOTE_EXTENSION = ".md"
FIRST_LINE_LIMIT = 4096


class DirectoryUnavailableError(RuntimeError):
    """Raised when the notes directory cannot be listed or created."""


@dataclass(frozen=True, slots=True)
class NoteEntry:
    """A note file discovered during a catalog scan."""

    path: Path
    display_name: str
    tags: tuple[str, ...] = ()

    @property
    def search_text(self) -> str:
        return " ".join((self.display_name, *self.tags))


def is_note_name(name: str) -> bool:
    return not name.startswith(".") and name.lower().endswith(NOTE_EXTENSION)


def strip_note_extension(name: str) -> str:
    """Remove one trailing ``.md`` (any case) from ``name``."""

    if name.lower().endswith(NOTE_EXTENSION):
        return name[: -len(NOTE_EXTENSION)]
    return name


def scan_catalog(directory: Path | str) -> tuple[NoteEntry, ...]:
    """Return the notes found directly inside ``directory``, sorted by file name.

    Hidden files, subdirectories, and files without the ``.md`` extension are
    skipped. Only the first line of each note is read to extract its tags; a
    note that cannot be read is still listed, without tags.

    Raises
    ------
    DirectoryUnavailableError
        If ``directory`` itself cannot be listed.
    """

    root = Path(directory)
    try:
        with os.scandir(root) as it:
            names = sorted(
                entry.name
                for entry in it
                if is_note_name(entry.name) and _is_regular_file(entry)
            )
    except OSError as exc:
        raise DirectoryUnavailableError(
            f"Cannot list notes directory {root}: {exc.strerror or exc}"
        ) from exc

    entries = tuple(
        NoteEntry(
            path=root / name,
            display_name=strip_note_extension(name),
            tags=decode_tags(_read_first_line(root / name)),
        )
        for name in names
    )
    logger.debug("Scanned %d notes in %s", len(entries), root)
    return entries


def filter_entries(entries: Iterable[NoteEntry], query: str) -> tuple[NoteEntry, ...]:
    """Keep entries whose name or tags contain ``query`` (case-insensitive)."""

    needle = (query or "").strip().lower()
    if not needle:
        return tuple(entries)
    return tuple(entry for entry in entries if needle in entry.search_text.lower())


def ensure_notes_dir(
    directory: Path, confirm: Callable[[Path], bool] | None = None
) -> bool:
    """Create ``directory`` when missing.

    When ``confirm`` is provided it is asked before creating anything, and a
    refusal raises :class:`DirectoryUnavailableError`. Returns True when the
    directory was created.
    """

    if directory.is_dir():
        return False
    if directory.exists():
        raise DirectoryUnavailableError(
            f"Notes path {directory} exists but is not a directory."
        )
    if confirm is not None and not confirm(directory):
        raise DirectoryUnavailableError(f"Notes directory {directory} was not created.")

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryUnavailableError(
            f"Failed to create notes directory {directory}: {exc}"
        ) from exc
    logger.debug("Created notes directory %s", directory)
    return True


def _is_regular_file(entry: os.DirEntry[str]) -> bool:
    # Symlink loops or unreadable targets only drop that entry from the scan.
    try:
        return entry.is_file()
    except OSError as exc:
        logger.debug("Skipping %s: %s", entry.path, exc)
        return False


def _read_first_line(path: Path) -> str:
    try:
        with path.open("r", encoding="utf-8", errors="replace") as fh:
            line = fh.readline(FIRST_LINE_LIMIT)
    except OSError as exc:
        logger.debug("Cannot read %s, listing it without tags: %s", path, exc)
        return ""
    return line.rstrip("\r\n")
