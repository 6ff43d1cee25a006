"""Interactive selection state machine: browse, name a new note, tag it.

The session holds exactly one state variant at a time. Each event method
performs at most one transition and never raises for user input; rejected
input leaves the state unchanged. Once a :data:`SelectionResult` has been
produced the session ignores further events.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Sequence, Union

from .catalog import NOTE_EXTENSION, NoteEntry, filter_entries, strip_note_extension


@dataclass(frozen=True, slots=True)
class Browsing:
    """Browsing the catalog, optionally narrowed by a filter."""

    entries: tuple[NoteEntry, ...]
    filter_text: str = ""
    filtering: bool = False
    index: int = 0

    @property
    def visible(self) -> tuple[NoteEntry, ...]:
        return filter_entries(self.entries, self.filter_text)

    @property
    def highlighted(self) -> NoteEntry | None:
        visible = self.visible
        if not visible:
            return None
        return visible[min(self.index, len(visible) - 1)]


@dataclass(frozen=True, slots=True)
class CapturingFilename:
    """Typing the name of a new note."""

    buffer: str = ""
    resume: Browsing | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class CapturingTags:
    """Typing the tags for a new note whose name is already settled."""

    filename: str
    buffer: str = ""
    filename_buffer: str = ""
    resume: Browsing | None = None


SessionState = Union[Browsing, CapturingFilename, CapturingTags]


@dataclass(frozen=True, slots=True)
class Cancelled:
    """The user left without choosing anything."""


@dataclass(frozen=True, slots=True)
class Chosen:
    """An existing note was picked."""

    path: Path


@dataclass(frozen=True, slots=True)
class Created:
    """A new note was named; ``tag_text`` is the raw tag input."""

    path: Path
    tag_text: str = ""


SelectionResult = Union[Cancelled, Chosen, Created]


def normalize_filename(text: str) -> str:
    """Return ``text`` with exactly one ``.md`` extension.

    >>> normalize_filename("foo"), normalize_filename("foo.md")
    ('foo.md', 'foo.md')
    """

    return strip_note_extension(text.strip()) + NOTE_EXTENSION


def validate_filename(text: str) -> str | None:
    """Return an error message for an unusable note name, or None."""

    name = text.strip()
    if not strip_note_extension(name):
        return "Note name must not be empty."
    if "/" in name or "\\" in name or "\x00" in name:
        return "Note name must not contain path separators."
    if name.startswith("."):
        return "Note name must not start with '.'."
    return None


class SelectionSession:
    """Drive one browse/create interaction to a single :data:`SelectionResult`."""

    def __init__(self, entries: Sequence[NoteEntry], directory: Path) -> None:
        self.directory = Path(directory)
        self.entries = tuple(entries)
        self.result: SelectionResult | None = None
        self.state: SessionState
        if self.entries:
            self.state = Browsing(entries=self.entries)
        else:
            self.state = CapturingFilename()

    @property
    def done(self) -> bool:
        return self.result is not None

    # ------------------------------------------------------------------
    # Events shared by every mode
    # ------------------------------------------------------------------
    def confirm(self) -> None:
        if self.done:
            return
        state = self.state
        if isinstance(state, Browsing):
            entry = state.highlighted
            if entry is not None:
                self._finish(Chosen(entry.path))
        elif isinstance(state, CapturingFilename):
            self._confirm_filename(state)
        elif isinstance(state, CapturingTags):
            self._finish(Created(self.directory / state.filename, state.buffer))

    def cancel(self) -> None:
        if self.done:
            return
        state = self.state
        if isinstance(state, Browsing):
            self._finish(Cancelled())
        elif isinstance(state, CapturingFilename):
            if state.resume is None:
                self._finish(Cancelled())
            else:
                self.state = state.resume
        elif isinstance(state, CapturingTags):
            self.state = CapturingFilename(
                buffer=state.filename_buffer, resume=state.resume
            )

    def abort(self) -> None:
        """Leave the session from any mode without a selection."""

        if not self.done:
            self._finish(Cancelled())

    def edit(self, text: str) -> None:
        """Replace the text buffer of the active capture mode."""

        if self.done:
            return
        state = self.state
        if isinstance(state, CapturingFilename):
            if text != state.buffer or state.error is not None:
                self.state = replace(state, buffer=text, error=None)
        elif isinstance(state, CapturingTags):
            if text != state.buffer:
                self.state = replace(state, buffer=text)

    # ------------------------------------------------------------------
    # Browsing events
    # ------------------------------------------------------------------
    def new_note(self) -> None:
        state = self.state
        if self.done or not isinstance(state, Browsing) or state.filtering:
            return
        self.state = CapturingFilename(resume=state)

    def move(self, delta: int) -> None:
        state = self.state
        if self.done or not isinstance(state, Browsing):
            return
        count = len(state.visible)
        if count == 0:
            return
        index = max(0, min(count - 1, state.index + delta))
        self.state = replace(state, index=index)

    def move_to(self, index: int) -> None:
        state = self.state
        if self.done or not isinstance(state, Browsing):
            return
        count = len(state.visible)
        if count == 0:
            return
        if index < 0:
            index += count
        self.state = replace(state, index=max(0, min(count - 1, index)))

    def start_filter(self) -> None:
        state = self.state
        if not self.done and isinstance(state, Browsing):
            self.state = replace(state, filtering=True)

    def update_filter(self, text: str) -> None:
        state = self.state
        if self.done or not isinstance(state, Browsing):
            return
        if text != state.filter_text:
            self.state = replace(state, filter_text=text, index=0)

    def accept_filter(self) -> None:
        state = self.state
        if not self.done and isinstance(state, Browsing):
            self.state = replace(state, filtering=False)

    def clear_filter(self) -> None:
        state = self.state
        if not self.done and isinstance(state, Browsing):
            self.state = replace(state, filter_text="", filtering=False, index=0)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _confirm_filename(self, state: CapturingFilename) -> None:
        if not state.buffer.strip():
            return
        error = validate_filename(state.buffer)
        if error is not None:
            self.state = replace(state, error=error)
            return
        self.state = CapturingTags(
            filename=normalize_filename(state.buffer),
            filename_buffer=state.buffer,
            resume=state.resume,
        )

    def _finish(self, result: SelectionResult) -> None:
        self.result = result
