"""Full-screen terminal UI that drives a :class:`SelectionSession`.

The UI owns the widgets (filter line, note list, the two single-line inputs)
and forwards key presses to the session; it never decides transitions
itself. Terminal resizes are handled by prompt_toolkit and never reach the
session.
"""

from __future__ import annotations

from typing import Callable, Mapping

from prompt_toolkit.application import Application
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.data_structures import Point
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.input import Input
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import (
    ConditionalContainer,
    HSplit,
    VSplit,
    Window,
)
from prompt_toolkit.layout.controls import BufferControl, FormattedTextControl
from prompt_toolkit.output import Output
from prompt_toolkit.styles import Style

from .session import (
    Browsing,
    Cancelled,
    CapturingFilename,
    CapturingTags,
    SelectionResult,
    SelectionSession,
)

DEFAULT_THEME: dict[str, str] = {
    "title": "bold",
    "filter.prompt": "fg:ansiyellow bold",
    "filter": "fg:ansiyellow",
    "item": "",
    "item.selected": "fg:ansibrightgreen bold",
    "tag": "bg:#5f5fd7 fg:#eeeeee",
    "tag.selected": "bg:#875fff fg:#eeeeee bold",
    "empty": "fg:ansibrightblack italic",
    "status": "fg:ansibrightblack",
    "help": "fg:ansibrightblack",
    "prompt": "bold",
    "input": "fg:#ff5faf",
    "error": "fg:ansired",
}

LINES_PER_ITEM = 2
DEFAULT_PAGE_ITEMS = 10

BROWSE_HELP = "↑/k up • ↓/j down • / filter • n new note • enter open • q quit"
FILTER_HELP = "type to filter • ↑/↓ move • enter open • esc clear filter"


def build_style(theme: Mapping[str, str] | None = None) -> Style:
    """Merge user theme overrides over :data:`DEFAULT_THEME`."""

    merged = dict(DEFAULT_THEME)
    if theme:
        merged.update(theme)
    return Style.from_dict(merged)


class SessionView:
    """Widgets and key bindings presenting one session."""

    def __init__(
        self,
        session: SelectionSession,
        *,
        title: str,
        theme: Mapping[str, str] | None = None,
    ) -> None:
        self.session = session
        self.title = title
        self.style = build_style(theme)

        self.filter_buffer = Buffer(
            multiline=False, on_text_changed=self._on_filter_changed
        )
        self.filename_buffer = Buffer(
            multiline=False, on_text_changed=self._on_input_changed
        )
        self.tags_buffer = Buffer(
            multiline=False, on_text_changed=self._on_input_changed
        )

        self.list_window = Window(
            FormattedTextControl(
                self._list_fragments,
                focusable=True,
                show_cursor=False,
                get_cursor_position=self._cursor_position,
            ),
            always_hide_cursor=True,
            wrap_lines=False,
        )
        self.filter_window = Window(
            BufferControl(buffer=self.filter_buffer), height=1, style="class:filter"
        )
        self.filename_window = Window(
            BufferControl(buffer=self.filename_buffer), height=1, style="class:input"
        )
        self.tags_window = Window(
            BufferControl(buffer=self.tags_buffer), height=1, style="class:input"
        )

    # ------------------------------------------------------------------
    # Application wiring
    # ------------------------------------------------------------------
    def build_application(
        self,
        *,
        app_input: Input | None = None,
        app_output: Output | None = None,
    ) -> Application[SelectionResult]:
        self._sync_buffers()
        return Application(
            layout=Layout(
                self._build_container(), focused_element=self._focus_target()
            ),
            key_bindings=self._build_key_bindings(),
            style=self.style,
            full_screen=True,
            input=app_input,
            output=app_output,
        )

    def _build_container(self) -> HSplit:
        session = self.session
        browsing = Condition(lambda: isinstance(session.state, Browsing))
        capturing_filename = Condition(
            lambda: isinstance(session.state, CapturingFilename)
        )
        capturing_tags = Condition(lambda: isinstance(session.state, CapturingTags))
        show_filter = Condition(self._filter_shown)

        browse_view = HSplit(
            [
                Window(FormattedTextControl(self._title_fragments), height=1),
                ConditionalContainer(
                    VSplit(
                        [
                            Window(
                                FormattedTextControl(
                                    [("class:filter.prompt", "Filter: ")]
                                ),
                                width=8,
                                height=1,
                            ),
                            self.filter_window,
                        ]
                    ),
                    filter=show_filter,
                ),
                Window(height=1, char=" "),
                self.list_window,
                Window(FormattedTextControl(self._status_fragments), height=1),
                Window(FormattedTextControl(self._help_fragments), height=1),
            ]
        )
        filename_view = self._input_view(
            "Enter the filename for your new note (without .md extension):",
            self.filename_window,
            self._filename_hint,
        )
        tags_view = self._input_view(
            "Enter tags for your note (e.g. work important todo):",
            self.tags_window,
            lambda: "(press esc to go back to filename)",
        )
        return HSplit(
            [
                ConditionalContainer(browse_view, filter=browsing),
                ConditionalContainer(filename_view, filter=capturing_filename),
                ConditionalContainer(tags_view, filter=capturing_tags),
            ]
        )

    def _input_view(
        self, prompt: str, window: Window, hint: Callable[[], str]
    ) -> HSplit:
        return HSplit(
            [
                Window(height=1, char=" "),
                Window(
                    FormattedTextControl([("class:prompt", f"  {prompt}")]), height=1
                ),
                Window(height=1, char=" "),
                VSplit([Window(width=2, char=" "), window]),
                Window(height=1, char=" "),
                Window(
                    FormattedTextControl(lambda: [("class:help", f"  {hint()}")]),
                    height=1,
                ),
                Window(FormattedTextControl(self._error_fragments), height=1),
                Window(char=" "),
            ]
        )

    def _build_key_bindings(self) -> KeyBindings:
        session = self.session
        kb = KeyBindings()

        browsing = Condition(lambda: isinstance(session.state, Browsing))
        filtering = Condition(
            lambda: isinstance(session.state, Browsing) and session.state.filtering
        )
        commands = browsing & ~filtering

        @kb.add("c-c", eager=True)
        def _abort(event: KeyPressEvent) -> None:
            session.abort()
            self._after(event)

        @kb.add("enter", eager=True)
        def _confirm(event: KeyPressEvent) -> None:
            session.confirm()
            self._after(event)

        @kb.add("escape", eager=True)
        def _back(event: KeyPressEvent) -> None:
            state = session.state
            if isinstance(state, Browsing) and (state.filtering or state.filter_text):
                session.clear_filter()
            else:
                session.cancel()
            self._after(event)

        @kb.add("q", filter=commands)
        def _quit(event: KeyPressEvent) -> None:
            session.cancel()
            self._after(event)

        @kb.add("n", filter=commands)
        def _new(event: KeyPressEvent) -> None:
            session.new_note()
            self._after(event)

        @kb.add("/", filter=commands)
        def _filter(event: KeyPressEvent) -> None:
            session.start_filter()
            self._after(event)

        @kb.add("up", filter=browsing)
        @kb.add("k", filter=commands)
        def _up(event: KeyPressEvent) -> None:
            session.move(-1)
            self._after(event)

        @kb.add("down", filter=browsing)
        @kb.add("j", filter=commands)
        def _down(event: KeyPressEvent) -> None:
            session.move(1)
            self._after(event)

        @kb.add("pageup", filter=browsing)
        def _page_up(event: KeyPressEvent) -> None:
            session.move(-self._page_items())
            self._after(event)

        @kb.add("pagedown", filter=browsing)
        def _page_down(event: KeyPressEvent) -> None:
            session.move(self._page_items())
            self._after(event)

        @kb.add("home", filter=commands)
        def _first(event: KeyPressEvent) -> None:
            session.move_to(0)
            self._after(event)

        @kb.add("end", filter=commands)
        def _last(event: KeyPressEvent) -> None:
            session.move_to(-1)
            self._after(event)

        return kb

    # ------------------------------------------------------------------
    # Session <-> widget synchronisation
    # ------------------------------------------------------------------
    def _after(self, event: KeyPressEvent) -> None:
        if self.session.done:
            if not event.app.is_done:
                event.app.exit(result=self.session.result)
            return
        self._sync_buffers()
        event.app.layout.focus(self._focus_target())

    def _sync_buffers(self) -> None:
        state = self.session.state
        if isinstance(state, Browsing):
            _set_text(self.filter_buffer, state.filter_text)
        elif isinstance(state, CapturingFilename):
            _set_text(self.filename_buffer, state.buffer)
        elif isinstance(state, CapturingTags):
            _set_text(self.tags_buffer, state.buffer)

    def _focus_target(self) -> Window:
        state = self.session.state
        if isinstance(state, CapturingFilename):
            return self.filename_window
        if isinstance(state, CapturingTags):
            return self.tags_window
        if isinstance(state, Browsing) and state.filtering:
            return self.filter_window
        return self.list_window

    def _on_filter_changed(self, buffer: Buffer) -> None:
        self.session.update_filter(buffer.text)

    def _on_input_changed(self, buffer: Buffer) -> None:
        state = self.session.state
        if isinstance(state, CapturingFilename):
            active = self.filename_buffer
        elif isinstance(state, CapturingTags):
            active = self.tags_buffer
        else:
            return
        if buffer is active:
            self.session.edit(buffer.text)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _filter_shown(self) -> bool:
        state = self.session.state
        return isinstance(state, Browsing) and (
            state.filtering or bool(state.filter_text)
        )

    def _title_fragments(self) -> StyleAndTextTuples:
        return [("class:title", f"  Notes at {self.title}")]

    def _list_fragments(self) -> StyleAndTextTuples:
        state = self.session.state
        if not isinstance(state, Browsing):
            return []
        visible = state.visible
        if not visible:
            return [("class:empty", "    No matching notes.")]

        selected = min(state.index, len(visible) - 1)
        fragments: StyleAndTextTuples = []
        for index, entry in enumerate(visible):
            is_selected = index == selected
            if is_selected:
                fragments.append(("class:item.selected", f"  │ {entry.display_name}"))
            else:
                fragments.append(("class:item", f"    {entry.display_name}"))
            fragments.append(("", "\n    "))
            pill_style = "class:tag.selected" if is_selected else "class:tag"
            for position, tag in enumerate(entry.tags):
                if position:
                    fragments.append(("", " "))
                fragments.append((pill_style, f" {tag} "))
            fragments.append(("", "\n"))
        return fragments

    def _cursor_position(self) -> Point:
        state = self.session.state
        if not isinstance(state, Browsing) or not state.visible:
            return Point(x=0, y=0)
        selected = min(state.index, len(state.visible) - 1)
        return Point(x=0, y=selected * LINES_PER_ITEM)

    def _status_fragments(self) -> StyleAndTextTuples:
        state = self.session.state
        if not isinstance(state, Browsing):
            return []
        total = len(state.entries)
        shown = len(state.visible)
        noun = "note" if total == 1 else "notes"
        if state.filter_text:
            text = f"  {shown} of {total} {noun}"
        else:
            text = f"  {total} {noun}"
        return [("class:status", text)]

    def _help_fragments(self) -> StyleAndTextTuples:
        state = self.session.state
        filtering = isinstance(state, Browsing) and state.filtering
        text = FILTER_HELP if filtering else BROWSE_HELP
        return [("class:help", f"  {text}")]

    def _filename_hint(self) -> str:
        state = self.session.state
        if isinstance(state, CapturingFilename) and state.resume is None:
            return "(press esc to quit)"
        return "(press esc to cancel)"

    def _error_fragments(self) -> StyleAndTextTuples:
        state = self.session.state
        if isinstance(state, CapturingFilename) and state.error:
            return [("class:error", f"  {state.error}")]
        return []

    def _page_items(self) -> int:
        info = self.list_window.render_info
        if info is None:
            return DEFAULT_PAGE_ITEMS
        return max(1, info.window_height // LINES_PER_ITEM)


def _set_text(buffer: Buffer, text: str) -> None:
    if buffer.text != text:
        buffer.text = text
        buffer.cursor_position = len(text)


def run_session(
    session: SelectionSession,
    *,
    title: str,
    theme: Mapping[str, str] | None = None,
    app_input: Input | None = None,
    app_output: Output | None = None,
) -> SelectionResult:
    """Run the interactive UI until the session produces its result.

    Returns only after the application has exited and the terminal is back
    in normal mode, so the caller may start a foreground editor right away.
    """

    if session.result is not None:
        return session.result

    view = SessionView(session, title=title, theme=theme)
    application = view.build_application(app_input=app_input, app_output=app_output)
    application.run()
    return session.result if session.result is not None else Cancelled()
