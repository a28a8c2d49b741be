"""Single-line text input component."""

from __future__ import annotations

from collections.abc import Callable

from ..input import Event, InputOptions, KeyEvent, KeyModifiers
from ..view import LineSegment, ViewData, ViewDataUpdater, ViewLine
from ..view.text import display_width

INPUT_OPTIONS = InputOptions.RESIZE


class Edit:
    """Editable line with a cursor; ``Enter`` finishes the edit."""

    def __init__(self, name: str = "edit") -> None:
        self.view_data = ViewData(name)
        self._label = ""
        self._content = ""
        self._cursor = 0
        self._finished = False
        self._dirty = True

    def clear(self) -> None:
        self._content = ""
        self._cursor = 0
        self._finished = False
        self._dirty = True

    def set_label(self, label: str) -> None:
        self._label = label
        self._dirty = True

    @property
    def content(self) -> str:
        return self._content

    @property
    def cursor(self) -> int:
        return self._cursor

    def is_finished(self) -> bool:
        return self._finished

    def _line(self) -> ViewLine:
        before = self._content[:self._cursor]
        at = self._content[self._cursor:self._cursor + 1] or " "
        after = self._content[self._cursor + 1:]
        segments = [
            LineSegment(self._label, "indicator"),
            LineSegment(before),
            LineSegment(at, "cursor"),
            LineSegment(after),
        ]
        return ViewLine.from_segments(segment for segment in segments if segment.text)

    def build_view_data(
        self,
        before_build: Callable[[ViewDataUpdater], None],
        after_build: Callable[[ViewDataUpdater], None],
    ) -> ViewData:
        """Refresh the view data when the line changed since the last build."""
        if not self._dirty:
            return self.view_data
        self._dirty = False
        line = self._line()
        cursor_column = display_width(self._label + self._content[:self._cursor])

        def build(updater: ViewDataUpdater) -> None:
            updater.clear()
            updater.set_show_title(True)
            before_build(updater)
            updater.push_line(line)
            updater.ensure_column_visible(cursor_column)
            after_build(updater)

        self.view_data.update(build)
        return self.view_data

    def handle_event(self, event: Event) -> bool:
        """Apply one key; return whether the content or cursor changed."""
        changed = self._apply(event)
        if changed:
            self._dirty = True
        return changed

    def _apply(self, event: Event) -> bool:
        if self._finished or not isinstance(event, KeyEvent):
            return False
        code = event.code
        if code == "Enter":
            self._finished = True
            return True
        if code == "Backspace":
            if self._cursor == 0:
                return False
            self._content = self._content[:self._cursor - 1] + self._content[self._cursor:]
            self._cursor -= 1
            return True
        if code == "Delete":
            if self._cursor >= len(self._content):
                return False
            self._content = self._content[:self._cursor] + self._content[self._cursor + 1:]
            return True
        if code == "Left":
            return self._move_cursor(self._cursor - 1)
        if code == "Right":
            return self._move_cursor(self._cursor + 1)
        if code == "Home":
            return self._move_cursor(0)
        if code == "End":
            return self._move_cursor(len(self._content))
        if event.is_char() and not event.modifiers & (KeyModifiers.CONTROL | KeyModifiers.ALT):
            self._content = self._content[:self._cursor] + code + self._content[self._cursor:]
            self._cursor += 1
            return True
        return False

    def _move_cursor(self, cursor: int) -> bool:
        cursor = max(0, min(cursor, len(self._content)))
        if cursor == self._cursor:
            return False
        self._cursor = cursor
        return True


__all__ = ["Edit", "INPUT_OPTIONS"]
