"""Single-key choice menu component."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Generic, TypeVar

from ..input import Event, InputOptions, KeyEvent, KeyModifiers
from ..view import LineSegment, ViewData, ViewDataUpdater, ViewLine, ViewSender
from .base import scroll_view

INPUT_OPTIONS = InputOptions.RESIZE | InputOptions.MOVEMENT
INVALID_SELECTION = "Invalid option selected. Please choose an option."

T = TypeVar("T")


class Choice(Generic[T]):
    """Menu of ``(value, key, description)`` options picked with one key."""

    def __init__(self, name: str, options: Sequence[tuple[T, str, str]], prompt: Sequence[ViewLine] = ()) -> None:
        self._options = tuple(options)
        self._prompt = tuple(prompt)
        self._invalid_selection = False
        self.view_data = ViewData(name)
        self._rebuild()

    def reset(self) -> None:
        if self._invalid_selection:
            self._invalid_selection = False
            self._rebuild()

    def _rebuild(self) -> None:
        def build(updater: ViewDataUpdater) -> None:
            updater.clear()
            updater.set_show_title(True)
            updater.set_retain_scroll_position(False)
            for line in self._prompt:
                updater.push_leading_line(line)
            if self._prompt:
                updater.push_leading_line(ViewLine.empty())
            for _value, key, description in self._options:
                updater.push_line(
                    ViewLine.from_segments(
                        (LineSegment(f"{key}) ", "indicator"), LineSegment(description)),
                        pinned_segments=1,
                    )
                )
            if self._invalid_selection:
                updater.push_trailing_line(ViewLine.empty())
                updater.push_trailing_line(ViewLine.from_text(INVALID_SELECTION, "error"))

        self.view_data.update(build)

    def handle_event(self, event: Event, view_sender: ViewSender) -> T | None:
        """Return the chosen value, or ``None`` when nothing was chosen."""
        if scroll_view(event, view_sender):
            return None
        if not isinstance(event, KeyEvent) or not event.is_char() or event.modifiers != KeyModifiers.NONE:
            return None
        for value, key, _description in self._options:
            if key == event.code:
                self.reset()
                return value
        if not self._invalid_selection:
            self._invalid_selection = True
            self._rebuild()
        return None


__all__ = ["Choice", "INPUT_OPTIONS", "INVALID_SELECTION"]
