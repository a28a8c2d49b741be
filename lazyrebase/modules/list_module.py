"""Todo list navigator: the main screen.

Shows one row per todo line with the cursor marker and action pinned against
horizontal scrolling, and a key help view toggled with the help binding.
Visual mode extends the selection from an anchor row to the cursor; line
edits then apply to the whole range.
"""

from __future__ import annotations

import logging
from functools import partial

from ..input import (
    Event,
    EventBinding,
    EventHandlerRegistry,
    InputOptions,
    KeyBindings,
    KeyEvent,
    MouseEvent,
    MouseKind,
    StandardEvent,
    translate,
)
from ..todo import TodoLine, TodoList
from ..view import LineSegment, ViewData, ViewDataUpdater, ViewLine, ViewSender
from .base import ExitStatus, Module, ProcessResult, RenderContext, State, scroll_view

logger = logging.getLogger(__name__)

LIST_INPUT_OPTIONS = InputOptions.RESIZE | InputOptions.MOUSE | InputOptions.HELP
HELP_INPUT_OPTIONS = InputOptions.RESIZE | InputOptions.MOVEMENT | InputOptions.HELP
EMPTY_LIST_MESSAGE = "Rebase todo file is empty"
ACTION_WIDTH = 6

HELP_DESCRIPTIONS: tuple[tuple[StandardEvent, str], ...] = (
    (StandardEvent.MOVE_CURSOR_UP, "Move selection up"),
    (StandardEvent.MOVE_CURSOR_DOWN, "Move selection down"),
    (StandardEvent.MOVE_CURSOR_PAGE_UP, "Move selection up half a page"),
    (StandardEvent.MOVE_CURSOR_PAGE_DOWN, "Move selection down half a page"),
    (StandardEvent.MOVE_CURSOR_HOME, "Move selection to top of the list"),
    (StandardEvent.MOVE_CURSOR_END, "Move selection to end of the list"),
    (StandardEvent.SCROLL_LEFT, "Scroll content to the left"),
    (StandardEvent.SCROLL_RIGHT, "Scroll content to the right"),
    (StandardEvent.ABORT, "Abort interactive rebase"),
    (StandardEvent.FORCE_ABORT, "Immediately abort interactive rebase"),
    (StandardEvent.REBASE, "Write interactive rebase file"),
    (StandardEvent.FORCE_REBASE, "Immediately write interactive rebase file"),
    (StandardEvent.SWAP_SELECTED_UP, "Move selected line up"),
    (StandardEvent.SWAP_SELECTED_DOWN, "Move selected line down"),
    (StandardEvent.TOGGLE_VISUAL_MODE, "Toggle visual mode to select a range of lines"),
    (StandardEvent.ACTION_PICK, "Set selected commit to be picked"),
    (StandardEvent.ACTION_REWORD, "Set selected commit to be reworded"),
    (StandardEvent.ACTION_EDIT, "Set selected commit to be edited"),
    (StandardEvent.ACTION_SQUASH, "Set selected commit to be squashed"),
    (StandardEvent.ACTION_FIXUP, "Set selected commit to be fixed-up"),
    (StandardEvent.ACTION_DROP, "Set selected commit to be dropped"),
    (StandardEvent.INSERT_LINE, "Insert a new line"),
    (StandardEvent.REMOVE_LINE, "Delete selected line"),
    (StandardEvent.HELP, "Show help"),
)


def _todo_row(line: TodoLine, cursor: bool, in_range: bool = False) -> ViewLine:
    selected = cursor or in_range
    return ViewLine.from_segments(
        (
            LineSegment("> " if cursor else "| " if in_range else "  ", "indicator"),
            LineSegment(f"{line.action:<{ACTION_WIDTH}} ", f"action_{line.action}"),
            LineSegment(line.content),
        ),
        pinned_segments=2,
        selected=selected,
        padding=LineSegment(" "),
    )


class List(Module):
    def __init__(self, key_bindings: KeyBindings) -> None:
        self._key_bindings = key_bindings
        self._view_data = ViewData("list")
        self._help_view_data = ViewData("list_help", self._build_help)
        self._show_help = False
        self._built_for: tuple[TodoList, int, int] | None = None
        self._page_size = 1
        self._result = ProcessResult()
        self._todo_list: TodoList | None = None
        self._view_sender: ViewSender | None = None
        self._registry: EventHandlerRegistry[None] = EventHandlerRegistry[None]().register_bindings(
            EventBinding((StandardEvent.MOVE_CURSOR_UP,), partial(self._move_cursor, -1)),
            EventBinding((StandardEvent.MOVE_CURSOR_DOWN,), partial(self._move_cursor, 1)),
            EventBinding((StandardEvent.MOVE_CURSOR_PAGE_UP,), self._page_up),
            EventBinding((StandardEvent.MOVE_CURSOR_PAGE_DOWN,), self._page_down),
            EventBinding((StandardEvent.MOVE_CURSOR_HOME,), self._move_home),
            EventBinding((StandardEvent.MOVE_CURSOR_END,), self._move_end),
            EventBinding((StandardEvent.SCROLL_LEFT,), self._scroll_left),
            EventBinding((StandardEvent.SCROLL_RIGHT,), self._scroll_right),
            EventBinding((StandardEvent.ABORT,), partial(self._goto, State.CONFIRM_ABORT)),
            EventBinding((StandardEvent.FORCE_ABORT,), partial(self._exit, ExitStatus.ABORT)),
            EventBinding((StandardEvent.REBASE,), partial(self._goto, State.CONFIRM_REBASE)),
            EventBinding((StandardEvent.FORCE_REBASE,), partial(self._exit, ExitStatus.GOOD)),
            EventBinding((StandardEvent.SWAP_SELECTED_UP,), partial(self._swap, -1)),
            EventBinding((StandardEvent.SWAP_SELECTED_DOWN,), partial(self._swap, 1)),
            EventBinding((StandardEvent.TOGGLE_VISUAL_MODE,), self._toggle_visual),
            EventBinding((StandardEvent.ACTION_PICK,), partial(self._set_action, "pick")),
            EventBinding((StandardEvent.ACTION_REWORD,), partial(self._set_action, "reword")),
            EventBinding((StandardEvent.ACTION_EDIT,), partial(self._set_action, "edit")),
            EventBinding((StandardEvent.ACTION_SQUASH,), partial(self._set_action, "squash")),
            EventBinding((StandardEvent.ACTION_FIXUP,), partial(self._set_action, "fixup")),
            EventBinding((StandardEvent.ACTION_DROP,), partial(self._set_action, "drop")),
            EventBinding((StandardEvent.INSERT_LINE,), partial(self._goto, State.INSERT)),
            EventBinding((StandardEvent.REMOVE_LINE,), self._remove_line),
            EventBinding((StandardEvent.HELP,), self._toggle_help),
        )

    @property
    def show_help(self) -> bool:
        return self._show_help

    def activate(self, todo_list: TodoList, previous_state: State | None) -> ProcessResult:
        self._show_help = False
        self._built_for = None
        return ProcessResult()

    def _build_help(self, updater: ViewDataUpdater) -> None:
        updater.clear()
        updater.set_show_title(True)
        updater.set_show_help(True)
        updater.set_retain_scroll_position(False)
        rows = [(", ".join(self._key_bindings.labels(action)), text) for action, text in HELP_DESCRIPTIONS]
        key_width = max((len(keys) for keys, _ in rows), default=0)
        updater.push_leading_line(
            ViewLine.from_segments(
                (LineSegment(f" {'Key':<{key_width}} ", "help_heading"), LineSegment("Action", "help_heading"))
            )
        )
        for keys, text in rows:
            updater.push_line(
                ViewLine.from_segments(
                    (LineSegment(f" {keys:<{key_width}} ", "help_key"), LineSegment(text)),
                    pinned_segments=1,
                )
            )
        updater.push_trailing_line(ViewLine.from_text("Press any key to close", "indicator"))

    def build_view_data(self, context: RenderContext, todo_list: TodoList) -> ViewData:
        self._page_size = max(1, (context.height - 1) // 2)
        if self._show_help:
            return self._help_view_data
        lines, selected, version = todo_list.snapshot()
        if self._built_for == (todo_list, version, selected):
            return self._view_data
        self._built_for = (todo_list, version, selected)
        start, end = todo_list.selected_range()

        def build(updater: ViewDataUpdater) -> None:
            updater.clear()
            updater.set_show_title(True)
            if not lines:
                updater.push_leading_line(ViewLine.from_text(EMPTY_LIST_MESSAGE, "error"))
                return
            for index, line in enumerate(lines):
                updater.push_line(_todo_row(line, index == selected, start <= index <= end))
            updater.ensure_line_visible(selected)

        self._view_data.update(build)
        return self._view_data

    def input_options(self) -> InputOptions:
        return HELP_INPUT_OPTIONS if self._show_help else LIST_INPUT_OPTIONS

    def read_event(self, event: Event, key_bindings: KeyBindings) -> Event:
        if self._show_help:
            return event
        return translate(event, key_bindings, self._registry.events())

    def handle_event(self, event: Event, view_sender: ViewSender, todo_list: TodoList) -> ProcessResult:
        if self._show_help:
            # any key that is not a scroll closes the help view
            if not scroll_view(event, view_sender) and isinstance(event, (KeyEvent, StandardEvent)):
                self._show_help = False
            return ProcessResult(event)

        self._result = ProcessResult(event)
        self._todo_list = todo_list
        self._view_sender = view_sender
        try:
            if isinstance(event, MouseEvent):
                self._handle_mouse(event)
            else:
                self._registry.dispatch(event)
        finally:
            self._todo_list = None
            self._view_sender = None
        return self._result

    def _handle_mouse(self, event: MouseEvent) -> None:
        if event.kind is MouseKind.WHEEL_UP:
            self._move_cursor(-1)
        elif event.kind is MouseKind.WHEEL_DOWN:
            self._move_cursor(1)
        elif event.kind is MouseKind.WHEEL_LEFT:
            self._scroll_left()
        elif event.kind is MouseKind.WHEEL_RIGHT:
            self._scroll_right()

    def _move_cursor(self, delta: int) -> None:
        self._todo_list.move_selected(delta)

    def _page_up(self) -> None:
        self._move_cursor(-self._page_size)

    def _page_down(self) -> None:
        self._move_cursor(self._page_size)

    def _move_home(self) -> None:
        self._todo_list.set_selected_index(0)

    def _move_end(self) -> None:
        self._todo_list.set_selected_index(len(self._todo_list) - 1)

    def _scroll_left(self) -> None:
        self._view_sender.scroll_left()

    def _scroll_right(self) -> None:
        self._view_sender.scroll_right()

    def _goto(self, state: State) -> None:
        self._result = self._result.with_state(state)

    def _exit(self, status: ExitStatus) -> None:
        self._result = self._result.with_exit(status)

    def _swap(self, delta: int) -> None:
        self._todo_list.swap_selected(delta)

    def _set_action(self, action: str) -> None:
        if not self._todo_list.set_selected_action(action):
            logger.debug("action %s not applicable to selected line", action)

    def _remove_line(self) -> None:
        self._todo_list.remove_selected()

    def _toggle_visual(self) -> None:
        visual = self._todo_list.toggle_visual()
        logger.debug("visual mode %s", "on" if visual else "off")

    def _toggle_help(self) -> None:
        self._show_help = not self._show_help


__all__ = ["EMPTY_LIST_MESSAGE", "HELP_DESCRIPTIONS", "List"]
