"""Screen (module) contract, the state enumeration, and process results."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass, replace

from ..input import OTHER, Event, InputOptions, KeyBindings, StandardEvent
from ..todo import TodoList
from ..view import ViewData, ViewSender


class State(enum.Enum):
    """Every screen the dispatcher can switch to."""

    LIST = "list"
    CONFIRM_ABORT = "confirm_abort"
    CONFIRM_REBASE = "confirm_rebase"
    INSERT = "insert"


class ExitStatus(enum.Enum):
    GOOD = "good"
    ABORT = "abort"
    KILL = "kill"
    STATE_ERROR = "state_error"

    @property
    def code(self) -> int:
        return _EXIT_CODES[self]


_EXIT_CODES = {
    ExitStatus.GOOD: 0,
    ExitStatus.ABORT: 0,
    ExitStatus.KILL: 1,
    ExitStatus.STATE_ERROR: 2,
}


@dataclass(frozen=True)
class ProcessResult:
    """Directive returned by module hooks."""

    event: Event = OTHER
    state: State | None = None
    exit_status: ExitStatus | None = None

    def with_state(self, state: State) -> ProcessResult:
        return replace(self, state=state)

    def with_exit(self, exit_status: ExitStatus) -> ProcessResult:
        return replace(self, exit_status=exit_status)


@dataclass(frozen=True)
class RenderContext:
    """Terminal geometry modules may use to shape their view data."""

    width: int
    height: int


class Module(abc.ABC):
    """A pluggable screen.

    ``activate`` runs each time the screen becomes active and must reset the
    module's own transient fields; the dispatcher resets nothing on its
    behalf.
    """

    def activate(self, todo_list: TodoList, previous_state: State | None) -> ProcessResult:
        return ProcessResult()

    @abc.abstractmethod
    def build_view_data(self, context: RenderContext, todo_list: TodoList) -> ViewData:
        """Return this tick's content; repeated calls must be side-effect free."""

    def input_options(self) -> InputOptions:
        return InputOptions.RESIZE

    def read_event(self, event: Event, key_bindings: KeyBindings) -> Event:
        """Module-specific translation applied after ``filter_event``."""
        return event

    @abc.abstractmethod
    def handle_event(self, event: Event, view_sender: ViewSender, todo_list: TodoList) -> ProcessResult:
        """Act on one event and say where to go next."""


def scroll_view(event: Event, view_sender: ViewSender) -> bool:
    """Forward a scroll event to the render slice; report whether it was one."""
    handler = _SCROLL_HANDLERS.get(event) if isinstance(event, StandardEvent) else None
    if handler is None:
        return False
    handler(view_sender)
    return True


_SCROLL_HANDLERS = {
    StandardEvent.SCROLL_UP: ViewSender.scroll_up,
    StandardEvent.SCROLL_DOWN: ViewSender.scroll_down,
    StandardEvent.SCROLL_LEFT: ViewSender.scroll_left,
    StandardEvent.SCROLL_RIGHT: ViewSender.scroll_right,
    StandardEvent.SCROLL_PAGE_UP: ViewSender.scroll_page_up,
    StandardEvent.SCROLL_PAGE_DOWN: ViewSender.scroll_page_down,
    StandardEvent.SCROLL_TOP: ViewSender.scroll_top,
    StandardEvent.SCROLL_BOTTOM: ViewSender.scroll_bottom,
}


__all__ = [
    "ExitStatus",
    "Module",
    "ProcessResult",
    "RenderContext",
    "State",
    "scroll_view",
]
