"""Two-step wizard that inserts a new line below the selection."""

from __future__ import annotations

import enum
import logging

from ..input import Event, InputOptions
from ..todo import TodoLine, TodoList, TodoListError
from ..view import LineSegment, ViewData, ViewDataUpdater, ViewLine, ViewSender
from .base import Module, ProcessResult, RenderContext, State
from .choice import INPUT_OPTIONS as CHOICE_INPUT_OPTIONS
from .choice import Choice
from .edit import INPUT_OPTIONS as EDIT_INPUT_OPTIONS
from .edit import Edit

logger = logging.getLogger(__name__)

CANCEL = "cancel"
EDIT_PROMPT = "Enter contents of the new line. Empty content cancels creation of a new line."


class InsertState(enum.Enum):
    PROMPT = "prompt"
    EDIT = "edit"


class Insert(Module):
    def __init__(self) -> None:
        self._choices: Choice[str] = Choice(
            "insert",
            [
                ("exec", "e", "exec <command>"),
                ("pick", "p", "pick <hash>"),
                ("label", "l", "label <label>"),
                ("reset", "r", "reset <label>"),
                ("merge", "m", "merge [-C <commit> | -c <commit>] <label> [# <oneline>]"),
                (CANCEL, "q", "Cancel add line"),
            ],
            prompt=[ViewLine.from_text("Select the type of line to insert:")],
        )
        self._edit = Edit("insert_edit")
        self._line_type = "exec"
        self._state = InsertState.PROMPT
        self._error = ""

    def activate(self, todo_list: TodoList, previous_state: State | None) -> ProcessResult:
        self._state = InsertState.PROMPT
        self._line_type = "exec"
        self._error = ""
        self._choices.reset()
        self._edit.clear()
        return ProcessResult()

    def _edit_header(self, updater: ViewDataUpdater) -> None:
        updater.push_leading_line(ViewLine.from_segments([LineSegment(EDIT_PROMPT, "indicator")]))
        updater.push_leading_line(ViewLine.empty())

    def _edit_footer(self, updater: ViewDataUpdater) -> None:
        if self._error:
            updater.push_trailing_line(ViewLine.empty())
            updater.push_trailing_line(ViewLine.from_text(self._error, "error"))

    def build_view_data(self, context: RenderContext, todo_list: TodoList) -> ViewData:
        if self._state is InsertState.PROMPT:
            return self._choices.view_data
        return self._edit.build_view_data(self._edit_header, self._edit_footer)

    def input_options(self) -> InputOptions:
        if self._state is InsertState.PROMPT:
            return CHOICE_INPUT_OPTIONS
        return EDIT_INPUT_OPTIONS

    def handle_event(self, event: Event, view_sender: ViewSender, todo_list: TodoList) -> ProcessResult:
        result = ProcessResult(event)
        if self._state is InsertState.PROMPT:
            choice = self._choices.handle_event(event, view_sender)
            if choice is None:
                return result
            if choice == CANCEL:
                return result.with_state(State.LIST)
            self._line_type = choice
            self._edit.set_label(f"{choice} ")
            self._state = InsertState.EDIT
            return result

        self._edit.handle_event(event)
        if not self._edit.is_finished():
            return result
        content = self._edit.content.strip()
        if not content:
            return result.with_state(State.LIST)
        try:
            line = TodoLine(self._line_type, content)
            todo_list.add_line(todo_list.selected_index() + 1 if len(todo_list) else 0, line)
        except TodoListError as exc:
            logger.info("rejected new %s line: %s", self._line_type, exc)
            self._error = str(exc)
            self._edit.clear()
            return result
        return result.with_state(State.LIST)


__all__ = ["Insert", "InsertState"]
