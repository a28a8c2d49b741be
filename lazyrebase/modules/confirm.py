"""Yes/no confirmation prompt and the two screens built on it.

Any character key that is not bound to yes counts as no.
"""

from __future__ import annotations

import enum

from ..input import Event, InputOptions, KeyBindings, StandardEvent, translate_confirm
from ..todo import TodoList
from ..view import ViewData, ViewDataUpdater, ViewLine, ViewSender
from .base import ExitStatus, Module, ProcessResult, RenderContext, State, scroll_view

INPUT_OPTIONS = InputOptions.RESIZE | InputOptions.MOVEMENT


class Confirmed(enum.Enum):
    YES = "yes"
    NO = "no"
    OTHER = "other"


class Confirm:
    """Reusable prompt component: builds the view and reads the answer."""

    def __init__(self, name: str, prompt: str, key_bindings: KeyBindings) -> None:
        yes_labels = ",".join(key_bindings.labels(StandardEvent.YES))
        no_labels = ",".join(key_bindings.labels(StandardEvent.NO))
        text = f"{prompt} ({yes_labels}/{no_labels})? "

        def build(updater: ViewDataUpdater) -> None:
            updater.set_show_title(True)
            updater.set_retain_scroll_position(False)
            updater.push_line(ViewLine.from_text(text))

        self.view_data = ViewData(name, build)

    @staticmethod
    def read_event(event: Event, key_bindings: KeyBindings) -> Event:
        return translate_confirm(event, key_bindings)

    @staticmethod
    def handle_event(event: Event) -> Confirmed:
        if event is StandardEvent.YES:
            return Confirmed.YES
        if event is StandardEvent.NO:
            return Confirmed.NO
        return Confirmed.OTHER


class _ConfirmModule(Module):
    name = ""
    prompt = ""
    exit_status = ExitStatus.GOOD

    def __init__(self, key_bindings: KeyBindings) -> None:
        self._confirm = Confirm(self.name, self.prompt, key_bindings)

    def build_view_data(self, context: RenderContext, todo_list: TodoList) -> ViewData:
        return self._confirm.view_data

    def input_options(self) -> InputOptions:
        return INPUT_OPTIONS

    def read_event(self, event: Event, key_bindings: KeyBindings) -> Event:
        return self._confirm.read_event(event, key_bindings)

    def handle_event(self, event: Event, view_sender: ViewSender, todo_list: TodoList) -> ProcessResult:
        result = ProcessResult(event)
        if scroll_view(event, view_sender):
            return result
        confirmed = self._confirm.handle_event(event)
        if confirmed is Confirmed.YES:
            return result.with_exit(self.exit_status)
        if confirmed is Confirmed.NO:
            return result.with_state(State.LIST)
        return result


class ConfirmAbort(_ConfirmModule):
    name = "confirm_abort"
    prompt = "Are you sure you want to abort"
    exit_status = ExitStatus.ABORT


class ConfirmRebase(_ConfirmModule):
    name = "confirm_rebase"
    prompt = "Are you sure you want to rebase"
    exit_status = ExitStatus.GOOD


__all__ = ["Confirm", "ConfirmAbort", "ConfirmRebase", "Confirmed", "INPUT_OPTIONS"]
