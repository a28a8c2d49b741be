"""Dispatch loop: routes events to the active screen and applies transitions.

Runs on the main thread. Each event is filtered by the active module's input
options, translated by the module, handled, and followed by publishing the
active module's view data to the render worker.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from queue import Empty, Queue

from ..input import Event, KeyBindings, ResizeEvent, StandardEvent, filter_event, translate
from ..modules import ExitStatus, Module, ProcessResult, RenderContext, State
from ..todo import TodoList
from ..view import ViewSender
from .threads import ThreadStatuses

logger = logging.getLogger(__name__)

EVENT_WAIT_SECONDS = 0.1


class ModuleHandler:
    """One module per ``State`` plus the currently active state."""

    def __init__(self, modules: Mapping[State, Module], initial_state: State = State.LIST) -> None:
        missing = [state.value for state in State if state not in modules]
        if missing:
            raise ValueError(f"no module registered for: {', '.join(missing)}")
        self._modules = dict(modules)
        self.state = initial_state

    @property
    def active(self) -> Module:
        return self._modules[self.state]

    def get(self, state: State) -> Module:
        return self._modules[state]


class Process:
    def __init__(
        self,
        handler: ModuleHandler,
        todo_list: TodoList,
        key_bindings: KeyBindings,
        view_sender: ViewSender,
        events: Queue[Event],
        stop: threading.Event,
        statuses: ThreadStatuses,
        wait_seconds: float = EVENT_WAIT_SECONDS,
    ) -> None:
        self._handler = handler
        self._todo_list = todo_list
        self._key_bindings = key_bindings
        self._view_sender = view_sender
        self._events = events
        self._stop = stop
        self._statuses = statuses
        self._wait_seconds = wait_seconds
        self.render_context = RenderContext(0, 0)

    @property
    def state(self) -> State:
        return self._handler.state

    def run(self) -> ExitStatus:
        """Dispatch events until a module exits or a worker fails."""
        exit_status = self._activate(self._handler.state, None)
        while exit_status is None:
            self._publish()
            exit_status = self._next()
        logger.info("dispatch loop finished with %s", exit_status.name)
        return exit_status

    def _next(self) -> ExitStatus | None:
        while True:
            if self._statuses.any_error():
                logger.error("worker failure: %s", self._statuses.snapshot())
                return ExitStatus.STATE_ERROR
            if self._stop.is_set():
                return ExitStatus.KILL
            try:
                event = self._events.get(timeout=self._wait_seconds)
            except Empty:
                continue
            return self.handle_event(event)

    def _publish(self) -> None:
        module = self._handler.active
        self._view_sender.render(module.build_view_data(self.render_context, self._todo_list))

    def handle_event(self, event: Event) -> ExitStatus | None:
        """Process one raw event; return an exit status when the loop should end."""
        if isinstance(event, ResizeEvent):
            self.render_context = RenderContext(event.width, event.height)
            self._view_sender.resize(event.width, event.height)
        if translate(event, self._key_bindings, (StandardEvent.KILL,)) is StandardEvent.KILL:
            return ExitStatus.KILL

        module = self._handler.active
        event = filter_event(event, module.input_options(), self._key_bindings)
        event = module.read_event(event, self._key_bindings)
        return self._apply(module.handle_event(event, self._view_sender, self._todo_list))

    def _apply(self, result: ProcessResult) -> ExitStatus | None:
        if result.exit_status is not None:
            return result.exit_status
        if result.state is None:
            return None
        return self._activate(result.state, self._handler.state)

    def _activate(self, state: State, previous_state: State | None) -> ExitStatus | None:
        # activation may redirect; bound the chain so a cycle cannot spin
        for _ in range(len(State) + 1):
            self._handler.state = state
            logger.debug("activating %s (from %s)", state.value, previous_state.value if previous_state else None)
            result = self._handler.active.activate(self._todo_list, previous_state)
            if result.exit_status is not None:
                return result.exit_status
            if result.state is None or result.state is state:
                return None
            previous_state, state = state, result.state
        logger.warning("activation chain did not settle; staying in %s", state.value)
        return None


__all__ = ["EVENT_WAIT_SECONDS", "ModuleHandler", "Process"]
