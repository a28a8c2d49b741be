"""Reusable semantic-event handler registry primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .events import StandardEvent

R = TypeVar("R")


@dataclass(frozen=True)
class EventBinding(Generic[R]):
    """Mapping from one or more standard events to a single handler."""

    events: tuple[StandardEvent, ...]
    handler: Callable[[], R]


class EventHandlerRegistry(Generic[R]):
    """Small dispatch table from ``StandardEvent`` to zero-argument handlers.

    Registration order is kept so callers can reuse ``events()`` as the
    priority order for key translation.
    """

    def __init__(self) -> None:
        self._handlers: dict[StandardEvent, Callable[[], R]] = {}

    def register_binding(self, binding: EventBinding[R]) -> EventHandlerRegistry[R]:
        """Register one binding, overwriting existing handlers for same events."""
        for event in binding.events:
            self._handlers[event] = binding.handler
        return self

    def register_bindings(self, *bindings: EventBinding[R]) -> EventHandlerRegistry[R]:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def events(self) -> tuple[StandardEvent, ...]:
        return tuple(self._handlers)

    def dispatch(self, event: object) -> R | None:
        """Invoke the handler bound to ``event``; ``None`` when unbound."""
        if not isinstance(event, StandardEvent):
            return None
        handler = self._handlers.get(event)
        if handler is None:
            return None
        return handler()
