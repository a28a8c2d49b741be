"""Raw event to semantic event translation.

Translation is composed per screen: each module declares ``InputOptions`` for
the generic event categories it wants surfaced and passes its own ordered
action list to ``translate``. Nothing here holds mutable state.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence

from .events import (
    OTHER,
    Event,
    KeyEvent,
    MouseEvent,
    MouseKind,
    ResizeEvent,
    StandardEvent,
)
from .key_bindings import KeyBindings


class InputOptions(enum.IntFlag):
    """Raw event categories a module subscribes to."""

    NONE = 0
    RESIZE = 1
    MOVEMENT = 2
    MOUSE = 4
    HELP = 8


MOVEMENT_ACTIONS: tuple[StandardEvent, ...] = (
    StandardEvent.SCROLL_UP,
    StandardEvent.SCROLL_DOWN,
    StandardEvent.SCROLL_LEFT,
    StandardEvent.SCROLL_RIGHT,
    StandardEvent.SCROLL_PAGE_UP,
    StandardEvent.SCROLL_PAGE_DOWN,
    StandardEvent.SCROLL_TOP,
    StandardEvent.SCROLL_BOTTOM,
)

_WHEEL_ACTIONS: dict[MouseKind, StandardEvent] = {
    MouseKind.WHEEL_UP: StandardEvent.SCROLL_UP,
    MouseKind.WHEEL_DOWN: StandardEvent.SCROLL_DOWN,
    MouseKind.WHEEL_LEFT: StandardEvent.SCROLL_LEFT,
    MouseKind.WHEEL_RIGHT: StandardEvent.SCROLL_RIGHT,
}


def _case_variants(event: KeyEvent) -> tuple[KeyEvent, ...]:
    if not event.is_char():
        return (event,)
    lower = event.with_code(event.code.lower())
    upper = event.with_code(event.code.upper())
    return (lower, upper)


def translate(event: Event, bindings: KeyBindings, actions: Sequence[StandardEvent]) -> Event:
    """Map a key event onto the first action in ``actions`` bound to it.

    An exact chord match wins over a case-variant match, so ``q``/``Q`` can be
    bound to different actions. For a character key the lower- and
    upper-case variants (same modifiers) are then tried per action in order.
    Returns ``event`` unchanged when nothing matches.
    """
    if not isinstance(event, KeyEvent):
        return event
    for action in actions:
        if bindings.contains(action, event):
            return action
    variants = _case_variants(event)
    for action in actions:
        for variant in variants:
            if bindings.contains(action, variant):
                return action
    return event


def translate_confirm(event: Event, bindings: KeyBindings) -> Event:
    """Yes/no prompt policy: any character not bound to ``YES`` means ``NO``."""
    if isinstance(event, KeyEvent) and event.is_char():
        for variant in _case_variants(event):
            if bindings.contains(StandardEvent.YES, variant):
                return StandardEvent.YES
        return StandardEvent.NO
    return event


def filter_event(event: Event, options: InputOptions, bindings: KeyBindings) -> Event:
    """Apply the generic per-module stage before screen-specific translation.

    Categories the module did not subscribe to collapse into ``OTHER``.
    """
    if isinstance(event, ResizeEvent):
        return event if options & InputOptions.RESIZE else OTHER
    if isinstance(event, MouseEvent):
        if options & InputOptions.MOVEMENT and event.kind in _WHEEL_ACTIONS:
            return _WHEEL_ACTIONS[event.kind]
        return event if options & InputOptions.MOUSE else OTHER
    if isinstance(event, KeyEvent):
        if options & InputOptions.HELP:
            translated = translate(event, bindings, (StandardEvent.HELP,))
            if translated is not event:
                return translated
        if options & InputOptions.MOVEMENT:
            return translate(event, bindings, MOVEMENT_ACTIONS)
    return event


__all__ = [
    "InputOptions",
    "MOVEMENT_ACTIONS",
    "filter_event",
    "translate",
    "translate_confirm",
]
