"""Semantic action to key-chord binding table.

Bindings are built once at startup (defaults plus config overrides) and then
only read. Chord descriptors use the compact ``[Control|Alt|Shift]*<key>``
form, for example ``"y"``, ``"Up"``, ``"Controlc"`` or ``"Alt+Down"``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .events import NAMED_KEYS, KeyEvent, KeyModifiers, StandardEvent

_MODIFIER_PREFIXES: tuple[tuple[str, KeyModifiers], ...] = (
    ("Control", KeyModifiers.CONTROL),
    ("Ctrl", KeyModifiers.CONTROL),
    ("Alt", KeyModifiers.ALT),
    ("Shift", KeyModifiers.SHIFT),
)
_MODIFIER_LABELS: tuple[tuple[KeyModifiers, str], ...] = (
    (KeyModifiers.CONTROL, "Ctrl"),
    (KeyModifiers.ALT, "Alt"),
    (KeyModifiers.SHIFT, "Shift"),
)

DEFAULT_BINDINGS: dict[StandardEvent, tuple[str, ...]] = {
    StandardEvent.ABORT: ("q",),
    StandardEvent.ACTION_BREAK: ("b",),
    StandardEvent.ACTION_DROP: ("d",),
    StandardEvent.ACTION_EDIT: ("e",),
    StandardEvent.ACTION_FIXUP: ("f",),
    StandardEvent.ACTION_PICK: ("p",),
    StandardEvent.ACTION_REWORD: ("r",),
    StandardEvent.ACTION_SQUASH: ("s",),
    StandardEvent.FORCE_ABORT: ("Q",),
    StandardEvent.FORCE_REBASE: ("W",),
    StandardEvent.HELP: ("?",),
    StandardEvent.INSERT_LINE: ("I",),
    StandardEvent.KILL: ("Controlc",),
    StandardEvent.MOVE_CURSOR_DOWN: ("Down",),
    StandardEvent.MOVE_CURSOR_END: ("End",),
    StandardEvent.MOVE_CURSOR_HOME: ("Home",),
    StandardEvent.MOVE_CURSOR_PAGE_DOWN: ("PageDown",),
    StandardEvent.MOVE_CURSOR_PAGE_UP: ("PageUp",),
    StandardEvent.MOVE_CURSOR_UP: ("Up",),
    StandardEvent.REBASE: ("w",),
    StandardEvent.REMOVE_LINE: ("Delete",),
    StandardEvent.SCROLL_BOTTOM: ("End",),
    StandardEvent.SCROLL_DOWN: ("Down",),
    StandardEvent.SCROLL_LEFT: ("Left",),
    StandardEvent.SCROLL_PAGE_DOWN: ("PageDown",),
    StandardEvent.SCROLL_PAGE_UP: ("PageUp",),
    StandardEvent.SCROLL_RIGHT: ("Right",),
    StandardEvent.SCROLL_TOP: ("Home",),
    StandardEvent.SCROLL_UP: ("Up",),
    StandardEvent.SWAP_SELECTED_DOWN: ("j",),
    StandardEvent.SWAP_SELECTED_UP: ("k",),
    StandardEvent.TOGGLE_VISUAL_MODE: ("v",),
    StandardEvent.YES: ("y",),
    StandardEvent.NO: ("n",),
}


class KeyBindingError(ValueError):
    """Raised when a chord descriptor cannot be parsed."""


def parse_chord(descriptor: str) -> KeyEvent:
    """Parse one chord descriptor into the key event it matches."""
    if not isinstance(descriptor, str):
        raise KeyBindingError(f"invalid key binding: {descriptor!r}")
    rest = descriptor
    modifiers = KeyModifiers.NONE
    while True:
        for prefix, flag in _MODIFIER_PREFIXES:
            if len(rest) > len(prefix) and rest.startswith(prefix):
                rest = rest[len(prefix):]
                if rest.startswith("+") and len(rest) > 1:
                    rest = rest[1:]
                modifiers |= flag
                break
        else:
            break

    if len(rest) == 1:
        return KeyEvent(rest, modifiers)
    if rest in NAMED_KEYS:
        return KeyEvent(rest, modifiers)
    raise KeyBindingError(f"invalid key binding: {descriptor!r}")


def describe_chord(chord: KeyEvent) -> str:
    """Return a short human label such as ``Ctrl+c`` or ``PageUp``."""
    labels = [label for flag, label in _MODIFIER_LABELS if chord.modifiers & flag]
    labels.append(chord.code)
    return "+".join(labels)


class KeyBindings:
    """Immutable action -> chords table."""

    def __init__(self, bindings: Mapping[StandardEvent, Iterable[KeyEvent]]) -> None:
        self._bindings = MappingProxyType({action: tuple(chords) for action, chords in bindings.items()})

    @classmethod
    def from_descriptors(cls, descriptors: Mapping[StandardEvent, Iterable[str]]) -> KeyBindings:
        return cls({action: [parse_chord(text) for text in texts] for action, texts in descriptors.items()})

    @classmethod
    def default(cls) -> KeyBindings:
        return cls.from_descriptors(DEFAULT_BINDINGS)

    def chords(self, action: StandardEvent) -> tuple[KeyEvent, ...]:
        return self._bindings.get(action, ())

    def contains(self, action: StandardEvent, chord: KeyEvent) -> bool:
        return chord in self._bindings.get(action, ())

    def labels(self, action: StandardEvent) -> list[str]:
        return [describe_chord(chord) for chord in self.chords(action)]

    def actions(self) -> tuple[StandardEvent, ...]:
        return tuple(self._bindings)

    def with_overrides(self, overrides: Mapping[StandardEvent, Iterable[KeyEvent]]) -> KeyBindings:
        merged = dict(self._bindings)
        for action, chords in overrides.items():
            merged[action] = tuple(chords)
        return KeyBindings(merged)


__all__ = [
    "DEFAULT_BINDINGS",
    "KeyBindingError",
    "KeyBindings",
    "describe_chord",
    "parse_chord",
]
