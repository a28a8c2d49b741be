"""Input-layer public API for event decoding and translation.

Exports are split between low-level terminal decoding (`read_event`) and the
binding/translation helpers that modules compose per screen.
"""

from .events import (
    OTHER,
    Event,
    KeyEvent,
    KeyModifiers,
    MouseEvent,
    MouseKind,
    OtherEvent,
    ResizeEvent,
    StandardEvent,
)
from .key_bindings import KeyBindingError, KeyBindings, describe_chord, parse_chord
from .key_registry import EventBinding, EventHandlerRegistry
from .reader import read_event
from .translate import InputOptions, filter_event, translate, translate_confirm

__all__ = [
    "OTHER",
    "Event",
    "EventBinding",
    "EventHandlerRegistry",
    "InputOptions",
    "KeyBindingError",
    "KeyBindings",
    "KeyEvent",
    "KeyModifiers",
    "MouseEvent",
    "MouseKind",
    "OtherEvent",
    "ResizeEvent",
    "StandardEvent",
    "describe_chord",
    "filter_event",
    "parse_chord",
    "read_event",
    "translate",
    "translate_confirm",
]
