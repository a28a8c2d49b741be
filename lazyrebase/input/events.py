"""Immutable input event values.

Raw terminal input decodes into key, mouse, and resize events. Key bindings
turn some of those into ``StandardEvent`` members; anything a screen does not
care about becomes ``OTHER``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union


class KeyModifiers(enum.IntFlag):
    """Modifier keys held while a key was pressed."""

    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4


NAMED_KEYS: tuple[str, ...] = (
    "Up",
    "Down",
    "Left",
    "Right",
    "PageUp",
    "PageDown",
    "Home",
    "End",
    "Enter",
    "Esc",
    "Backspace",
    "Delete",
    "Tab",
    "BackTab",
    "Insert",
)


@dataclass(frozen=True)
class KeyEvent:
    """One key press: a single character or a name from ``NAMED_KEYS``."""

    code: str
    modifiers: KeyModifiers = KeyModifiers.NONE

    def is_char(self) -> bool:
        return len(self.code) == 1

    def with_code(self, code: str) -> KeyEvent:
        return KeyEvent(code, self.modifiers)


class MouseKind(enum.Enum):
    LEFT_DOWN = "left_down"
    LEFT_UP = "left_up"
    WHEEL_UP = "wheel_up"
    WHEEL_DOWN = "wheel_down"
    WHEEL_LEFT = "wheel_left"
    WHEEL_RIGHT = "wheel_right"
    OTHER = "other"


@dataclass(frozen=True)
class MouseEvent:
    """Mouse report in 1-based terminal cell coordinates."""

    kind: MouseKind
    column: int
    row: int
    modifiers: KeyModifiers = KeyModifiers.NONE


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


@dataclass(frozen=True)
class OtherEvent:
    """Input that no screen acts on."""


OTHER = OtherEvent()


class StandardEvent(enum.Enum):
    """Semantic application actions produced from key bindings."""

    ABORT = "abort"
    ACTION_BREAK = "action_break"
    ACTION_DROP = "action_drop"
    ACTION_EDIT = "action_edit"
    ACTION_FIXUP = "action_fixup"
    ACTION_PICK = "action_pick"
    ACTION_REWORD = "action_reword"
    ACTION_SQUASH = "action_squash"
    FORCE_ABORT = "force_abort"
    FORCE_REBASE = "force_rebase"
    HELP = "help"
    INSERT_LINE = "insert_line"
    KILL = "kill"
    MOVE_CURSOR_DOWN = "move_cursor_down"
    MOVE_CURSOR_END = "move_cursor_end"
    MOVE_CURSOR_HOME = "move_cursor_home"
    MOVE_CURSOR_PAGE_DOWN = "move_cursor_page_down"
    MOVE_CURSOR_PAGE_UP = "move_cursor_page_up"
    MOVE_CURSOR_UP = "move_cursor_up"
    REBASE = "rebase"
    REMOVE_LINE = "remove_line"
    SCROLL_BOTTOM = "scroll_bottom"
    SCROLL_DOWN = "scroll_down"
    SCROLL_LEFT = "scroll_left"
    SCROLL_RIGHT = "scroll_right"
    SCROLL_TOP = "scroll_top"
    SCROLL_UP = "scroll_up"
    SCROLL_PAGE_DOWN = "scroll_page_down"
    SCROLL_PAGE_UP = "scroll_page_up"
    SWAP_SELECTED_DOWN = "swap_selected_down"
    SWAP_SELECTED_UP = "swap_selected_up"
    TOGGLE_VISUAL_MODE = "toggle_visual_mode"
    YES = "yes"
    NO = "no"


Event = Union[KeyEvent, MouseEvent, ResizeEvent, StandardEvent, OtherEvent]


def key(code: str, modifiers: KeyModifiers = KeyModifiers.NONE) -> KeyEvent:
    """Shorthand used by bindings and tests."""
    return KeyEvent(code, modifiers)


__all__ = [
    "NAMED_KEYS",
    "OTHER",
    "Event",
    "KeyEvent",
    "KeyModifiers",
    "MouseEvent",
    "MouseKind",
    "OtherEvent",
    "ResizeEvent",
    "StandardEvent",
    "key",
]
