"""Lock-guarded rebase todo list.

Lines are plain ``<action> <content>`` text; comments and blank lines are
skipped on load. Every public method takes the list lock for exactly one
read or mutation, so the render and input threads never observe a
half-applied edit.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from pathlib import Path

logger = logging.getLogger(__name__)

ACTION_ALIASES: dict[str, str] = {
    "p": "pick",
    "r": "reword",
    "e": "edit",
    "s": "squash",
    "f": "fixup",
    "d": "drop",
    "b": "break",
    "x": "exec",
    "l": "label",
    "t": "reset",
    "m": "merge",
}
ACTIONS: frozenset[str] = frozenset(ACTION_ALIASES.values())
# actions whose content is a commit that the user may re-action
COMMIT_ACTIONS: frozenset[str] = frozenset({"pick", "reword", "edit", "squash", "fixup", "drop"})


class TodoListError(ValueError):
    """Invalid todo list content or operation."""


@dataclass(frozen=True)
class TodoLine:
    action: str
    content: str = ""

    def __post_init__(self) -> None:
        if self.action not in ACTIONS:
            raise TodoListError(f"unknown action: {self.action!r}")
        if self.action != "break" and not self.content.strip():
            raise TodoListError(f"{self.action} requires content")

    @classmethod
    def parse(cls, text: str) -> TodoLine:
        stripped = text.strip()
        action, _, content = stripped.partition(" ")
        action = ACTION_ALIASES.get(action, action)
        return cls(action, content.strip())

    def is_commit(self) -> bool:
        return self.action in COMMIT_ACTIONS

    def to_text(self) -> str:
        return f"{self.action} {self.content}".rstrip()


def parse_todo_text(text: str) -> list[TodoLine]:
    """Parse todo file text; raise ``TodoListError`` naming the bad line."""
    lines: list[TodoLine] = []
    for number, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue
        try:
            lines.append(TodoLine.parse(stripped))
        except TodoListError as exc:
            raise TodoListError(f"line {number}: {exc}") from exc
    return lines


class TodoList:
    """Ordered todo lines, the cursor, and an optional visual range anchor."""

    def __init__(self, lines: list[TodoLine] | None = None, path: Path | None = None) -> None:
        self._lock = threading.Lock()
        self._lines: list[TodoLine] = list(lines or [])
        self._selected = 0
        self._visual: int | None = None
        self._version = 0
        self.path = path

    @classmethod
    def load(cls, path: Path) -> TodoList:
        text = path.read_text(encoding="utf-8") if path.exists() else ""
        todo = cls(parse_todo_text(text), path=path)
        logger.debug("loaded %d todo lines from %s", len(todo), path)
        return todo

    def save(self) -> None:
        if self.path is None:
            return
        lines = self.lines()
        body = "".join(f"{line.to_text()}\n" for line in lines)
        self.path.write_text(body, encoding="utf-8")
        logger.info("wrote %d todo lines to %s", len(lines), self.path)

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    def lines(self) -> tuple[TodoLine, ...]:
        with self._lock:
            return tuple(self._lines)

    def snapshot(self) -> tuple[tuple[TodoLine, ...], int, int]:
        """Return ``(lines, selected_index, version)`` read atomically."""
        with self._lock:
            return tuple(self._lines), self._selected, self._version

    def selected_index(self) -> int:
        with self._lock:
            return self._selected

    def version(self) -> int:
        with self._lock:
            return self._version

    def _clamped(self, index: int) -> int:
        return max(0, min(index, len(self._lines) - 1)) if self._lines else 0

    def _touch(self) -> None:
        self._version += 1

    def set_selected_index(self, index: int) -> None:
        with self._lock:
            selected = self._clamped(index)
            if selected != self._selected:
                self._selected = selected
                self._touch()

    def move_selected(self, delta: int) -> None:
        with self._lock:
            selected = self._clamped(self._selected + delta)
            if selected != self._selected:
                self._selected = selected
                self._touch()

    def visual_index(self) -> int | None:
        """Anchor of the visual range, or ``None`` outside visual mode."""
        with self._lock:
            return self._visual

    def toggle_visual(self) -> bool:
        """Start a range at the cursor, or end the current one; return the new mode."""
        with self._lock:
            self._visual = None if self._visual is not None or not self._lines else self._selected
            self._touch()
            return self._visual is not None

    def _range(self) -> tuple[int, int]:
        anchor = self._selected if self._visual is None else self._visual
        return min(anchor, self._selected), max(anchor, self._selected)

    def selected_range(self) -> tuple[int, int]:
        """Inclusive ``(start, end)`` of the selection; one line outside visual mode."""
        with self._lock:
            return self._range()

    def set_selected_action(self, action: str) -> bool:
        """Re-action the selected commit lines; non-commit lines are left alone."""
        with self._lock:
            if not self._lines or action not in COMMIT_ACTIONS:
                return False
            start, end = self._range()
            changed = False
            for index in range(start, end + 1):
                line = self._lines[index]
                if line.is_commit() and line.action != action:
                    self._lines[index] = replace(line, action=action)
                    changed = True
            if changed:
                self._touch()
            return changed

    def add_line(self, index: int, line: TodoLine) -> None:
        with self._lock:
            if not 0 <= index <= len(self._lines):
                raise TodoListError(f"insert index {index} out of range")
            self._lines.insert(index, line)
            self._selected = index
            self._visual = None
            self._touch()

    def remove_selected(self) -> tuple[TodoLine, ...]:
        """Remove the selected lines and end visual mode; return what was removed."""
        with self._lock:
            if not self._lines:
                return ()
            start, end = self._range()
            removed = tuple(self._lines[start:end + 1])
            del self._lines[start:end + 1]
            self._selected = self._clamped(start)
            self._visual = None
            self._touch()
            return removed

    def swap_selected(self, delta: int) -> bool:
        """Move the selected lines one slot up (``-1``) or down (``+1``)."""
        with self._lock:
            if not self._lines:
                return False
            start, end = self._range()
            if delta < 0 and start > 0:
                self._lines.insert(end, self._lines.pop(start - 1))
            elif delta > 0 and end < len(self._lines) - 1:
                self._lines.insert(start, self._lines.pop(end + 1))
            else:
                return False
            step = -1 if delta < 0 else 1
            self._selected += step
            if self._visual is not None:
                self._visual += step
            self._touch()
            return True

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()
            self._selected = 0
            self._visual = None
            self._touch()


__all__ = [
    "ACTIONS",
    "COMMIT_ACTIONS",
    "TodoLine",
    "TodoList",
    "TodoListError",
    "parse_todo_text",
]
