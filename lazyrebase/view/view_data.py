"""Declarative, versioned screen content.

A module owns one ``ViewData`` per distinct screen it shows. Every update
builds a new immutable ``ViewDataSnapshot`` and swaps it in with a single
assignment, so a reader on another thread always sees content and version
that belong together.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from .line import ViewLine


@dataclass(frozen=True)
class ViewDataSnapshot:
    name: str
    version: int = 0
    leading_lines: tuple[ViewLine, ...] = ()
    lines: tuple[ViewLine, ...] = ()
    trailing_lines: tuple[ViewLine, ...] = ()
    show_title: bool = False
    show_help: bool = False
    retain_scroll_position: bool = True
    scroll_version: int = 0
    visible_rows: tuple[int, ...] = ()
    visible_column: int | None = None


@dataclass
class ViewDataUpdater:
    """Mutable staging area handed to ``ViewData.update`` callbacks."""

    leading_lines: list[ViewLine] = field(default_factory=list)
    lines: list[ViewLine] = field(default_factory=list)
    trailing_lines: list[ViewLine] = field(default_factory=list)
    show_title: bool = False
    show_help: bool = False
    retain_scroll_position: bool = True
    scroll_version: int = 0
    visible_rows: list[int] = field(default_factory=list)
    visible_column: int | None = None

    def clear(self) -> None:
        """Drop all lines and visibility hints; flags are left as they are."""
        self.leading_lines.clear()
        self.lines.clear()
        self.trailing_lines.clear()
        self.visible_rows.clear()
        self.visible_column = None

    def push_leading_line(self, line: ViewLine) -> None:
        self.leading_lines.append(line)

    def push_line(self, line: ViewLine) -> None:
        self.lines.append(line)

    def push_trailing_line(self, line: ViewLine) -> None:
        self.trailing_lines.append(line)

    def set_show_title(self, show: bool) -> None:
        self.show_title = show

    def set_show_help(self, show: bool) -> None:
        self.show_help = show

    def set_retain_scroll_position(self, retain: bool) -> None:
        self.retain_scroll_position = retain

    def set_scroll_version(self, version: int) -> None:
        self.scroll_version = version

    def reset_scroll_position(self) -> None:
        """Mark the main content as a different list so scrolling restarts."""
        self.scroll_version += 1

    def ensure_line_visible(self, row: int) -> None:
        self.visible_rows.append(row)

    def ensure_column_visible(self, column: int) -> None:
        self.visible_column = column


class ViewData:
    """Named, versioned bundle of lines a screen wants displayed."""

    def __init__(
        self,
        name: str,
        build: Callable[[ViewDataUpdater], None] | None = None,
    ) -> None:
        self._update_lock = threading.Lock()
        self._snapshot = ViewDataSnapshot(name=name)
        if build is not None:
            self.update(build)

    @property
    def name(self) -> str:
        return self._snapshot.name

    @property
    def version(self) -> int:
        return self._snapshot.version

    def snapshot(self) -> ViewDataSnapshot:
        return self._snapshot

    def update(self, build: Callable[[ViewDataUpdater], None]) -> None:
        """Run ``build`` against the current content and publish the result.

        The version always advances, even when ``build`` changed nothing.
        """
        with self._update_lock:
            current = self._snapshot
            updater = ViewDataUpdater(
                leading_lines=list(current.leading_lines),
                lines=list(current.lines),
                trailing_lines=list(current.trailing_lines),
                show_title=current.show_title,
                show_help=current.show_help,
                retain_scroll_position=current.retain_scroll_position,
                scroll_version=current.scroll_version,
                visible_rows=list(current.visible_rows),
                visible_column=current.visible_column,
            )
            build(updater)
            self._snapshot = replace(
                current,
                version=current.version + 1,
                leading_lines=tuple(updater.leading_lines),
                lines=tuple(updater.lines),
                trailing_lines=tuple(updater.trailing_lines),
                show_title=updater.show_title,
                show_help=updater.show_help,
                retain_scroll_position=updater.retain_scroll_position,
                scroll_version=updater.scroll_version,
                visible_rows=tuple(updater.visible_rows),
                visible_column=updater.visible_column,
            )


__all__ = ["ViewData", "ViewDataSnapshot", "ViewDataUpdater"]
