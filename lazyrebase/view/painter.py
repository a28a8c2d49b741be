"""ANSI painter for a synced render slice.

Lays out title, leading lines, main lines with the scrollbar column, and
trailing lines pinned to the bottom rows, then writes one frame to stdout.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable

from ..ui_theme import UITheme
from .line import ViewLine
from .render_slice import RenderSlice
from .text import display_width, slice_columns

DEFAULT_TITLE = "Lazy Rebase"
HELP_HINT = "Type ? for help"


def _title_row(title: str, width: int, show_help_hint: bool, theme: UITheme) -> str:
    left = f" {title}"
    right = f"{HELP_HINT} " if show_help_hint else ""
    gap = width - display_width(left) - display_width(right)
    if gap < 1:
        text = slice_columns(left, 0, width)
    else:
        text = left + " " * gap + right
    text += " " * max(0, width - display_width(text))
    return f"{theme.title}{text}{theme.reset}"


def _line_row(line: ViewLine, theme: UITheme) -> str:
    background = theme.selected if line.selected else ""
    out: list[str] = []
    for segment in line.segments:
        style = theme.style(segment.style)
        if style or background:
            out.append(f"{background}{style}{segment.text}{theme.reset}")
        else:
            out.append(segment.text)
    return "".join(out)


def build_frame(render_slice: RenderSlice, theme: UITheme, title: str = DEFAULT_TITLE) -> str:
    """Return the escape sequence stream that paints ``render_slice``."""
    width = render_slice.width
    height = render_slice.height
    out: list[str] = ["\033[H"]
    if width <= 0 or height <= 0:
        out.append("\033[2J")
        return "".join(out)

    rows: list[str] = [""] * height
    row = 0
    if render_slice.show_title:
        rows[row] = _title_row(title, width, not render_slice.show_help, theme)
        row += 1

    lines = render_slice.lines
    leading_count = render_slice.leading_lines_count
    trailing_count = render_slice.trailing_lines_count
    main_lines = lines[leading_count:len(lines) - trailing_count]

    for line in lines[:leading_count]:
        if row >= height:
            break
        rows[row] = _line_row(line, theme)
        row += 1

    thumb = render_slice.scroll_index()
    main_top = row
    for index, line in enumerate(main_lines):
        if row >= height:
            break
        text = _line_row(line, theme)
        if render_slice.show_scrollbar:
            pad = max(0, width - 1 - line.width())
            marker = theme.scrollbar_thumb + "█" if index == thumb else theme.scrollbar_track + "│"
            text += " " * pad + f"{marker}{theme.reset}"
        rows[row] = text
        row += 1
    if render_slice.show_scrollbar:
        # keep the track continuous below short content
        view_rows = max(0, height - render_slice.padding_height)
        for index in range(len(main_lines), view_rows):
            track_row = main_top + index
            if track_row >= height - trailing_count:
                break
            rows[track_row] = " " * (width - 1) + f"{theme.scrollbar_track}│{theme.reset}"

    trailing_top = max(row, height - trailing_count)
    for offset, line in enumerate(lines[len(lines) - trailing_count:]):
        if trailing_top + offset >= height:
            break
        rows[trailing_top + offset] = _line_row(line, theme)

    for index, text in enumerate(rows):
        out.append(f"\033[{index + 1};1H{text}\033[0m\033[K")
    return "".join(out)


def write_frame(frame: str) -> None:
    os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))


class Painter:
    """Frame builder bound to a theme and title, plus the frame output.

    ``frame`` reads the slice and must run under the view lock; ``write``
    only touches the terminal and runs after the lock is released.
    """

    def __init__(
        self,
        theme: UITheme,
        title: str = DEFAULT_TITLE,
        write: Callable[[str], None] = write_frame,
    ) -> None:
        self._theme = theme
        self._title = title
        self._write = write

    def frame(self, render_slice: RenderSlice) -> str:
        return build_frame(render_slice, self._theme, self._title)

    def write(self, frame: str) -> None:
        self._write(frame)

    def __call__(self, render_slice: RenderSlice) -> None:
        self.write(self.frame(render_slice))


def make_painter(
    theme: UITheme,
    title: str = DEFAULT_TITLE,
    write: Callable[[str], None] = write_frame,
) -> Painter:
    """Bind theme/title/output into the painter the render thread drives."""
    return Painter(theme, title, write)


__all__ = ["DEFAULT_TITLE", "HELP_HINT", "Painter", "build_frame", "make_painter", "write_frame"]
