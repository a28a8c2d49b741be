"""Scroll engine: turn view data into the bounded window of lines to paint.

``RenderSlice`` keeps a FIFO of scroll/resize actions, one active
``ScrollPosition`` plus a per-view-name cache of the inactive ones, and the
last rendered line window. ``sync_view_data`` recomputes only when the view
data ``(name, version)`` changed or actions are queued; ``version`` advances
on every recompute so consumers can skip repaints.

Vertical space is handed out title first, then trailing lines, then leading
lines, and the main (scrollable) lines get what remains.
"""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass

from .line import LineSegment, ViewLine
from .scroll_position import ScrollPosition
from .view_data import ViewData, ViewDataSnapshot


class RenderAction(enum.Enum):
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    SCROLL_LEFT = "scroll_left"
    SCROLL_RIGHT = "scroll_right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    SCROLL_TOP = "scroll_top"
    SCROLL_BOTTOM = "scroll_bottom"


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def scroll_index(top: int, lines_count: int, view_height: int) -> int:
    """Map a top row onto the scrollbar thumb row within ``view_height``.

    The first and last thumb rows are only used at the true top and bottom;
    rows in between move proportionally.
    """
    if lines_count == 0 or top == 0:
        return 0
    if view_height <= 1 or view_height >= lines_count:
        return 0
    if top >= lines_count - view_height:
        return view_height - 1
    if view_height <= 2:
        return 0
    # first and last rows are pinned to the ends, so only a centre remains
    if lines_count - view_height <= 2:
        return _round_half_up(0.5 * view_height)

    input_start = 1.0
    input_end = float(lines_count - view_height) - 1.0
    output_start = 1.0
    output_end = float(view_height) - 2.0
    slope = (output_end - output_start) / (input_end - input_start)
    return _round_half_up(slope * (top - input_start) + output_start)


def _max_line_length(lines: Sequence[ViewLine], start: int, count: int) -> int:
    longest = 0
    for line in lines[start:start + count]:
        if len(line.segments) <= line.pinned_segments:
            continue
        longest = max(longest, line.width())
    return longest


class RenderSlice:
    """Bounded, clipped line window for the active view."""

    def __init__(self) -> None:
        self._actions: deque[RenderAction | Resize] = deque()
        self.height = 0
        self.width = 0
        self.lines: list[ViewLine] = []
        self.lines_count = 0
        self.leading_lines_count = 0
        self.trailing_lines_count = 0
        self.padding_height = 0
        self.scroll_position = ScrollPosition()
        self._scroll_position_cache: dict[str, ScrollPosition] = {}
        self.show_scrollbar = False
        self.show_help = False
        self.show_title = False
        self.version = 0
        self.view_data_name = ""
        self.view_data_version = 0

    def record_scroll_up(self) -> None:
        self._actions.append(RenderAction.SCROLL_UP)

    def record_scroll_down(self) -> None:
        self._actions.append(RenderAction.SCROLL_DOWN)

    def record_scroll_left(self) -> None:
        self._actions.append(RenderAction.SCROLL_LEFT)

    def record_scroll_right(self) -> None:
        self._actions.append(RenderAction.SCROLL_RIGHT)

    def record_page_up(self) -> None:
        self._actions.append(RenderAction.PAGE_UP)

    def record_page_down(self) -> None:
        self._actions.append(RenderAction.PAGE_DOWN)

    def record_scroll_top(self) -> None:
        self._actions.append(RenderAction.SCROLL_TOP)

    def record_scroll_bottom(self) -> None:
        self._actions.append(RenderAction.SCROLL_BOTTOM)

    def record_resize(self, width: int, height: int) -> None:
        self._actions.append(Resize(width, height))

    def record(self, action: RenderAction | Resize) -> None:
        self._actions.append(action)

    def pending_actions(self) -> tuple[RenderAction | Resize, ...]:
        return tuple(self._actions)

    def has_pending_actions(self) -> bool:
        return bool(self._actions)

    def is_stale(self, view_data: ViewData | ViewDataSnapshot) -> bool:
        """Whether ``sync_view_data`` would recompute for ``view_data``."""
        return bool(self._actions) or self._cache_expired(_snapshot_of(view_data))

    def sync_view_data(self, view_data: ViewData | ViewDataSnapshot) -> None:
        data = _snapshot_of(view_data)
        cache_expired = self._cache_expired(data)
        # scroll bounds depend on padding, so refresh it before any scroll math
        if cache_expired:
            self._set_padding_height(data)
        self._set_active_scroll_position(data)

        has_actions = bool(self._actions)
        while self._actions:
            self._apply(self._actions.popleft())
        if has_actions or cache_expired:
            self._rebuild(data)

    def scroll_index(self) -> int:
        view_height = max(0, self.height - self.padding_height)
        return scroll_index(self.scroll_position.top, self.lines_count, view_height)

    def _apply(self, action: RenderAction | Resize) -> None:
        position = self.scroll_position
        if isinstance(action, Resize):
            self._set_size(action.width, action.height)
        elif action is RenderAction.SCROLL_UP:
            position.scroll_up()
        elif action is RenderAction.SCROLL_DOWN:
            position.scroll_down()
        elif action is RenderAction.SCROLL_LEFT:
            position.scroll_left()
        elif action is RenderAction.SCROLL_RIGHT:
            position.scroll_right()
        elif action is RenderAction.PAGE_UP:
            position.page_up()
        elif action is RenderAction.PAGE_DOWN:
            position.page_down()
        elif action is RenderAction.SCROLL_TOP:
            position.scroll_top()
        elif action is RenderAction.SCROLL_BOTTOM:
            position.scroll_bottom()

    def _cache_expired(self, data: ViewDataSnapshot) -> bool:
        return self.view_data_name != data.name or self.view_data_version != data.version

    def _set_size(self, width: int, height: int) -> None:
        width = max(0, width)
        height = max(0, height)
        if self.height != height or self.width != width:
            self.height = height
            self.width = width
            self._update_scroll_position_size()

    def _set_padding_height(self, data: ViewDataSnapshot) -> None:
        padding_height = (
            (1 if data.show_title else 0) + len(data.leading_lines) + len(data.trailing_lines)
        )
        if self.padding_height != padding_height:
            self.padding_height = padding_height
            self._update_scroll_position_size()

    def _set_active_scroll_position(self, data: ViewDataSnapshot) -> None:
        if data.name == self.view_data_name:
            return
        previous = self.scroll_position
        self.scroll_position = self._scroll_position_cache.pop(data.name, None) or ScrollPosition()
        self._scroll_position_cache[self.view_data_name] = previous
        if self.scroll_position.version != data.scroll_version or not data.retain_scroll_position:
            self.scroll_position.reset()
            self.scroll_position.version = data.scroll_version
        self._update_scroll_position_size()

    def _update_scroll_position_size(self) -> None:
        if self.height == 0 or self.padding_height > self.height:
            view_height = 0
        else:
            view_height = self.height - self.padding_height
        if self.width == 0:
            view_width = 0
        else:
            view_width = self.width - (1 if self.show_scrollbar else 0)
        self.scroll_position.resize(view_height, view_width)

    def _rebuild(self, data: ViewDataSnapshot) -> None:
        leading_length = len(data.leading_lines)
        trailing_length = len(data.trailing_lines)
        lines_length = len(data.lines)

        self.version += 1
        self.view_data_name = data.name
        self.view_data_version = data.version
        self.show_title = data.show_title
        self.show_help = data.show_help
        self.show_scrollbar = (
            self.padding_height < self.height and lines_length > self.height - self.padding_height
        )
        # the scrollbar column may have just appeared or gone away
        self._update_scroll_position_size()

        position = self.scroll_position
        # the main line count has to be current before the visibility hints run
        position.set_lines_length(lines_length)
        for row in data.visible_rows:
            position.ensure_line_visible(row)

        title_height = 1 if self.show_title else 0
        # title always has precedence, trailing lines have precedence over leading lines
        trailing_end = min(trailing_length, max(0, self.height - title_height))
        leading_end = min(leading_length, max(0, self.height - title_height - trailing_length))

        available_height = max(0, self.height - self.padding_height)
        lines_start = position.top
        lines_end = min(lines_length, available_height)
        if self.width == 0:
            leading_end = trailing_end = lines_end = 0
        max_line_length = _max_line_length(data.lines, lines_start, lines_end)
        if lines_length and self.show_scrollbar:
            max_line_length += 1

        self.leading_lines_count = leading_end
        self.trailing_lines_count = trailing_end
        self.lines_count = lines_length
        position.set_max_line_length(
            max(
                max_line_length,
                _max_line_length(data.leading_lines, 0, leading_end),
                _max_line_length(data.trailing_lines, 0, trailing_end),
            )
        )
        if data.visible_column is not None:
            position.ensure_column_visible(data.visible_column)

        self.lines = []
        self._push_lines(data.leading_lines, 0, leading_end, scrollbar=False)
        self._push_lines(data.lines, lines_start, lines_end, scrollbar=self.show_scrollbar)
        self._push_lines(data.trailing_lines, 0, trailing_end, scrollbar=False)

    def _push_lines(self, lines: Sequence[ViewLine], start: int, count: int, *, scrollbar: bool) -> None:
        window_width = self.width - 1 if scrollbar and self.width > 0 else self.width
        left = self.scroll_position.left
        for line in lines[start:start + count]:
            self.lines.append(_clip_line(line, left, window_width))


def _clip_line(line: ViewLine, left: int, window_width: int) -> ViewLine:
    """Clip one line to ``window_width`` columns starting at column ``left``.

    Pinned segments are laid out first at their full width; the horizontal
    offset applies from the first unpinned segment onwards.
    """
    segments: list[LineSegment] = []
    # window width is zero with a scrollbar and a view width of 1
    if window_width > 0:
        cursor = 0
        left_start = 0
        for index, segment in enumerate(line.segments):
            if index == line.pinned_segments:
                left_start = left
            partial = segment.partial(left_start, window_width - cursor)
            if partial.length > 0:
                segments.append(partial)
                cursor += partial.length
                if cursor >= window_width:
                    break
                left_start = 0
            else:
                left_start = max(0, left_start - segment.length)

        if cursor < window_width and line.padding is not None and line.padding.length > 0:
            repeat = (window_width - cursor) // line.padding.length
            if repeat > 0:
                segments.append(LineSegment(line.padding.text * repeat, line.padding.style))

    return ViewLine(
        tuple(segments),
        pinned_segments=line.pinned_segments,
        selected=line.selected,
    )


def _snapshot_of(view_data: ViewData | ViewDataSnapshot) -> ViewDataSnapshot:
    if isinstance(view_data, ViewData):
        return view_data.snapshot()
    return view_data


__all__ = ["RenderAction", "RenderSlice", "Resize", "scroll_index"]
