"""Per-screen scroll cursor with bounds derived from content and viewport."""

from __future__ import annotations


class ScrollPosition:
    """Top row / left column of a scrollable view, always kept in range.

    ``version`` stores the scroll version of the view data this position was
    last valid for.
    """

    def __init__(self) -> None:
        self.top = 0
        self.left = 0
        self.lines_length = 0
        self.max_line_length = 0
        self.view_height = 0
        self.view_width = 0
        self.version = 0

    def __repr__(self) -> str:
        return (
            f"ScrollPosition(top={self.top}, left={self.left}, lines={self.lines_length}, "
            f"max_line={self.max_line_length}, view={self.view_width}x{self.view_height}, "
            f"version={self.version})"
        )

    def max_top(self) -> int:
        if self.view_height <= 0:
            return 0
        return max(0, self.lines_length - self.view_height)

    def max_left(self) -> int:
        if self.view_width <= 0:
            return 0
        return max(0, self.max_line_length - self.view_width)

    def _clamp(self) -> None:
        self.top = max(0, min(self.top, self.max_top()))
        self.left = max(0, min(self.left, self.max_left()))

    def reset(self) -> None:
        self.top = 0
        self.left = 0

    def resize(self, view_height: int, view_width: int) -> None:
        self.view_height = max(0, view_height)
        self.view_width = max(0, view_width)
        self._clamp()

    def set_lines_length(self, lines_length: int) -> None:
        self.lines_length = max(0, lines_length)
        self._clamp()

    def set_max_line_length(self, max_line_length: int) -> None:
        self.max_line_length = max(0, max_line_length)
        self._clamp()

    def scroll_up(self) -> None:
        self.top = max(0, self.top - 1)

    def scroll_down(self) -> None:
        self.top = min(self.max_top(), self.top + 1)

    def scroll_left(self) -> None:
        self.left = max(0, self.left - 1)

    def scroll_right(self) -> None:
        self.left = min(self.max_left(), self.left + 1)

    def _page_size(self) -> int:
        return max(1, self.view_height // 2)

    def page_up(self) -> None:
        self.top = max(0, self.top - self._page_size())

    def page_down(self) -> None:
        self.top = min(self.max_top(), self.top + self._page_size())

    def scroll_top(self) -> None:
        self.top = 0

    def scroll_bottom(self) -> None:
        self.top = self.max_top()

    def ensure_line_visible(self, row: int) -> None:
        """Scroll the minimum amount needed for ``row`` to be on screen."""
        if self.view_height <= 0:
            return
        if row < self.top:
            self.top = row
        elif row >= self.top + self.view_height:
            self.top = row - self.view_height + 1
        self._clamp()

    def ensure_column_visible(self, column: int) -> None:
        if self.view_width <= 0:
            return
        if column < self.left:
            self.left = column
        elif column >= self.left + self.view_width:
            self.left = column - self.view_width + 1
        self._clamp()


__all__ = ["ScrollPosition"]
