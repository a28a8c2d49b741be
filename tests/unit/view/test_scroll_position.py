from __future__ import annotations

import unittest

from lazyrebase.view import ScrollPosition


def _position(lines: int, height: int, max_line: int = 0, width: int = 0) -> ScrollPosition:
    position = ScrollPosition()
    position.resize(height, width)
    position.set_lines_length(lines)
    position.set_max_line_length(max_line)
    return position


class ScrollPositionTests(unittest.TestCase):
    def test_top_stays_within_content(self) -> None:
        position = _position(lines=10, height=4)
        position.scroll_up()
        self.assertEqual(position.top, 0)

        position.scroll_bottom()
        self.assertEqual(position.top, 6)
        position.scroll_down()
        self.assertEqual(position.top, 6)

    def test_short_content_never_scrolls(self) -> None:
        position = _position(lines=3, height=10)
        position.scroll_down()
        position.page_down()
        self.assertEqual(position.top, 0)

    def test_zero_height_is_inert(self) -> None:
        position = _position(lines=10, height=0)
        position.scroll_down()
        position.ensure_line_visible(7)
        self.assertEqual(position.top, 0)

    def test_shrinking_content_clamps_top(self) -> None:
        position = _position(lines=20, height=5)
        position.scroll_bottom()
        position.set_lines_length(8)
        self.assertEqual(position.top, 3)

    def test_ensure_line_visible_moves_minimally(self) -> None:
        position = _position(lines=20, height=5)
        position.ensure_line_visible(3)
        self.assertEqual(position.top, 0)
        position.ensure_line_visible(9)
        self.assertEqual(position.top, 5)
        position.ensure_line_visible(2)
        self.assertEqual(position.top, 2)

    def test_horizontal_bounds(self) -> None:
        position = _position(lines=1, height=5, max_line=30, width=20)
        for _ in range(15):
            position.scroll_right()
        self.assertEqual(position.left, 10)

        position.ensure_column_visible(4)
        self.assertEqual(position.left, 4)

    def test_reset(self) -> None:
        position = _position(lines=20, height=5, max_line=30, width=10)
        position.scroll_bottom()
        position.scroll_right()
        position.reset()
        self.assertEqual((position.top, position.left), (0, 0))


if __name__ == "__main__":
    unittest.main()
