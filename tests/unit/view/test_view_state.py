from __future__ import annotations

import threading
import time
import unittest

from lazyrebase.view import RenderAction, ViewData, ViewLine, ViewSender, ViewState


class ViewStateTests(unittest.TestCase):
    def test_nothing_to_sync_before_first_publish(self) -> None:
        state = ViewState()
        self.assertFalse(state.wait_for_change(0.01))

    def test_publish_then_sync(self) -> None:
        state = ViewState()
        sender = ViewSender(state)
        sender.resize(20, 5)
        sender.render(ViewData("view", lambda updater: updater.push_line(ViewLine.from_text("a"))))

        self.assertTrue(state.wait_for_change(0.01))
        version = state.sync()
        self.assertEqual(version, 1)
        self.assertFalse(state.wait_for_change(0.01))
        self.assertEqual(state.sync(), 1)

    def test_scroll_actions_mark_the_slice_stale(self) -> None:
        state = ViewState()
        sender = ViewSender(state)
        view = ViewData("view", lambda updater: [updater.push_line(ViewLine.from_text(str(i))) for i in range(10)])
        sender.resize(20, 3)
        sender.render(view)
        state.sync()

        sender.scroll_down()
        self.assertEqual(state.render_slice.pending_actions(), (RenderAction.SCROLL_DOWN,))
        self.assertTrue(state.wait_for_change(0.01))
        state.sync()
        self.assertEqual(state.render_slice.scroll_position.top, 1)

    def test_waiter_wakes_on_publish(self) -> None:
        state = ViewState()
        woke = threading.Event()

        def waiter() -> None:
            if state.wait_for_change(2.0):
                woke.set()

        thread = threading.Thread(target=waiter, daemon=True)
        thread.start()
        time.sleep(0.02)
        state.publish(ViewData("view"))
        thread.join(2.0)
        self.assertTrue(woke.is_set())

    def test_stop_releases_waiters(self) -> None:
        state = ViewState()
        state.publish(ViewData("view"))
        state.sync()
        state.stop()

        started = time.monotonic()
        self.assertFalse(state.wait_for_change(2.0))
        self.assertLess(time.monotonic() - started, 1.0)
        self.assertTrue(state.is_stopped())

    def test_render_with_sees_synced_slice(self) -> None:
        state = ViewState()
        ViewSender(state).resize(10, 2)
        state.publish(ViewData("view", lambda updater: updater.push_line(ViewLine.from_text("hello"))))
        state.sync()

        seen: list[str] = []
        state.render_with(lambda render_slice: seen.extend(line.text() for line in render_slice.lines))
        self.assertEqual(seen, ["hello"])

    def test_render_with_returns_the_built_frame(self) -> None:
        state = ViewState()
        ViewSender(state).resize(10, 2)
        state.publish(ViewData("view", lambda updater: updater.push_line(ViewLine.from_text("hello"))))
        state.sync()

        frame = state.render_with(lambda render_slice: [line.text() for line in render_slice.lines])
        self.assertEqual(frame, ["hello"])


if __name__ == "__main__":
    unittest.main()
