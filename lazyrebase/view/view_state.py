"""Shared hand-off point between the dispatch thread and the render thread.

The dispatch thread publishes view data and records scroll/resize actions
through ``ViewSender``; the render thread waits in ``wait_for_change`` and
then syncs the render slice. All slice access happens under one condition
lock, held only for the duration of a record, a sync or a frame build.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TypeVar

from .render_slice import RenderAction, RenderSlice, Resize
from .view_data import ViewData

T = TypeVar("T")


class ViewState:
    def __init__(self, render_slice: RenderSlice | None = None) -> None:
        self._condition = threading.Condition()
        self._render_slice = render_slice if render_slice is not None else RenderSlice()
        self._view_data: ViewData | None = None
        self._stopped = False

    @property
    def render_slice(self) -> RenderSlice:
        return self._render_slice

    def publish(self, view_data: ViewData) -> None:
        with self._condition:
            self._view_data = view_data
            self._condition.notify_all()

    def record(self, action: RenderAction | Resize) -> None:
        with self._condition:
            self._render_slice.record(action)
            self._condition.notify_all()

    def stop(self) -> None:
        with self._condition:
            self._stopped = True
            self._condition.notify_all()

    def is_stopped(self) -> bool:
        with self._condition:
            return self._stopped

    def _has_change(self) -> bool:
        if self._view_data is None:
            return False
        return self._render_slice.is_stale(self._view_data)

    def wait_for_change(self, timeout: float | None = None) -> bool:
        """Block until new view data or queued actions exist, or stop.

        Returns ``True`` when there is something to sync.
        """
        with self._condition:
            self._condition.wait_for(lambda: self._stopped or self._has_change(), timeout=timeout)
            return not self._stopped and self._has_change()

    def sync(self) -> int:
        """Sync the slice against the latest view data; return its version."""
        with self._condition:
            if self._view_data is not None:
                self._render_slice.sync_view_data(self._view_data)
            return self._render_slice.version

    def render_with(self, build: Callable[[RenderSlice], T]) -> T:
        """Run ``build`` while no sync can change the slice underneath it.

        Only the build holds the lock; callers write its result afterwards.
        """
        with self._condition:
            return build(self._render_slice)


class ViewSender:
    """Dispatch-side handle modules use to drive the render slice."""

    def __init__(self, view_state: ViewState) -> None:
        self._view_state = view_state

    def render(self, view_data: ViewData) -> None:
        self._view_state.publish(view_data)

    def resize(self, width: int, height: int) -> None:
        self._view_state.record(Resize(width, height))

    def scroll_up(self) -> None:
        self._view_state.record(RenderAction.SCROLL_UP)

    def scroll_down(self) -> None:
        self._view_state.record(RenderAction.SCROLL_DOWN)

    def scroll_left(self) -> None:
        self._view_state.record(RenderAction.SCROLL_LEFT)

    def scroll_right(self) -> None:
        self._view_state.record(RenderAction.SCROLL_RIGHT)

    def scroll_page_up(self) -> None:
        self._view_state.record(RenderAction.PAGE_UP)

    def scroll_page_down(self) -> None:
        self._view_state.record(RenderAction.PAGE_DOWN)

    def scroll_top(self) -> None:
        self._view_state.record(RenderAction.SCROLL_TOP)

    def scroll_bottom(self) -> None:
        self._view_state.record(RenderAction.SCROLL_BOTTOM)


__all__ = ["ViewSender", "ViewState"]
