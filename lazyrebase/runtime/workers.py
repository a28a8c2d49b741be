"""Input and render workers.

The input worker turns terminal bytes and size changes into events on the
shared queue. The render worker waits for published view data or recorded
render actions, syncs the render slice, and when it changed builds a frame
under the view lock and writes it once the lock is released. A closed input
fd ends the input worker with ``EOFError``, which fails the runtime.
"""

from __future__ import annotations

import logging
import shutil
import threading
from collections.abc import Callable
from queue import Queue

from ..input import Event, KeyEvent, MouseEvent, ResizeEvent, read_event
from ..view import RenderSlice, ViewState
from .threads import Threadable, ThreadStatus, ThreadStatuses

logger = logging.getLogger(__name__)

INPUT_POLL_MS = 50
RENDER_WAIT_SECONDS = 0.1


def terminal_size() -> tuple[int, int]:
    term = shutil.get_terminal_size((80, 24))
    return term.columns, term.lines


class InputThread(Threadable):
    name = "input"

    def __init__(
        self,
        fd: int,
        events: Queue[Event],
        size: Callable[[], tuple[int, int]] | None = None,
        read: Callable[[int, int | None], KeyEvent | MouseEvent | None] = read_event,
        poll_ms: int = INPUT_POLL_MS,
    ) -> None:
        self._fd = fd
        self._events = events
        self._size = size if size is not None else terminal_size
        self._read = read
        self._poll_ms = poll_ms
        self._last_size: tuple[int, int] | None = None

    def _publish_resize(self) -> None:
        size = self._size()
        if size != self._last_size:
            self._last_size = size
            self._events.put(ResizeEvent(*size))

    def run(self, stop: threading.Event, statuses: ThreadStatuses) -> None:
        while not stop.is_set():
            self._publish_resize()
            statuses.update(self.name, ThreadStatus.WAITING)
            event = self._read(self._fd, self._poll_ms)
            if event is None:
                continue
            statuses.update(self.name, ThreadStatus.BUSY)
            self._events.put(event)


class RenderThread(Threadable):
    name = "render"

    def __init__(
        self,
        view_state: ViewState,
        build: Callable[[RenderSlice], object],
        write: Callable[[object], None] | None = None,
        wait_seconds: float = RENDER_WAIT_SECONDS,
    ) -> None:
        self._view_state = view_state
        self._build = build
        self._write = write
        self._wait_seconds = wait_seconds
        self._painted_version: int | None = None

    def run(self, stop: threading.Event, statuses: ThreadStatuses) -> None:
        while not stop.is_set() and not self._view_state.is_stopped():
            statuses.update(self.name, ThreadStatus.WAITING)
            if not self._view_state.wait_for_change(self._wait_seconds):
                continue
            statuses.update(self.name, ThreadStatus.BUSY)
            version = self._view_state.sync()
            if version == self._painted_version:
                continue
            frame = self._view_state.render_with(self._build)
            if self._write is not None:
                self._write(frame)
            self._painted_version = version

    def end(self) -> None:
        self._view_state.stop()


__all__ = ["INPUT_POLL_MS", "InputThread", "RenderThread", "terminal_size"]
