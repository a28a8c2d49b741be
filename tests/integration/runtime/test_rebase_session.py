"""End-to-end sessions: keys written to a pipe drive the real workers and modules."""

from __future__ import annotations

import os
import tempfile
import threading
import unittest
from pathlib import Path
from unittest import mock

from lazyrebase.input import KeyBindings
from lazyrebase.input import reader
from lazyrebase.modules import ExitStatus
from lazyrebase.runtime import app
from lazyrebase.runtime.config import AppConfig
from lazyrebase.todo import TodoList

TODO_TEXT = "pick aaa111 First\npick bbb222 Second\npick ccc333 Third\n"


class RebaseSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        reader._PENDING_BYTES.clear()
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.path = Path(tmp.name) / "git-rebase-todo"
        self.path.write_text(TODO_TEXT, encoding="utf-8")
        self.config = AppConfig(KeyBindings.default(), "default")
        self.frames: list = []
        self.painted = threading.Event()

    def _paint(self, render_slice) -> None:
        self.frames.append([line.text() for line in render_slice.lines])
        self.painted.set()

    def _session(self, keys: bytes) -> tuple[ExitStatus, TodoList]:
        todo = TodoList.load(self.path)
        read_fd, write_fd = os.pipe()
        self.addCleanup(os.close, read_fd)
        self.addCleanup(os.close, write_fd)
        os.write(write_fd, keys)
        with mock.patch("lazyrebase.runtime.workers.terminal_size", return_value=(60, 10)):
            status = app.run_session(todo, self.config, read_fd, self._paint)
        return status, todo

    def test_edit_and_rebase(self) -> None:
        status, todo = self._session(b"\x1b[Bsjwy")
        app.persist(todo, status)

        self.assertEqual(status, ExitStatus.GOOD)
        self.assertEqual(
            self.path.read_text(encoding="utf-8"),
            "pick aaa111 First\npick ccc333 Third\nsquash bbb222 Second\n",
        )

    def test_abort_clears_the_file(self) -> None:
        status, todo = self._session(b"qy")
        app.persist(todo, status)

        self.assertEqual(status, ExitStatus.ABORT)
        self.assertEqual(self.path.read_text(encoding="utf-8"), "")

    def test_kill_leaves_the_file_untouched(self) -> None:
        status, todo = self._session(b"d\x03")
        app.persist(todo, status)

        self.assertEqual(status, ExitStatus.KILL)
        self.assertEqual(self.path.read_text(encoding="utf-8"), TODO_TEXT)

    def test_declined_confirmation_keeps_editing(self) -> None:
        status, todo = self._session(b"wxW")

        self.assertEqual(status, ExitStatus.GOOD)
        self.assertEqual(len(todo), 3)


class PersistTests(unittest.TestCase):
    def test_state_error_leaves_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "todo"
            path.write_text(TODO_TEXT, encoding="utf-8")
            todo = TodoList.load(path)
            todo.clear()
            app.persist(todo, ExitStatus.STATE_ERROR)

            self.assertEqual(path.read_text(encoding="utf-8"), TODO_TEXT)


if __name__ == "__main__":
    unittest.main()
