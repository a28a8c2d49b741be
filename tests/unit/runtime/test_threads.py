"""Worker supervision: status tracking, failure propagation, and shutdown."""

from __future__ import annotations

import threading
import unittest

from lazyrebase.runtime.threads import Runtime, Threadable, ThreadStatus, ThreadStatuses


class _WaitForStop(Threadable):
    name = "waiter"

    def __init__(self) -> None:
        self.ended = threading.Event()

    def run(self, stop: threading.Event, statuses: ThreadStatuses) -> None:
        statuses.update(self.name, ThreadStatus.BUSY)
        stop.wait(5.0)

    def end(self) -> None:
        self.ended.set()


class _Failing(Threadable):
    name = "failing"

    def run(self, stop: threading.Event, statuses: ThreadStatuses) -> None:
        raise RuntimeError("boom")


class ThreadStatusesTests(unittest.TestCase):
    def test_register_update_and_snapshot(self) -> None:
        statuses = ThreadStatuses()
        statuses.register("a")
        statuses.register("b")
        statuses.update("b", ThreadStatus.ENDED)

        self.assertEqual(statuses.status("a"), ThreadStatus.WAITING)
        self.assertIsNone(statuses.status("missing"))
        self.assertFalse(statuses.any_error())
        self.assertEqual(statuses.snapshot(), {"a": ThreadStatus.WAITING, "b": ThreadStatus.ENDED})

        statuses.update("a", ThreadStatus.ERROR)
        self.assertTrue(statuses.any_error())


class RuntimeTests(unittest.TestCase):
    def test_stop_ends_workers_cleanly(self) -> None:
        runtime = Runtime()
        worker = _WaitForStop()
        runtime.register(worker)
        runtime.start()

        runtime.stop()
        self.assertTrue(runtime.join(2.0))
        self.assertTrue(worker.ended.is_set())
        self.assertEqual(runtime.statuses.status("waiter"), ThreadStatus.ENDED)

    def test_failure_is_logged_and_stops_everyone(self) -> None:
        runtime = Runtime()
        runtime.register(_WaitForStop())
        runtime.register(_Failing())

        with self.assertLogs("lazyrebase.runtime.threads", level="ERROR") as logs:
            runtime.start()
            self.assertTrue(runtime.stop_event.wait(2.0))
            self.assertTrue(runtime.join(2.0))

        self.assertEqual(runtime.statuses.status("failing"), ThreadStatus.ERROR)
        self.assertEqual(runtime.statuses.status("waiter"), ThreadStatus.ENDED)
        self.assertTrue(any("failing failed" in line for line in logs.output))

    def test_register_after_start_is_rejected(self) -> None:
        runtime = Runtime()
        runtime.register(_WaitForStop())
        runtime.start()
        try:
            with self.assertRaises(RuntimeError):
                runtime.register(_Failing())
        finally:
            runtime.stop()
            runtime.join(2.0)


if __name__ == "__main__":
    unittest.main()
