"""Worker thread lifecycle: status registry, stop signal, and supervisor.

Each ``Threadable`` runs on its own daemon thread. A worker that raises is
logged, marked ``ERROR`` and trips the shared stop signal so every other
worker and the dispatch loop wind down.
"""

from __future__ import annotations

import abc
import enum
import logging
import threading

logger = logging.getLogger(__name__)


class ThreadStatus(enum.Enum):
    WAITING = "waiting"
    BUSY = "busy"
    ENDED = "ended"
    ERROR = "error"


class ThreadStatuses:
    """Lock-guarded map of worker name to its last reported status."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._statuses: dict[str, ThreadStatus] = {}

    def register(self, name: str) -> None:
        with self._lock:
            self._statuses.setdefault(name, ThreadStatus.WAITING)

    def update(self, name: str, status: ThreadStatus) -> None:
        with self._lock:
            self._statuses[name] = status

    def status(self, name: str) -> ThreadStatus | None:
        with self._lock:
            return self._statuses.get(name)

    def any_error(self) -> bool:
        with self._lock:
            return ThreadStatus.ERROR in self._statuses.values()

    def snapshot(self) -> dict[str, ThreadStatus]:
        with self._lock:
            return dict(self._statuses)


class Threadable(abc.ABC):
    """One long-running worker.

    ``run`` must return promptly once ``stop`` is set; ``end`` is called by
    the supervisor on shutdown to release anything ``run`` may block on.
    """

    name = "worker"

    @abc.abstractmethod
    def run(self, stop: threading.Event, statuses: ThreadStatuses) -> None:
        """Body of the worker thread."""

    def end(self) -> None:
        return None


class Runtime:
    """Start, supervise, and join a fixed set of workers."""

    def __init__(self) -> None:
        self.stop_event = threading.Event()
        self.statuses = ThreadStatuses()
        self._workers: list[Threadable] = []
        self._threads: list[threading.Thread] = []

    def register(self, worker: Threadable) -> None:
        if self._threads:
            raise RuntimeError("cannot register workers after start")
        self._workers.append(worker)
        self.statuses.register(worker.name)

    def _run_worker(self, worker: Threadable) -> None:
        logger.debug("thread %s started", worker.name)
        try:
            worker.run(self.stop_event, self.statuses)
        except Exception:
            logger.exception("thread %s failed", worker.name)
            self.statuses.update(worker.name, ThreadStatus.ERROR)
            self.stop()
            return
        self.statuses.update(worker.name, ThreadStatus.ENDED)
        logger.debug("thread %s ended", worker.name)

    def start(self) -> None:
        for worker in self._workers:
            thread = threading.Thread(
                target=self._run_worker,
                args=(worker,),
                name=f"lazyrebase-{worker.name}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()

    def stop(self) -> None:
        if self.stop_event.is_set():
            return
        self.stop_event.set()
        for worker in self._workers:
            worker.end()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for every worker; ``True`` when all of them finished."""
        for thread in self._threads:
            thread.join(timeout)
        return not any(thread.is_alive() for thread in self._threads)


__all__ = ["Runtime", "ThreadStatus", "ThreadStatuses", "Threadable"]
