"""Runtime composition layer for lazyrebase.

Builds the modules, view state, and workers, runs the dispatch loop on the
calling thread, and writes the todo list back according to the exit status.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path
from queue import Queue

from ..input import Event
from ..modules import ConfirmAbort, ConfirmRebase, ExitStatus, Insert, List, Module, State
from ..todo import TodoList
from ..ui_theme import resolve_theme
from ..view import RenderSlice, ViewSender, ViewState
from ..view.painter import make_painter
from .config import AppConfig
from .process import ModuleHandler, Process
from .terminal import TerminalController
from .threads import Runtime
from .workers import InputThread, RenderThread

logger = logging.getLogger(__name__)

WORKER_JOIN_SECONDS = 1.0


def build_modules(config: AppConfig) -> dict[State, Module]:
    return {
        State.LIST: List(config.key_bindings),
        State.CONFIRM_ABORT: ConfirmAbort(config.key_bindings),
        State.CONFIRM_REBASE: ConfirmRebase(config.key_bindings),
        State.INSERT: Insert(),
    }


def persist(todo_list: TodoList, exit_status: ExitStatus) -> None:
    """Write the todo list back the way git expects for ``exit_status``."""
    if exit_status is ExitStatus.GOOD:
        todo_list.save()
    elif exit_status is ExitStatus.ABORT:
        todo_list.clear()
        todo_list.save()


def run_session(
    todo_list: TodoList,
    config: AppConfig,
    stdin_fd: int,
    build: Callable,
    write: Callable | None = None,
    *,
    terminal: TerminalController | None = None,
) -> ExitStatus:
    """Run one interactive session and return how it ended.

    ``build`` turns the synced render slice into a frame and ``write`` outputs
    it. ``terminal`` is entered around the worker lifetime when given; tests
    pass ``None`` and feed ``stdin_fd`` from a pipe.
    """
    events: Queue[Event] = Queue()
    view_state = ViewState(RenderSlice())
    runtime = Runtime()
    runtime.register(InputThread(stdin_fd, events))
    runtime.register(RenderThread(view_state, build, write))
    process = Process(
        ModuleHandler(build_modules(config)),
        todo_list,
        config.key_bindings,
        ViewSender(view_state),
        events,
        runtime.stop_event,
        runtime.statuses,
    )

    with terminal.raw_mode() if terminal is not None else contextlib.nullcontext():
        runtime.start()
        try:
            exit_status = process.run()
        finally:
            runtime.stop()
            if not runtime.join(WORKER_JOIN_SECONDS):
                logger.warning("workers still running after %.1fs", WORKER_JOIN_SECONDS)
    return exit_status


def run_app(path: Path, config: AppConfig, no_color: bool = False) -> int:
    """Edit the todo file at ``path`` interactively; return the exit code."""
    todo_list = TodoList.load(path)
    theme = resolve_theme(config.theme_name, no_color=no_color)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    painter = make_painter(theme)
    exit_status = run_session(todo_list, config, stdin_fd, painter.frame, painter.write, terminal=terminal)
    logger.info("session ended with %s", exit_status.name)
    persist(todo_list, exit_status)
    if exit_status is ExitStatus.STATE_ERROR:
        os.write(sys.stderr.fileno(), b"lazyrebase: internal error, todo file left unchanged\n")
    return exit_status.code


__all__ = ["build_modules", "persist", "run_app", "run_session"]
