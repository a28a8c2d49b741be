"""Public runtime orchestration entry points.

This package groups the session bootstrap (`run_app`), the dispatch loop,
and the worker threads it coordinates.
"""

from __future__ import annotations


def run_app(*args, **kwargs):
    """Lazily import the app entrypoint so importing the package stays cheap."""
    from .app import run_app as _run_app

    return _run_app(*args, **kwargs)


def __getattr__(name: str):
    if name in {"ModuleHandler", "Process"}:
        from . import process as _process

        return getattr(_process, name)
    if name in {"Runtime", "ThreadStatus", "ThreadStatuses", "Threadable"}:
        from . import threads as _threads

        return getattr(_threads, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ModuleHandler",
    "Process",
    "Runtime",
    "ThreadStatus",
    "ThreadStatuses",
    "Threadable",
    "run_app",
]
