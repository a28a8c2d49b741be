"""Screens the dispatcher switches between."""

from .base import ExitStatus, Module, ProcessResult, RenderContext, State, scroll_view
from .choice import Choice
from .confirm import Confirm, ConfirmAbort, ConfirmRebase, Confirmed
from .edit import Edit
from .insert import Insert, InsertState
from .list_module import List

__all__ = [
    "Choice",
    "Confirm",
    "ConfirmAbort",
    "ConfirmRebase",
    "Confirmed",
    "Edit",
    "ExitStatus",
    "Insert",
    "InsertState",
    "List",
    "Module",
    "ProcessResult",
    "RenderContext",
    "State",
    "scroll_view",
]
