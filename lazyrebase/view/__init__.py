"""View layer: declarative view data, the scroll engine, and the painter."""

from .line import LineSegment, ViewLine
from .render_slice import RenderAction, RenderSlice, Resize, scroll_index
from .scroll_position import ScrollPosition
from .view_data import ViewData, ViewDataSnapshot, ViewDataUpdater
from .view_state import ViewSender, ViewState

__all__ = [
    "LineSegment",
    "RenderAction",
    "RenderSlice",
    "Resize",
    "ScrollPosition",
    "ViewData",
    "ViewDataSnapshot",
    "ViewDataUpdater",
    "ViewLine",
    "ViewSender",
    "ViewState",
    "scroll_index",
]
