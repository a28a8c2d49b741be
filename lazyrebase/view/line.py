"""Styled line building blocks for view data."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .text import display_width, sanitize_terminal_text, slice_columns


@dataclass(frozen=True)
class LineSegment:
    """A run of text sharing one style.

    ``style`` is a semantic theme slot name (see ``ui_theme.UITheme``), not a
    raw escape sequence, so views stay independent of the color policy.
    """

    text: str
    style: str = "default"
    length: int = field(init=False)

    def __post_init__(self) -> None:
        clean = sanitize_terminal_text(self.text)
        object.__setattr__(self, "text", clean)
        object.__setattr__(self, "length", display_width(clean))

    def partial(self, start: int, width: int) -> LineSegment:
        """Return the visible part of this segment for a column window."""
        if start <= 0 and width >= self.length:
            return self
        return LineSegment(slice_columns(self.text, start, width), self.style)


@dataclass(frozen=True)
class ViewLine:
    """One displayable row made of segments.

    The first ``pinned_segments`` segments ignore horizontal scrolling.
    ``padding`` repeats to fill the row when content is narrower than it.
    """

    segments: tuple[LineSegment, ...] = ()
    pinned_segments: int = 0
    selected: bool = False
    padding: LineSegment | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", tuple(self.segments))
        pinned = max(0, min(self.pinned_segments, len(self.segments)))
        object.__setattr__(self, "pinned_segments", pinned)

    @classmethod
    def from_text(cls, text: str, style: str = "default", **kwargs) -> ViewLine:
        return cls((LineSegment(text, style),), **kwargs)

    @classmethod
    def from_segments(cls, segments: Iterable[LineSegment], **kwargs) -> ViewLine:
        return cls(tuple(segments), **kwargs)

    @classmethod
    def empty(cls) -> ViewLine:
        return cls()

    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)

    def width(self) -> int:
        return sum(segment.length for segment in self.segments)


__all__ = ["LineSegment", "ViewLine"]
