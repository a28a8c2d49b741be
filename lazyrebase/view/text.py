"""Display-width aware text measurement and column slicing.

Segments carry plain text and a separate style, so these helpers never see
escape sequences. Wide characters take two terminal cells.
"""

from __future__ import annotations

import re
import unicodedata

TAB_WIDTH = 4
_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f-\x9f]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def sanitize_terminal_text(text: str) -> str:
    """Expand tabs and escape control bytes so painting has no side effects."""
    if "\t" in text:
        text = text.replace("\t", " " * TAB_WIDTH)
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", text)


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def slice_columns(text: str, start_cols: int, max_cols: int) -> str:
    """Return the part of ``text`` covering columns ``[start, start + max)``.

    A wide character cut by the left edge shows as blank cells; one cut by
    the right edge is dropped.
    """
    if max_cols <= 0 or not text:
        return ""
    start_cols = max(0, start_cols)

    out: list[str] = []
    col = 0
    shown = 0
    for ch in text:
        w = char_display_width(ch)
        if col < start_cols:
            col += w
            if col > start_cols:
                shown = min(max_cols, col - start_cols)
                out.append(" " * shown)
            continue
        if shown + w > max_cols:
            break
        out.append(ch)
        col += w
        shown += w
    return "".join(out)
