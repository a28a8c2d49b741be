"""UI theme definitions and selection helpers.

Views name a semantic style slot on each segment; the painter looks the slot
up here to get the ANSI SGR prefix. Unknown slots paint unstyled.
"""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the painter."""

    name: str
    reset: str
    default: str
    title: str
    indicator: str
    selected: str
    cursor: str
    scrollbar_track: str
    scrollbar_thumb: str
    help_heading: str
    help_key: str
    error: str
    action_pick: str
    action_reword: str
    action_edit: str
    action_squash: str
    action_fixup: str
    action_drop: str
    action_break: str
    action_exec: str
    action_label: str
    action_reset: str
    action_merge: str

    def style(self, slot: str) -> str:
        """Return the SGR prefix for ``slot``, or ``""`` when unknown."""
        if slot in _STYLE_SLOTS:
            return getattr(self, slot)
        return ""


_STYLE_SLOTS = frozenset(field.name for field in fields(UITheme)) - {"name", "reset"}

DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    default="",
    title="\033[1;7m",
    indicator="\033[36m",
    selected="\033[48;5;237m",
    cursor="\033[7m",
    scrollbar_track="\033[2m",
    scrollbar_thumb="\033[1m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    error="\033[1;31m",
    action_pick="\033[32m",
    action_reword="\033[33m",
    action_edit="\033[34m",
    action_squash="\033[35m",
    action_fixup="\033[35m",
    action_drop="\033[31m",
    action_break="\033[37m",
    action_exec="\033[37m",
    action_label="\033[38;5;110m",
    action_reset="\033[38;5;110m",
    action_merge="\033[36m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    default="",
    title="\033[1;38;5;45;48;5;24m",
    indicator="\033[38;5;39m",
    selected="\033[48;5;24m",
    cursor="\033[7;38;5;45m",
    scrollbar_track="\033[2;38;5;31m",
    scrollbar_thumb="\033[38;5;45m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    error="\033[1;38;5;203m",
    action_pick="\033[38;5;84m",
    action_reword="\033[38;5;215m",
    action_edit="\033[38;5;117m",
    action_squash="\033[38;5;176m",
    action_fixup="\033[38;5;176m",
    action_drop="\033[38;5;203m",
    action_break="\033[38;5;252m",
    action_exec="\033[38;5;252m",
    action_label="\033[38;5;73m",
    action_reset="\033[38;5;73m",
    action_merge="\033[38;5;80m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    default="",
    title="",
    indicator="",
    selected="",
    cursor="",
    scrollbar_track="",
    scrollbar_thumb="",
    help_heading="",
    help_key="",
    error="",
    action_pick="",
    action_reword="",
    action_edit="",
    action_squash="",
    action_fixup="",
    action_drop="",
    action_break="",
    action_exec="",
    action_label="",
    action_reset="",
    action_merge="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
