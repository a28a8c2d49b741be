"""Persistent JSON config helpers.

Holds key binding overrides and the theme name. Malformed or missing config
falls back to the built-in defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..input import KeyBindingError, KeyBindings, KeyEvent, StandardEvent, parse_chord
from ..ui_theme import normalize_theme_name

logger = logging.getLogger(__name__)

APP_NAME = "lazyrebase"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _parse_overrides(raw: object) -> dict[StandardEvent, list[KeyEvent]]:
    if not isinstance(raw, dict):
        return {}
    overrides: dict[StandardEvent, list[KeyEvent]] = {}
    for name, descriptors in raw.items():
        try:
            action = StandardEvent(name)
        except ValueError:
            logger.warning("unknown key binding action %r", name)
            continue
        if isinstance(descriptors, str):
            descriptors = [descriptors]
        if not isinstance(descriptors, list):
            logger.warning("key binding %r must be a string or a list", name)
            continue
        chords: list[KeyEvent] = []
        for descriptor in descriptors:
            try:
                chords.append(parse_chord(descriptor))
            except KeyBindingError as exc:
                logger.warning("dropping key binding for %s: %s", name, exc)
        if chords:
            overrides[action] = chords
    return overrides


def load_key_bindings(config: dict[str, object] | None = None) -> KeyBindings:
    """Defaults with the ``key_bindings`` overrides applied.

    An action whose descriptors are all invalid keeps its default chords.
    """
    data = load_config() if config is None else config
    return KeyBindings.default().with_overrides(_parse_overrides(data.get("key_bindings")))


def load_theme_name(config: dict[str, object] | None = None) -> str:
    data = load_config() if config is None else config
    value = data.get("theme")
    return normalize_theme_name(value if isinstance(value, str) else None)


@dataclass(frozen=True)
class AppConfig:
    key_bindings: KeyBindings
    theme_name: str


def load_app_config(theme_override: str | None = None) -> AppConfig:
    """Read the config file once and resolve everything startup needs."""
    data = load_config()
    theme_name = normalize_theme_name(theme_override) if theme_override else load_theme_name(data)
    return AppConfig(key_bindings=load_key_bindings(data), theme_name=theme_name)


__all__ = [
    "AppConfig",
    "CONFIG_PATH",
    "load_app_config",
    "load_config",
    "load_key_bindings",
    "load_theme_name",
]
