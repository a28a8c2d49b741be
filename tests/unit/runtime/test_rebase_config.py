from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyrebase.input import KeyEvent, KeyModifiers, StandardEvent
from lazyrebase.runtime import config


class ConfigBehaviorTests(unittest.TestCase):
    def _with_config(self, payload: object | None, raw: str | None = None):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        config_path = Path(tmp.name) / "config.json"
        if raw is not None:
            config_path.write_text(raw, encoding="utf-8")
        elif payload is not None:
            config_path.write_text(json.dumps(payload), encoding="utf-8")
        patcher = mock.patch("lazyrebase.runtime.config.CONFIG_PATH", config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_missing_config_gives_defaults(self) -> None:
        self._with_config(None)
        app_config = config.load_app_config()

        self.assertEqual(config.load_config(), {})
        self.assertEqual(app_config.theme_name, "default")
        self.assertTrue(app_config.key_bindings.contains(StandardEvent.ABORT, KeyEvent("q")))

    def test_malformed_config_is_ignored(self) -> None:
        self._with_config(None, raw="{not json")
        with self.assertLogs("lazyrebase.runtime.config", level="WARNING"):
            self.assertEqual(config.load_config(), {})

    def test_non_object_config_is_ignored(self) -> None:
        self._with_config([1, 2, 3])
        self.assertEqual(config.load_config(), {})

    def test_key_binding_overrides(self) -> None:
        self._with_config({"key_bindings": {"abort": ["x", "Controlq"], "yes": "o"}})
        bindings = config.load_key_bindings()

        self.assertEqual(bindings.chords(StandardEvent.ABORT), (KeyEvent("x"), KeyEvent("q", KeyModifiers.CONTROL)))
        self.assertEqual(bindings.chords(StandardEvent.YES), (KeyEvent("o"),))
        self.assertEqual(bindings.chords(StandardEvent.REBASE), (KeyEvent("w"),))

    def test_invalid_descriptors_keep_defaults(self) -> None:
        self._with_config({"key_bindings": {"abort": ["NotAKey"], "bogus_action": ["x"], "help": 5}})
        with self.assertLogs("lazyrebase.runtime.config", level="WARNING") as logs:
            bindings = config.load_key_bindings()

        self.assertEqual(bindings.chords(StandardEvent.ABORT), (KeyEvent("q"),))
        self.assertEqual(bindings.chords(StandardEvent.HELP), (KeyEvent("?"),))
        self.assertEqual(len(logs.output), 3)

    def test_theme_from_config_and_override(self) -> None:
        self._with_config({"theme": "Ocean"})
        self.assertEqual(config.load_app_config().theme_name, "ocean")
        self.assertEqual(config.load_app_config("default").theme_name, "default")

    def test_unknown_theme_falls_back(self) -> None:
        self._with_config({"theme": "neon"})
        self.assertEqual(config.load_theme_name(), "default")


if __name__ == "__main__":
    unittest.main()
