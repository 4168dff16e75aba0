"""Tests for config persistence and value sanitization.

Malformed config data must fall back to defaults instead of failing startup.
"""

from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from jerm import config


class ConfigBehaviorTests(unittest.TestCase):
    def _with_config(self, data: object):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        config_path = Path(tmp.name) / "config.json"
        config_path.write_text(json.dumps(data), encoding="utf-8")
        patcher = mock.patch("jerm.config.CONFIG_PATH", config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        return config_path

    def test_missing_config_loads_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("jerm.config.CONFIG_PATH", Path(tmp) / "absent.json"):
                self.assertEqual(config.load_config(), {})
                self.assertIsNone(config.load_theme_name())
                self.assertEqual(config.load_sync_interval_seconds(), config.DEFAULT_SYNC_INTERVAL_SECONDS)

    def test_non_object_document_is_ignored(self) -> None:
        self._with_config(["theme", "ocean"])
        self.assertEqual(config.load_config(), {})

    def test_string_values_are_trimmed_and_blank_means_unset(self) -> None:
        self._with_config({"theme": "  plain ", "style": "   ", "shell": 7})
        self.assertEqual(config.load_theme_name(), "plain")
        self.assertIsNone(config.load_style_name())
        self.assertIsNone(config.load_shell())

    def test_sync_interval_below_minimum_falls_back(self) -> None:
        self._with_config({"sync_interval_seconds": 1})
        self.assertEqual(config.load_sync_interval_seconds(), config.DEFAULT_SYNC_INTERVAL_SECONDS)

    def test_sync_interval_rejects_booleans(self) -> None:
        self._with_config({"sync_interval_seconds": True})
        self.assertEqual(config.load_sync_interval_seconds(), config.DEFAULT_SYNC_INTERVAL_SECONDS)

    def test_sync_interval_accepts_valid_number(self) -> None:
        self._with_config({"sync_interval_seconds": 12})
        self.assertEqual(config.load_sync_interval_seconds(), 12.0)

    def test_sidebar_width_is_clamped(self) -> None:
        self._with_config({"sidebar_width": 500})
        self.assertEqual(config.load_sidebar_width(), config.MAX_SIDEBAR_WIDTH)

    def test_sidebar_width_non_integer_uses_default(self) -> None:
        self._with_config({"sidebar_width": "wide"})
        self.assertEqual(config.load_sidebar_width(), config.DEFAULT_SIDEBAR_WIDTH)

    def test_nerd_fonts_env_overrides_config(self) -> None:
        self._with_config({"nerd_fonts": True})
        with mock.patch.dict(os.environ, {"JERM_NERD_FONTS": "0"}):
            self.assertFalse(config.nerd_fonts_enabled())
        with mock.patch.dict(os.environ, {"JERM_NERD_FONTS": "TRUE"}):
            self.assertTrue(config.nerd_fonts_enabled())

    def test_nerd_fonts_from_config(self) -> None:
        self._with_config({"nerd_fonts": True})
        env = {key: value for key, value in os.environ.items() if key != "JERM_NERD_FONTS"}
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertTrue(config.nerd_fonts_enabled())


if __name__ == "__main__":
    unittest.main()
