"""Persistent JSON config helpers.

Stores the UI theme, input-line style, shell, sync cadence, and sidebar width.
A missing or malformed file reads as an empty config; every loader falls
back to its default on a bad value.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

APP_NAME = "jerm"
CONFIG_FILENAME = "config.json"
BOOKMARKS_FILENAME = "bookmarks.json"
CONFIG_DIR = Path(user_config_dir(APP_NAME, appauthor=False))
CONFIG_PATH = CONFIG_DIR / CONFIG_FILENAME
BOOKMARKS_PATH = CONFIG_DIR / BOOKMARKS_FILENAME
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / "jerm.log"

DEFAULT_SYNC_INTERVAL_SECONDS = 30.0
MIN_SYNC_INTERVAL_SECONDS = 5.0
DEFAULT_SIDEBAR_WIDTH = 25
MIN_SIDEBAR_WIDTH = 16
MAX_SIDEBAR_WIDTH = 60


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def load_style_name() -> str | None:
    """Load the Pygments style used for the input line."""
    return _load_string("style")


def load_shell() -> str | None:
    """Load the interpreter used to run command lines."""
    return _load_string("shell")


def load_sync_interval_seconds() -> float:
    """Return the background remote-sync interval.

    Non-numeric values and values below the minimum fall back to the default.
    """
    value = load_config().get("sync_interval_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_SYNC_INTERVAL_SECONDS
    if value < MIN_SYNC_INTERVAL_SECONDS:
        return DEFAULT_SYNC_INTERVAL_SECONDS
    return float(value)


def load_sidebar_width() -> int:
    """Return the bookmark sidebar width clamped to its allowed range."""
    value = load_config().get("sidebar_width")
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_SIDEBAR_WIDTH
    return max(MIN_SIDEBAR_WIDTH, min(MAX_SIDEBAR_WIDTH, value))


def nerd_fonts_enabled() -> bool:
    """Return whether Nerd Font icons are enabled by env var or config."""
    env_value = os.environ.get("JERM_NERD_FONTS")
    if env_value is not None:
        return env_value == "1" or env_value.lower() == "true"
    value = load_config().get("nerd_fonts")
    return bool(value) if isinstance(value, bool) else False
