"""Input-layer public API: key decoding and one handler per session mode."""

from __future__ import annotations

from collections.abc import Callable

from ..session import Mode, Session
from .key_navigator import handle_navigator_key
from .key_normal import BOOKMARK_SLOT_KEYS, handle_normal_key
from .key_picker import handle_picker_key
from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

MODE_HANDLERS: dict[Mode, Callable[[str, Session], Mode]] = {
    Mode.NORMAL: handle_normal_key,
    Mode.NAVIGATING: handle_navigator_key,
    Mode.PICKING_BOOKMARK: handle_picker_key,
}


def dispatch_key(key: str, session: Session) -> None:
    """Route ``key`` to the current mode's handler and adopt the mode it returns."""
    next_mode = MODE_HANDLERS[session.mode](key, session)
    if next_mode is not session.mode:
        session.mode = next_mode
        session.dirty = True


__all__ = [
    "BOOKMARK_SLOT_KEYS",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "MODE_HANDLERS",
    "dispatch_key",
    "handle_navigator_key",
    "handle_normal_key",
    "handle_picker_key",
    "read_key",
]
