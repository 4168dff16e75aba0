"""Normal-mode keyboard handling: line editing, history, and execution."""

from __future__ import annotations

from collections.abc import Callable

from ..session import Mode, Session
from .key_registry import KeyComboBinding, KeyComboRegistry

BOOKMARK_SLOT_KEYS = {f"ALT_{slot}": slot for slot in range(1, 10)}


def _stay(action: Callable[[Session], None]) -> Callable[[Session], Mode]:
    def run(session: Session) -> Mode:
        action(session)
        return Mode.NORMAL

    return run


NORMAL_KEYS = KeyComboRegistry().register_bindings(
    KeyComboBinding(("ENTER",), Session.submit),
    KeyComboBinding(("BACKSPACE",), _stay(Session.delete_before_cursor)),
    KeyComboBinding(("LEFT",), _stay(Session.cursor_left)),
    KeyComboBinding(("RIGHT",), _stay(Session.cursor_right)),
    KeyComboBinding(("HOME", "CTRL_A"), _stay(Session.cursor_home)),
    KeyComboBinding(("END", "CTRL_E"), _stay(Session.cursor_end)),
    KeyComboBinding(("UP",), _stay(Session.history_prev)),
    KeyComboBinding(("DOWN",), _stay(Session.history_next)),
    KeyComboBinding(("ESC", "CTRL_U"), _stay(Session.clear_input)),
    KeyComboBinding(("CTRL_L",), _stay(Session.clear_scrollback)),
    KeyComboBinding(("CTRL_C",), _stay(Session.interrupt)),
    KeyComboBinding(("CTRL_D",), _stay(Session.end_of_input)),
)


def handle_normal_key(key: str, session: Session) -> Mode:
    """Handle one key while editing the command line and return the next mode."""
    slot = BOOKMARK_SLOT_KEYS.get(key)
    if slot is not None:
        session.jump_to_bookmark(slot)
        return Mode.NORMAL

    next_mode = NORMAL_KEYS.dispatch(key, session)
    if next_mode is not None:
        return next_mode

    if len(key) == 1 and key.isprintable():
        session.insert_text(key)
    return Mode.NORMAL


__all__ = ["BOOKMARK_SLOT_KEYS", "NORMAL_KEYS", "handle_normal_key"]
