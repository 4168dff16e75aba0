"""Bookmark-picker keyboard handling (``jerm goto``)."""

from __future__ import annotations

from ..session import Mode, Session
from .key_normal import BOOKMARK_SLOT_KEYS


def handle_picker_key(key: str, session: Session) -> Mode:
    if key == "ENTER":
        return session.confirm_picker()
    if key in {"ESC", "CTRL_C"}:
        return session.cancel_picker()
    if key == "UP":
        session.picker_move_up()
    elif key == "DOWN":
        session.picker_move_down()
    elif key in BOOKMARK_SLOT_KEYS or (len(key) == 1 and "1" <= key <= "9"):
        slot = BOOKMARK_SLOT_KEYS.get(key) or int(key)
        if slot - 1 <= session.picker_max_index():
            session.picker_selected = slot - 1
            return session.confirm_picker()
    return Mode.PICKING_BOOKMARK


__all__ = ["handle_picker_key"]
