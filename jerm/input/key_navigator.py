"""Navigator-mode keyboard handling for the ``cd -list`` directory browser."""

from __future__ import annotations

from ..session import Mode, Session


def handle_navigator_key(key: str, session: Session) -> Mode:
    """Move or drill through the browser; Enter commits, Esc cancels."""
    browser = session.browser
    if key == "ENTER":
        return session.confirm_navigator()
    if key in {"ESC", "CTRL_C"}:
        return session.cancel_navigator()
    if key == "UP":
        browser.move_up()
    elif key == "DOWN":
        browser.move_down()
    elif key == "RIGHT":
        browser.enter_selected()
    elif key in {"LEFT", "BACKSPACE"}:
        browser.go_up()
    else:
        return Mode.NAVIGATING
    session.dirty = True
    return Mode.NAVIGATING


__all__ = ["handle_navigator_key"]
