"""Raw tty and alternate-screen handling for the full-screen view."""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Switches the tty into raw mode and back, restoring the saved attributes."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_attributes = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Put the tty in raw mode and switch to the alternate screen."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_SCREEN)

    def disable_tui_mode(self) -> None:
        """Return to the main screen and restore the saved tty attributes."""
        os.write(self.stdout_fd, LEAVE_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_attributes)

    @contextlib.contextmanager
    def raw_mode(self):
        """Run the body on the alternate screen; the shell screen comes back on any exit."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["ENTER_SCREEN", "LEAVE_SCREEN", "TerminalController"]
