"""Interactive session state and the operations that mutate it.

One :class:`Session` value is owned by the main loop and handed to the key
handler for the current mode. Operations that can change the mode return the
next :class:`Mode`; they never assign it themselves, so every transition is
visible at the call site.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from . import commands
from .bookmarks import BookmarkIndex, abbreviate_home
from .errors import CommandLaunchError, PathResolutionError
from .git_status import RepoStatus
from .navigator import DirectoryBrowser
from .shell import CommandResult, resolve_cd_path, run_command


class Mode(enum.Enum):
    NORMAL = "normal"
    NAVIGATING = "navigating"
    PICKING_BOOKMARK = "picking_bookmark"


def _no_status_requests(directory: Path, also_sync: bool) -> None:
    return None


@dataclass
class SessionServices:
    """Collaborators the session calls through.

    Defaults run real commands against the filesystem; tests swap in fakes.
    """

    run_command: Callable[[str, Path], CommandResult] = run_command
    resolve_path: Callable[[str, Path], Path] = resolve_cd_path
    request_status: Callable[[Path, bool], None] = _no_status_requests
    is_directory: Callable[[Path], bool] = Path.is_dir
    home: Path = field(default_factory=Path.home)


@dataclass
class Session:
    cwd: Path
    bookmarks: BookmarkIndex
    services: SessionServices = field(default_factory=SessionServices)
    browser: DirectoryBrowser = field(default_factory=DirectoryBrowser)
    scrollback: list[str] = field(default_factory=list)
    input_buffer: str = ""
    cursor: int = 0
    history: list[str] = field(default_factory=list)
    history_index: int | None = None
    mode: Mode = Mode.NORMAL
    picker_selected: int = 0
    repo_status: RepoStatus | None = None
    should_quit: bool = False
    dirty: bool = True

    def prompt(self) -> str:
        """Return the prompt text, with the home directory shown as ``~``."""
        return f"{abbreviate_home(self.cwd, self.services.home)} $ "

    def add_output(self, line: str) -> None:
        """Append one line to the scrollback."""
        self.scrollback.append(line)
        self.dirty = True

    def set_working_directory(self, path: Path) -> None:
        """Adopt ``path`` as the working directory and ask for fresh status."""
        if path == self.cwd:
            return
        logger.info("Working directory: {}", path)
        self.cwd = path
        self.dirty = True
        self.services.request_status(path, False)

    def apply_status(self, status: RepoStatus | None) -> None:
        """Replace the repository snapshot wholesale."""
        self.repo_status = status
        self.dirty = True

    # Line editing

    def insert_text(self, text: str) -> None:
        """Insert ``text`` at the cursor and move the cursor past it."""
        self.input_buffer = self.input_buffer[: self.cursor] + text + self.input_buffer[self.cursor :]
        self.cursor += len(text)
        self.dirty = True

    def delete_before_cursor(self) -> None:
        """Delete the character left of the cursor, if any."""
        if self.cursor == 0:
            return
        self.input_buffer = self.input_buffer[: self.cursor - 1] + self.input_buffer[self.cursor :]
        self.cursor -= 1
        self.dirty = True

    def cursor_left(self) -> None:
        """Move the cursor one character left, stopping at the start."""
        if self.cursor > 0:
            self.cursor -= 1
            self.dirty = True

    def cursor_right(self) -> None:
        """Move the cursor one character right, stopping at the end."""
        if self.cursor < len(self.input_buffer):
            self.cursor += 1
            self.dirty = True

    def cursor_home(self) -> None:
        """Move the cursor to the start of the line."""
        self.cursor = 0
        self.dirty = True

    def cursor_end(self) -> None:
        """Move the cursor past the last character."""
        self.cursor = len(self.input_buffer)
        self.dirty = True

    def _load_input(self, text: str) -> None:
        self.input_buffer = text
        self.cursor = len(text)
        self.dirty = True

    def clear_input(self) -> None:
        """Empty the input line and leave history browsing."""
        self.input_buffer = ""
        self.cursor = 0
        self.history_index = None
        self.dirty = True

    def clear_scrollback(self) -> None:
        """Drop every scrollback line."""
        self.scrollback.clear()
        self.dirty = True

    # History

    def add_to_history(self, line: str) -> None:
        """Record ``line`` unless it is blank or repeats the newest entry."""
        trimmed = line.strip()
        if not trimmed:
            return
        if self.history and self.history[-1] == trimmed:
            return
        self.history.append(trimmed)

    def history_prev(self) -> None:
        """Step to an older entry; the oldest entry is sticky."""
        if not self.history:
            return
        if self.history_index is None:
            index = len(self.history) - 1
        else:
            index = max(0, self.history_index - 1)
        self.history_index = index
        self._load_input(self.history[index])

    def history_next(self) -> None:
        """Step to a newer entry; past the newest, leave history with an empty line."""
        if self.history_index is None:
            return
        if self.history_index >= len(self.history) - 1:
            self.history_index = None
            self._load_input("")
            return
        self.history_index += 1
        self._load_input(self.history[self.history_index])

    # Termination keys

    def interrupt(self) -> None:
        """Quit on an empty line, otherwise echo the abandoned line and clear it."""
        if not self.input_buffer:
            self.should_quit = True
            return
        self.add_output(f"{self.prompt()}{self.input_buffer}^C")
        self.clear_input()

    def end_of_input(self) -> None:
        """Quit on an empty line; otherwise ignored."""
        if not self.input_buffer:
            self.should_quit = True

    # Command execution

    def submit(self) -> Mode:
        """Execute the current input line and return the next mode."""
        line = self.input_buffer
        self.add_output(f"{self.prompt()}{line}")
        self.add_to_history(line)
        self.clear_input()
        return self.execute(commands.classify(line))

    def execute(self, intent: commands.Intent) -> Mode:
        """Carry out a classified command and return the next mode."""
        logger.debug("Dispatching {}", type(intent).__name__)
        if isinstance(intent, commands.Empty):
            return Mode.NORMAL
        if isinstance(intent, commands.ChangeDirectory):
            self.change_directory(intent.target)
            return Mode.NORMAL
        if isinstance(intent, commands.OpenNavigator):
            return self.open_navigator()
        if isinstance(intent, commands.Clear):
            self.clear_scrollback()
            return Mode.NORMAL
        if isinstance(intent, commands.Exit):
            self.should_quit = True
            return Mode.NORMAL
        if isinstance(intent, commands.SaveBookmark):
            self.save_bookmark()
            return Mode.NORMAL
        if isinstance(intent, commands.OpenBookmarkPicker):
            return self.open_bookmark_picker()
        if isinstance(intent, commands.Shell):
            self.run_shell(intent.command)
            return Mode.NORMAL
        raise TypeError(f"unhandled intent: {intent!r}")

    def change_directory(self, target: str | None) -> None:
        """Resolve ``target`` (home when omitted) and move there, reporting failures."""
        token = target if target is not None else "~"
        try:
            resolved = self.services.resolve_path(token, self.cwd)
        except PathResolutionError as exc:
            self.add_output(f"cd: {exc}")
            return
        self.set_working_directory(resolved)

    def run_shell(self, command: str) -> None:
        """Run ``command`` in the working directory and append its output."""
        try:
            result = self.services.run_command(command, self.cwd)
        except CommandLaunchError as exc:
            logger.warning("Shell launch failed: {}", exc)
            self.add_output(f"Error: {exc}")
            return
        for line in result.all_lines():
            self.add_output(line)

    # Navigator

    def open_navigator(self) -> Mode:
        """Start browsing from the working directory."""
        self.browser.open(self.cwd)
        self.dirty = True
        return Mode.NAVIGATING

    def cancel_navigator(self) -> Mode:
        """Leave the browser without changing directory."""
        self.dirty = True
        return Mode.NORMAL

    def confirm_navigator(self) -> Mode:
        """Adopt the browser's selection as the working directory."""
        selected = self.browser.selected_path()
        if selected is not None:
            self.add_output(f"cd {selected}")
            self.set_working_directory(selected)
        self.dirty = True
        return Mode.NORMAL

    # Bookmarks

    def save_bookmark(self) -> None:
        """Bookmark the working directory."""
        self.bookmarks.add(self.cwd)
        self.add_output(f"Bookmark saved: {self.cwd}")

    def open_bookmark_picker(self) -> Mode:
        """Show the picker; stays in normal mode when there are no bookmarks."""
        if self.bookmarks.is_empty():
            return Mode.NORMAL
        self.picker_selected = 0
        self.dirty = True
        return Mode.PICKING_BOOKMARK

    def picker_max_index(self) -> int:
        """Return the highest selectable picker row."""
        return max(0, self.bookmarks.slot_count() - 1)

    def picker_move_up(self) -> None:
        if self.picker_selected > 0:
            self.picker_selected -= 1
            self.dirty = True

    def picker_move_down(self) -> None:
        if self.picker_selected < self.picker_max_index():
            self.picker_selected += 1
            self.dirty = True

    def cancel_picker(self) -> Mode:
        """Close the picker without moving."""
        self.dirty = True
        return Mode.NORMAL

    def confirm_picker(self) -> Mode:
        """Jump to the highlighted bookmark and close the picker."""
        self.jump_to_bookmark(self.picker_selected + 1)
        self.dirty = True
        return Mode.NORMAL

    def jump_to_bookmark(self, slot: int) -> bool:
        """Move to the bookmark in ``slot`` (1-9) if its directory still exists."""
        bookmark = self.bookmarks.get(slot)
        if bookmark is None:
            return False
        path = bookmark.path
        if not self.services.is_directory(path):
            self.add_output(f"Error: {path} no longer exists")
            return False
        self.add_output(f"cd {path}")
        self.set_working_directory(path)
        self.bookmarks.touch(path)
        return True


__all__ = [
    "Mode",
    "Session",
    "SessionServices",
]
