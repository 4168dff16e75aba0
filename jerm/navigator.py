"""Directory browser behind ``cd -list``.

Keeps a selection cursor over one directory's visible subdirectories and the
scroll offset that keeps that selection on screen.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

PARENT_ENTRY_NAME = ".."


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    path: Path
    is_dir: bool

    @property
    def is_parent(self) -> bool:
        return self.name == PARENT_ENTRY_NAME


def _parent_of(directory: Path) -> Path | None:
    parent = directory.parent
    if parent == directory:
        return None
    return parent


def list_directories(directory: Path) -> list[DirectoryEntry]:
    """List visible subdirectories of ``directory`` for the browser.

    A synthetic ``..`` entry leads, when ``directory`` has a parent. Hidden
    names are skipped and the rest sort case-insensitively. An unreadable
    directory yields only the parent entry.
    """
    entries: list[DirectoryEntry] = []
    parent = _parent_of(directory)
    if parent is not None:
        entries.append(DirectoryEntry(PARENT_ENTRY_NAME, parent, True))

    children: list[DirectoryEntry] = []
    try:
        with os.scandir(directory) as scanned:
            for child in scanned:
                name = child.name
                if name.startswith("."):
                    continue
                try:
                    is_dir = child.is_dir()
                except OSError:
                    continue
                if not is_dir:
                    continue
                children.append(DirectoryEntry(name, Path(child.path), True))
    except OSError:
        return entries

    children.sort(key=lambda entry: entry.name.lower())
    entries.extend(children)
    return entries


@dataclass
class DirectoryBrowser:
    """Selection and scroll bookkeeping over a directory listing."""

    current_path: Path = field(default_factory=lambda: Path("/"))
    entries: list[DirectoryEntry] = field(default_factory=list)
    selected_index: int = 0
    scroll_offset: int = 0
    visible_height: int = 1
    list_directory: Callable[[Path], list[DirectoryEntry]] = list_directories

    def open(self, path: Path) -> None:
        """Browse ``path`` from the top."""
        self.current_path = path
        self.selected_index = 0
        self.scroll_offset = 0
        self.refresh()

    def refresh(self) -> None:
        """Re-list the current directory, clamping the selection into range."""
        self.entries = list(self.list_directory(self.current_path))
        if self.selected_index >= len(self.entries):
            self.selected_index = max(0, len(self.entries) - 1)
        self.adjust_scroll(self.visible_height)

    def move_up(self) -> None:
        """Select the previous entry, stopping at the first."""
        if self.selected_index > 0:
            self.selected_index -= 1
        self.adjust_scroll(self.visible_height)

    def move_down(self) -> None:
        """Select the next entry, stopping at the last."""
        if self.selected_index < len(self.entries) - 1:
            self.selected_index += 1
        self.adjust_scroll(self.visible_height)

    def adjust_scroll(self, visible_height: int) -> None:
        """Shift ``scroll_offset`` so the selection is inside the window.

        The offset is also pulled back when the window grows, so free rows
        below the last entry are filled from above.
        """
        self.visible_height = max(1, visible_height)
        if self.selected_index < self.scroll_offset:
            self.scroll_offset = self.selected_index
        elif self.selected_index >= self.scroll_offset + self.visible_height:
            self.scroll_offset = self.selected_index - self.visible_height + 1
        max_offset = max(0, len(self.entries) - self.visible_height)
        self.scroll_offset = min(self.scroll_offset, max_offset)

    def enter_selected(self) -> None:
        """Descend into the selected subdirectory; ``..`` is ignored here."""
        entry = self.selected_entry()
        if entry is None or not entry.is_dir or entry.is_parent:
            return
        self.open(entry.path)

    def go_up(self) -> None:
        """Browse the parent directory; a no-op at the filesystem root."""
        parent = _parent_of(self.current_path)
        if parent is None:
            return
        self.open(parent)

    def selected_entry(self) -> DirectoryEntry | None:
        """Return the highlighted entry, or ``None`` for an empty listing."""
        if 0 <= self.selected_index < len(self.entries):
            return self.entries[self.selected_index]
        return None

    def selected_path(self) -> Path | None:
        entry = self.selected_entry()
        return entry.path if entry is not None else None

    def visible_window(self, height: int) -> list[tuple[int, DirectoryEntry]]:
        """Return up to ``height`` ``(index, entry)`` pairs from the scroll offset."""
        start = self.scroll_offset
        stop = start + max(0, height)
        return list(enumerate(self.entries))[start:stop]


__all__ = [
    "PARENT_ENTRY_NAME",
    "DirectoryEntry",
    "DirectoryBrowser",
    "list_directories",
]
