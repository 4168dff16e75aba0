"""Classify a submitted command line into a session intent.

Only a handful of words are handled by the session itself; every other line
goes to the external shell untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

BOOKMARK_COMMAND = "jerm"
NAVIGATOR_FLAGS = frozenset({"-list", "--list"})
_HEAD_SPLIT_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class ChangeDirectory:
    """``target`` is ``None`` for a bare ``cd`` (meaning home)."""

    target: str | None


@dataclass(frozen=True)
class OpenNavigator:
    pass


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Exit:
    pass


@dataclass(frozen=True)
class SaveBookmark:
    pass


@dataclass(frozen=True)
class OpenBookmarkPicker:
    pass


@dataclass(frozen=True)
class Shell:
    command: str


Intent = Empty | ChangeDirectory | OpenNavigator | Clear | Exit | SaveBookmark | OpenBookmarkPicker | Shell


def classify(line: str) -> Intent:
    """Map any input line onto exactly one intent."""
    trimmed = line.strip()
    if not trimmed:
        return Empty()

    parts = _HEAD_SPLIT_RE.split(trimmed, maxsplit=1)
    head = parts[0]
    rest = parts[1].strip() if len(parts) > 1 else None

    if head == "cd":
        if rest in NAVIGATOR_FLAGS:
            return OpenNavigator()
        return ChangeDirectory(rest)
    if head == "clear":
        return Clear()
    if head in {"exit", "quit"}:
        return Exit()
    if head == BOOKMARK_COMMAND:
        if rest == "save":
            return SaveBookmark()
        if rest == "goto":
            return OpenBookmarkPicker()
    return Shell(trimmed)


__all__ = [
    "BOOKMARK_COMMAND",
    "Intent",
    "Empty",
    "ChangeDirectory",
    "OpenNavigator",
    "Clear",
    "Exit",
    "SaveBookmark",
    "OpenBookmarkPicker",
    "Shell",
    "classify",
]
