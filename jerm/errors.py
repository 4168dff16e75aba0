"""Exception types raised by jerm collaborators.

The session never lets these escape the event loop: each one is turned into a
scrollback line or silently dropped, depending on where it surfaces.
"""

from __future__ import annotations


class JermError(Exception):
    """Base class for all jerm-specific failures."""


class CommandLaunchError(JermError):
    """The shell interpreter could not be started for a command line."""


class PathResolutionError(JermError):
    """A change-directory target could not be turned into a directory."""

    label = "Invalid path"

    def __init__(self, token: str) -> None:
        super().__init__(token)
        self.token = token

    def __str__(self) -> str:
        return f"{self.label}: {self.token}"


class DirectoryNotFound(PathResolutionError):
    label = "Directory not found"


class NotADirectory(PathResolutionError):
    label = "Not a directory"


class InvalidPath(PathResolutionError):
    label = "Invalid path"


class BookmarkStoreError(JermError):
    """Bookmark document could not be read or written."""


__all__ = [
    "JermError",
    "CommandLaunchError",
    "PathResolutionError",
    "DirectoryNotFound",
    "NotADirectory",
    "InvalidPath",
    "BookmarkStoreError",
]
