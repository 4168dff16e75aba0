"""Bottom status line: mode, working directory, repository snapshot."""

from __future__ import annotations

from pathlib import Path

from ..bookmarks import abbreviate_home
from ..git_status import RepoStatus
from ..session import Mode
from ..ui_theme import Icons, UITheme
from ..ansi import pad_ansi_line

MODE_LABELS = {
    Mode.NORMAL: "NORMAL",
    Mode.NAVIGATING: "NAV",
    Mode.PICKING_BOOKMARK: "GOTO",
}


def format_repo_status(status: RepoStatus, icons: Icons) -> str:
    """Plain ``<branch>[ (detached)][ *][ ↑N][ ↓N]`` summary."""
    label = f"{icons.git_branch} {status.branch}" if icons.git_branch else status.branch
    parts = [label]
    if status.is_detached:
        parts.append("(detached)")
    if status.is_dirty:
        parts.append("*")
    if status.ahead:
        parts.append(f"↑{status.ahead}")
    if status.behind:
        parts.append(f"↓{status.behind}")
    return " ".join(parts)


def _directory_label(cwd: Path, home: Path, icons: Icons) -> str:
    shown = abbreviate_home(cwd, home)
    icon = icons.home if cwd == home else icons.folder
    if not icon or icon == shown:
        return shown
    return f"{icon} {shown}"


def build_status_line(
    mode: Mode,
    cwd: Path,
    home: Path,
    repo_status: RepoStatus | None,
    width: int,
    theme: UITheme,
    icons: Icons,
) -> str:
    usable = max(1, width - 1)
    text = f"{theme.status_mode} {MODE_LABELS[mode]} {theme.reset} {_directory_label(cwd, home, icons)}"
    if repo_status is not None:
        color = theme.status_dirty if repo_status.is_dirty else theme.status_branch
        text += f"  {color}{format_repo_status(repo_status, icons)}{theme.reset}"
    return pad_ansi_line(text, usable)


__all__ = ["MODE_LABELS", "build_status_line", "format_repo_status"]
