"""Repository status queries for the status line.

Each helper shells out to ``git -C <dir>``. Failures never raise; status is
advisory, so a broken or missing repository, or a git call that times out,
just means no snapshot.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

GIT_QUERY_TIMEOUT_SECONDS = 2.0
GIT_FETCH_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True)
class RepoStatus:
    branch: str
    is_detached: bool = False
    is_dirty: bool = False
    ahead: int = 0
    behind: int = 0


def _run_git(
    directory: Path,
    args: list[str],
    timeout_seconds: float = GIT_QUERY_TIMEOUT_SECONDS,
) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            ["git", "-C", str(directory), *args],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError):
        return None


def _stdout_if_ok(proc: subprocess.CompletedProcess[str] | None) -> str | None:
    if proc is None or proc.returncode != 0:
        return None
    return proc.stdout.strip()


def is_git_repo(directory: Path) -> bool:
    return _stdout_if_ok(_run_git(directory, ["rev-parse", "--git-dir"])) is not None


def branch_or_hash(directory: Path) -> tuple[str, bool] | None:
    """Return ``(label, is_detached)`` for HEAD.

    A detached HEAD is labelled with its short commit hash.
    """
    branch = _stdout_if_ok(_run_git(directory, ["rev-parse", "--abbrev-ref", "HEAD"]))
    if not branch:
        return None
    if branch != "HEAD":
        return branch, False
    short_hash = _stdout_if_ok(_run_git(directory, ["rev-parse", "--short", "HEAD"]))
    if not short_hash:
        return None
    return short_hash, True


def is_dirty(directory: Path) -> bool | None:
    """Return whether the work tree has changes, or ``None`` if git failed."""
    output = _stdout_if_ok(_run_git(directory, ["status", "--porcelain"]))
    if output is None:
        return None
    return bool(output)


def ahead_behind(directory: Path) -> tuple[int, int] | None:
    """Return ``(ahead, behind)`` relative to upstream, ``(0, 0)`` without one.

    ``None`` means git could not be run or timed out.
    """
    proc = _run_git(directory, ["rev-list", "--left-right", "--count", "HEAD...@{upstream}"])
    if proc is None:
        return None
    output = _stdout_if_ok(proc)
    if not output:
        return 0, 0
    parts = output.split()
    if len(parts) != 2:
        return 0, 0
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return 0, 0


def sync_remote(directory: Path) -> bool:
    """Best-effort ``git fetch`` so ahead/behind counts reflect the remote."""
    proc = _run_git(directory, ["fetch", "--quiet"], timeout_seconds=GIT_FETCH_TIMEOUT_SECONDS)
    return proc is not None and proc.returncode == 0


def query_repo_status(directory: Path) -> RepoStatus | None:
    """Build a fresh snapshot for ``directory``, or ``None`` outside a repository."""
    if not is_git_repo(directory):
        return None
    head = branch_or_hash(directory)
    if head is None:
        return None
    label, detached = head
    counts = ahead_behind(directory)
    dirty = is_dirty(directory)
    if counts is None or dirty is None:
        return None
    ahead, behind = counts
    return RepoStatus(
        branch=label,
        is_detached=detached,
        is_dirty=dirty,
        ahead=ahead,
        behind=behind,
    )


__all__ = [
    "RepoStatus",
    "ahead_behind",
    "branch_or_hash",
    "is_dirty",
    "is_git_repo",
    "query_repo_status",
    "sync_remote",
]
