"""Session bootstrap: builds collaborators and hands them to the loop."""

from __future__ import annotations

import functools
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from ..bookmarks import BookmarkIndex, BookmarkStore
from ..config import DEFAULT_SIDEBAR_WIDTH, DEFAULT_SYNC_INTERVAL_SECONDS
from ..highlight import DEFAULT_STYLE, normalize_style
from ..render import RenderOptions
from ..session import Session, SessionServices
from ..shell import default_shell, resolve_cd_path, run_command
from ..ui_theme import resolve_icons, resolve_theme
from .loop import RuntimeLoopTiming, StatusSync, run_main_loop
from .status_worker import StatusPoller
from .terminal import TerminalController


@dataclass(frozen=True)
class AppSettings:
    """Effective settings after merging config file, env, and CLI flags."""

    shell: str | None = None
    theme: str | None = None
    style: str = DEFAULT_STYLE
    no_color: bool = False
    sync_interval_seconds: float = DEFAULT_SYNC_INTERVAL_SECONDS
    sidebar_width: int = DEFAULT_SIDEBAR_WIDTH
    nerd_fonts: bool = False


def build_session(
    start_dir: Path,
    settings: AppSettings,
    poller: StatusPoller,
    bookmark_store: BookmarkStore | None = None,
) -> Session:
    """Wire a session whose status requests go to ``poller``."""
    interpreter = settings.shell or default_shell()
    services = SessionServices(
        run_command=functools.partial(run_command, shell=interpreter),
        resolve_path=resolve_cd_path,
        request_status=lambda directory, also_sync: poller.request_update(directory, also_sync),
    )
    bookmarks = BookmarkIndex(bookmark_store if bookmark_store is not None else BookmarkStore())
    return Session(cwd=start_dir, bookmarks=bookmarks, services=services)


def build_render_options(settings: AppSettings) -> RenderOptions:
    return RenderOptions(
        theme=resolve_theme(settings.theme, no_color=settings.no_color),
        icons=resolve_icons(settings.nerd_fonts),
        style=normalize_style(settings.style),
        no_color=settings.no_color,
        sidebar_width=settings.sidebar_width,
    )


def run_app(start_dir: Path, settings: AppSettings) -> None:
    """Run the interactive session in ``start_dir`` until the user quits."""
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("jerm needs an interactive terminal")

    poller = StatusPoller()
    session = build_session(start_dir, settings, poller)
    status_sync = StatusSync(poller, settings.sync_interval_seconds)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    timing = RuntimeLoopTiming()

    logger.info("Session started in {} (pid {})", start_dir, os.getpid())
    status_sync.start(session)
    try:
        run_main_loop(session, terminal, stdin_fd, status_sync, build_render_options(settings), timing)
    finally:
        poller.stop()
        logger.info("Session ended in {}", session.cwd)


__all__ = ["AppSettings", "build_render_options", "build_session", "run_app"]
