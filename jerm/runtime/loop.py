"""Main interactive event loop.

Each iteration folds in finished status snapshots, triggers the periodic
remote sync, renders when something changed or the age labels are due, then
reads at most one key.
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..input import dispatch_key, read_key
from ..render import RenderOptions, render_frame
from ..session import Session
from .status_worker import StatusPoller
from .terminal import TerminalController


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 120
    age_refresh_seconds: float = 60.0


class StatusSync:
    """Feeds status snapshots into the session and schedules remote syncs."""

    def __init__(
        self,
        poller: StatusPoller,
        sync_interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.poller = poller
        self.sync_interval_seconds = sync_interval_seconds
        self._clock = clock
        self.last_sync_request = clock()

    def start(self, session: Session) -> None:
        self.poller.start()
        self.poller.request_update(session.cwd, also_sync=False)
        self.last_sync_request = self._clock()

    def tick(self, session: Session) -> None:
        """Apply the newest arrived snapshot and request a sync when one is due."""
        arrived = self.poller.drain()
        if arrived:
            session.apply_status(arrived[-1].status)
        now = self._clock()
        if now - self.last_sync_request >= self.sync_interval_seconds:
            self.poller.request_update(session.cwd, also_sync=True)
            self.last_sync_request = now


def run_main_loop(
    session: Session,
    terminal: TerminalController,
    stdin_fd: int,
    status_sync: StatusSync,
    options: RenderOptions,
    timing: RuntimeLoopTiming,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """Run until the session asks to quit.

    An idle session is still redrawn every ``age_refresh_seconds`` so the
    bookmark age labels keep counting.
    """
    last_size: tuple[int, int] | None = None
    last_render: float | None = None
    with terminal.raw_mode():
        while not session.should_quit:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                session.dirty = True

            status_sync.tick(session)

            now = clock()
            if last_render is None or now - last_render >= timing.age_refresh_seconds:
                session.dirty = True
            if session.dirty:
                render_frame(session, term.columns, term.lines, options)
                session.dirty = False
                last_render = now

            key = read_key(stdin_fd, timeout_ms=timing.key_timeout_ms)
            if not key:
                continue
            dispatch_key(key, session)


__all__ = ["RuntimeLoopTiming", "StatusSync", "run_main_loop"]
