"""Main-loop ordering: status folding, dirty-driven renders, and key dispatch."""

from __future__ import annotations

import os
import time
import unittest
from pathlib import Path
from unittest import mock

from jerm.bookmarks import Bookmark, BookmarkIndex, BookmarkStore
from jerm.git_status import RepoStatus
from jerm.render import RenderOptions
from jerm.runtime.loop import RuntimeLoopTiming, StatusSync, run_main_loop
from jerm.runtime.status_worker import StatusReady
from jerm.session import Session, SessionServices
from jerm.shell import CommandResult


class _MemoryStore(BookmarkStore):
    def __init__(self) -> None:
        super().__init__(Path("/nonexistent/bookmarks.json"))

    def load(self) -> list[Bookmark]:
        return []

    def save(self, bookmarks: list[Bookmark]) -> None:
        return None


class _FakePoller:
    def __init__(self) -> None:
        self.pending: list[StatusReady] = []
        self.requests: list[tuple[Path, bool]] = []

    def start(self) -> None:
        return None

    def request_update(self, directory: Path, also_sync: bool = False) -> None:
        self.requests.append((directory, also_sync))

    def drain(self) -> list[StatusReady]:
        out, self.pending = self.pending, []
        return out


def _session() -> Session:
    services = SessionServices(
        run_command=lambda command, cwd: CommandResult(stdout=[f"ran {command}"]),
        home=Path("/home/tester"),
    )
    return Session(cwd=Path("/work"), bookmarks=BookmarkIndex(_MemoryStore()), services=services)


class RunMainLoopTests(unittest.TestCase):
    def _run(
        self,
        session: Session,
        keys: list[str],
        poller: _FakePoller | None = None,
        clock=None,
    ) -> mock.Mock:
        poller = poller or _FakePoller()
        status_sync = StatusSync(poller, 30.0, clock=lambda: 0.0)
        terminal = mock.MagicMock()
        pending = list(keys)

        def _read_key(*_args, **_kwargs) -> str:
            if not pending:
                session.should_quit = True
                return ""
            return pending.pop(0)

        with mock.patch("jerm.runtime.loop.read_key", side_effect=_read_key), mock.patch(
            "jerm.runtime.loop.render_frame"
        ) as render_frame, mock.patch(
            "jerm.runtime.loop.shutil.get_terminal_size",
            return_value=os.terminal_size((80, 24)),
        ):
            run_main_loop(
                session,
                terminal,
                0,
                status_sync,
                RenderOptions(),
                RuntimeLoopTiming(),
                clock=clock or time.monotonic,
            )
        terminal.raw_mode.assert_called_once_with()
        return render_frame

    def test_keys_are_dispatched_until_quit(self) -> None:
        session = _session()
        self._run(session, ["l", "s", "ENTER", "CTRL_D"])
        self.assertEqual(session.scrollback, ["/work $ ls", "ran ls"])
        self.assertTrue(session.should_quit)

    def test_renders_only_when_dirty(self) -> None:
        session = _session()
        render_frame = self._run(session, ["", "", "x"])
        # Initial frame plus one after the inserted character.
        self.assertEqual(render_frame.call_count, 2)
        self.assertEqual(render_frame.call_args.args[1:3], (80, 24))

    def test_idle_session_is_redrawn_for_age_labels(self) -> None:
        session = _session()
        ticks = iter([0.0, 30.0, 60.0, 90.0])
        render_frame = self._run(session, ["", "", ""], clock=lambda: next(ticks))
        # Initial frame plus the one due at 60 seconds.
        self.assertEqual(render_frame.call_count, 2)

    def test_arrived_status_is_applied_before_render(self) -> None:
        session = _session()
        poller = _FakePoller()
        poller.pending = [StatusReady(Path("/work"), RepoStatus(branch="main"))]
        self._run(session, [], poller)
        self.assertEqual(session.repo_status, RepoStatus(branch="main"))


if __name__ == "__main__":
    unittest.main()
