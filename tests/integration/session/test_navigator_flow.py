"""End-to-end key flows over a real directory tree and bookmark file."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from jerm.bookmarks import BookmarkStore
from jerm.input import dispatch_key
from jerm.render import RenderOptions, compose_frame
from jerm.runtime.app import AppSettings, build_session
from jerm.session import Mode, Session
from jerm.ui_theme import PLAIN_THEME


class _RecordingPoller:
    def __init__(self) -> None:
        self.requests: list[tuple[Path, bool]] = []

    def request_update(self, directory: Path, also_sync: bool = False) -> None:
        self.requests.append((directory, also_sync))


def _type_line(session: Session, line: str) -> None:
    for ch in line:
        dispatch_key(ch, session)
    dispatch_key("ENTER", session)


class NavigatorFlowTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name).resolve()
        for name in ("alpha", "beta", ".hidden"):
            (self.root / "project" / name).mkdir(parents=True)
        (self.root / "project" / "alpha" / "inner").mkdir()
        (self.root / "project" / "README").write_text("x", encoding="utf-8")
        self.poller = _RecordingPoller()
        self.store = BookmarkStore(self.root / "state" / "bookmarks.json")
        self.session = build_session(
            self.root / "project",
            AppSettings(shell="sh"),
            self.poller,
            bookmark_store=self.store,
        )

    def test_browse_descend_and_confirm(self) -> None:
        session = self.session
        _type_line(session, "cd -list")
        self.assertIs(session.mode, Mode.NAVIGATING)
        self.assertEqual([entry.name for entry in session.browser.entries], ["..", "alpha", "beta"])

        dispatch_key("DOWN", session)
        dispatch_key("RIGHT", session)
        self.assertEqual(session.browser.current_path, self.root / "project" / "alpha")
        dispatch_key("DOWN", session)
        dispatch_key("ENTER", session)

        target = self.root / "project" / "alpha" / "inner"
        self.assertIs(session.mode, Mode.NORMAL)
        self.assertEqual(session.cwd, target)
        self.assertEqual(session.scrollback[-1], f"cd {target}")
        self.assertEqual(self.poller.requests, [(target, False)])

    def test_navigator_frame_then_normal_frame(self) -> None:
        session = self.session
        options = RenderOptions(theme=PLAIN_THEME, no_color=True)
        _type_line(session, "cd -list")
        frame = compose_frame(session, 80, 12, options)
        self.assertIsNone(frame.cursor)
        self.assertTrue(any("> .." in row for row in frame.rows))

        dispatch_key("ESC", session)
        frame = compose_frame(session, 80, 12, options)
        self.assertIsNotNone(frame.cursor)
        self.assertEqual(session.cwd, self.root / "project")

    def test_save_then_jump_back_with_alt_digit(self) -> None:
        session = self.session
        _type_line(session, "jerm save")
        _type_line(session, "cd beta")
        self.assertEqual(session.cwd, self.root / "project" / "beta")

        dispatch_key("ALT_1", session)
        self.assertEqual(session.cwd, self.root / "project")
        self.assertTrue((self.root / "state" / "bookmarks.json").exists())
        self.assertEqual([bookmark.path for bookmark in self.store.load()], [self.root / "project"])

    def test_shell_command_output_lands_in_scrollback(self) -> None:
        session = self.session
        _type_line(session, "echo hello; ls")
        self.assertEqual(session.scrollback[1], "hello")
        self.assertIn("README", session.scrollback)
        self.assertIn("alpha", session.scrollback)


if __name__ == "__main__":
    unittest.main()
