"""Session and render-option wiring done before the loop starts."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from jerm.bookmarks import BookmarkStore
from jerm.runtime.app import AppSettings, build_render_options, build_session, run_app
from jerm.ui_theme import OCEAN_THEME, PLAIN_THEME


class _RecordingPoller:
    def __init__(self) -> None:
        self.requests: list[tuple[Path, bool]] = []

    def request_update(self, directory: Path, also_sync: bool = False) -> None:
        self.requests.append((directory, also_sync))


class AppWiringTests(unittest.TestCase):
    def test_session_status_requests_reach_poller(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "sub").mkdir()
            poller = _RecordingPoller()
            session = build_session(
                root,
                AppSettings(shell="sh"),
                poller,
                bookmark_store=BookmarkStore(root / "bookmarks.json"),
            )
            session.change_directory("sub")
        self.assertEqual(poller.requests, [(root / "sub", False)])

    def test_configured_shell_runs_commands(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            session = build_session(
                root,
                AppSettings(shell="sh"),
                _RecordingPoller(),
                bookmark_store=BookmarkStore(root / "bookmarks.json"),
            )
            session.run_shell("echo $0")
        self.assertEqual(session.scrollback, ["sh"])

    def test_render_options_follow_settings(self) -> None:
        options = build_render_options(
            AppSettings(theme="ocean", style="no-such-style", sidebar_width=30, nerd_fonts=True)
        )
        self.assertIs(options.theme, OCEAN_THEME)
        self.assertEqual(options.style, "monokai")
        self.assertEqual(options.sidebar_width, 30)
        self.assertEqual(options.icons.folder, "\uf07b")

    def test_no_color_forces_plain_theme(self) -> None:
        options = build_render_options(AppSettings(theme="ocean", no_color=True))
        self.assertIs(options.theme, PLAIN_THEME)
        self.assertTrue(options.no_color)

    def test_run_app_requires_a_terminal(self) -> None:
        with mock.patch("jerm.runtime.app.sys.stdin") as stdin:
            stdin.isatty.return_value = False
            with self.assertRaises(SystemExit) as ctx:
                run_app(Path("/"), AppSettings())
        self.assertEqual(str(ctx.exception), "jerm needs an interactive terminal")


if __name__ == "__main__":
    unittest.main()
