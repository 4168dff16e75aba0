"""Bookmark ranking, slot lookup, persistence, and age labels."""

from __future__ import annotations

import json
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest import mock

from jerm import config
from jerm.bookmarks import (
    Bookmark,
    BookmarkIndex,
    BookmarkStore,
    abbreviate_home,
    format_time_ago,
)
from jerm.errors import BookmarkStoreError

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class _Clock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class _MemoryStore(BookmarkStore):
    def __init__(self, bookmarks: list[Bookmark] | None = None, fail_save: bool = False) -> None:
        super().__init__(Path("/nonexistent/bookmarks.json"))
        self.saved: list[list[Bookmark]] = []
        self._initial = list(bookmarks or [])
        self.fail_save = fail_save

    def load(self) -> list[Bookmark]:
        return list(self._initial)

    def save(self, bookmarks: list[Bookmark]) -> None:
        if self.fail_save:
            raise BookmarkStoreError("disk full")
        self.saved.append(list(bookmarks))


class BookmarkIndexTests(unittest.TestCase):
    def test_ranked_by_last_access_and_touch_moves_to_front(self) -> None:
        clock = _Clock(T0)
        index = BookmarkIndex(_MemoryStore(), now=clock)
        for name in ("one", "two", "three"):
            index.add(Path(f"/{name}"))
            clock.advance(minutes=1)

        self.assertEqual([b.path for b in index.ranked()], [Path("/three"), Path("/two"), Path("/one")])

        self.assertTrue(index.touch(Path("/one")))
        self.assertEqual(index.ranked()[0].path, Path("/one"))
        self.assertEqual(index.get(1).path, Path("/one"))

    def test_slots_are_one_based_and_bounded(self) -> None:
        clock = _Clock(T0)
        index = BookmarkIndex(_MemoryStore(), now=clock)
        for idx in range(12):
            index.add(Path(f"/d{idx}"))
            clock.advance(seconds=1)

        self.assertIsNone(index.get(0))
        self.assertIsNone(index.get(10))
        self.assertEqual(index.get(1).path, Path("/d11"))
        self.assertEqual(index.get(9).path, Path("/d3"))
        self.assertEqual(index.slot_count(), 9)
        self.assertEqual(len(index), 12)

    def test_get_beyond_count_is_none(self) -> None:
        index = BookmarkIndex(_MemoryStore(), now=_Clock(T0))
        index.add(Path("/only"))
        self.assertIsNone(index.get(2))

    def test_add_existing_path_refreshes_instead_of_duplicating(self) -> None:
        clock = _Clock(T0)
        index = BookmarkIndex(_MemoryStore(), now=clock)
        index.add(Path("/a"))
        clock.advance(hours=1)
        refreshed = index.add(Path("/a"))

        self.assertEqual(len(index), 1)
        self.assertEqual(refreshed.created_at, T0)
        self.assertEqual(refreshed.last_accessed, T0 + timedelta(hours=1))

    def test_every_change_is_written_through(self) -> None:
        store = _MemoryStore()
        index = BookmarkIndex(store, now=_Clock(T0))
        index.add(Path("/a"))
        index.touch(Path("/a"))
        index.remove(Path("/a"))
        self.assertEqual(len(store.saved), 3)
        self.assertEqual(store.saved[-1], [])

    def test_touch_and_remove_unknown_path(self) -> None:
        store = _MemoryStore()
        index = BookmarkIndex(store, now=_Clock(T0))
        self.assertFalse(index.touch(Path("/missing")))
        self.assertFalse(index.remove(Path("/missing")))
        self.assertEqual(store.saved, [])

    def test_save_failure_keeps_bookmark_in_memory(self) -> None:
        index = BookmarkIndex(_MemoryStore(fail_save=True), now=_Clock(T0))
        index.add(Path("/kept"))
        self.assertEqual(index.get(1).path, Path("/kept"))

    def test_unreadable_store_starts_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bookmarks.json"
            path.write_text("{not json", encoding="utf-8")
            index = BookmarkIndex(BookmarkStore(path))
        self.assertTrue(index.is_empty())

    def test_unstattable_store_location_starts_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            too_long = Path(tmp) / ("a" * 300) / "bookmarks.json"
            index = BookmarkIndex(BookmarkStore(too_long))
        self.assertTrue(index.is_empty())


class BookmarkStoreTests(unittest.TestCase):
    def test_missing_document_loads_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = BookmarkStore(Path(tmp) / "absent.json")
            self.assertEqual(store.load(), [])

    def test_save_then_load_preserves_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "bookmarks.json"
            store = BookmarkStore(path)
            bookmark = Bookmark(Path("/srv/app"), T0, T0 + timedelta(days=2))
            store.save([bookmark])

            data = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(data["shortcuts"][0]["path"], "/srv/app")
            self.assertEqual(store.load(), [bookmark])

    def test_malformed_records_are_dropped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bookmarks.json"
            good = {"path": "/ok", "created_at": T0.isoformat(), "last_accessed": T0.isoformat()}
            path.write_text(
                json.dumps(
                    {
                        "shortcuts": [
                            good,
                            {"path": "/no-dates"},
                            {"path": 3, "created_at": T0.isoformat(), "last_accessed": T0.isoformat()},
                            {"path": "/bad-date", "created_at": "yesterday", "last_accessed": T0.isoformat()},
                            "junk",
                        ]
                    }
                ),
                encoding="utf-8",
            )
            loaded = BookmarkStore(path).load()
        self.assertEqual([bookmark.path for bookmark in loaded], [Path("/ok")])

    def test_wrong_layout_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bookmarks.json"
            path.write_text("[1, 2]", encoding="utf-8")
            with self.assertRaises(BookmarkStoreError):
                BookmarkStore(path).load()

    def test_naive_timestamps_are_read_as_utc(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bookmarks.json"
            record = {"path": "/x", "created_at": "2026-01-01T12:00:00", "last_accessed": "2026-01-01T12:00:00Z"}
            path.write_text(json.dumps({"shortcuts": [record]}), encoding="utf-8")
            loaded = BookmarkStore(path).load()
        self.assertEqual(loaded[0].created_at, T0)
        self.assertEqual(loaded[0].last_accessed, T0)

    def test_default_location_follows_config_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "bookmarks.json"
            with mock.patch.object(config, "BOOKMARKS_PATH", target):
                store = BookmarkStore()
                store.save([Bookmark(Path("/p"), T0, T0)])
                self.assertTrue(target.exists())
                self.assertEqual(store.path, target)

    def test_unwritable_location_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("x", encoding="utf-8")
            store = BookmarkStore(blocker / "bookmarks.json")
            with self.assertRaises(BookmarkStoreError):
                store.save([])

    def test_unreadable_location_raises_store_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = BookmarkStore(Path(tmp) / ("a" * 300) / "bookmarks.json")
            with self.assertRaises(BookmarkStoreError):
                store.load()


class TimeAgoTests(unittest.TestCase):
    def test_buckets(self) -> None:
        cases = [
            (timedelta(seconds=0), "now"),
            (timedelta(seconds=59), "now"),
            (timedelta(seconds=60), "1m"),
            (timedelta(minutes=59), "59m"),
            (timedelta(hours=1), "1h"),
            (timedelta(hours=23), "23h"),
            (timedelta(days=1), "1d"),
            (timedelta(days=6), "6d"),
            (timedelta(days=7), "1w"),
            (timedelta(days=27), "3w"),
            (timedelta(days=28), "1mo"),
            (timedelta(days=59), "1mo"),
            (timedelta(days=90), "3mo"),
        ]
        for delta, expected in cases:
            with self.subTest(delta=delta):
                self.assertEqual(format_time_ago(T0, T0 + delta), expected)

    def test_bookmark_display_helpers(self) -> None:
        home = Path("/home/user")
        bookmark = Bookmark(home / "src", T0, T0)
        self.assertEqual(bookmark.display_name(home), "~/src")
        self.assertEqual(bookmark.time_ago(T0 + timedelta(minutes=5)), "5m")

    def test_abbreviate_home_requires_component_boundary(self) -> None:
        home = Path("/home/user")
        self.assertEqual(abbreviate_home(home, home), "~")
        self.assertEqual(abbreviate_home(Path("/home/username"), home), "/home/username")
        self.assertEqual(abbreviate_home(Path("/etc"), home), "/etc")


if __name__ == "__main__":
    unittest.main()
