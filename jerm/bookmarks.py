"""Directory bookmarks: the persisted document and the recency-ranked index.

The index is what the session talks to. It ranks bookmarks by last access,
exposes slots 1-9 for the numeric shortcuts, and writes every change through
to the store. A store failure never reaches the session; the bookmark just
lives in memory until the next successful write.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from . import config
from .errors import BookmarkStoreError

MAX_SLOTS = 9


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def abbreviate_home(path: Path, home: Path | None = None) -> str:
    """Render ``path`` with the home directory prefix replaced by ``~``."""
    text = str(path)
    home_text = str(home if home is not None else Path.home())
    if home_text and home_text != "/" and (text == home_text or text.startswith(home_text + "/")):
        return "~" + text[len(home_text):]
    return text


def format_time_ago(then: datetime, now: datetime) -> str:
    """Return a compact age label: ``now``, ``5m``, ``2h``, ``3d``, ``2w``, ``1mo``."""
    seconds = int((now - then).total_seconds())
    if seconds < 60:
        return "now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h"
    days = hours // 24
    if days < 7:
        return f"{days}d"
    weeks = days // 7
    if weeks < 4:
        return f"{weeks}w"
    return f"{max(1, days // 30)}mo"


@dataclass(frozen=True)
class Bookmark:
    path: Path
    created_at: datetime
    last_accessed: datetime

    @classmethod
    def create(cls, path: Path, now: datetime) -> Bookmark:
        return cls(path=path, created_at=now, last_accessed=now)

    def touched(self, now: datetime) -> Bookmark:
        return replace(self, last_accessed=now)

    def display_name(self, home: Path | None = None) -> str:
        return abbreviate_home(self.path, home)

    def time_ago(self, now: datetime | None = None) -> str:
        return format_time_ago(self.last_accessed, now if now is not None else utc_now())


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class BookmarkStore:
    """JSON document ``{"shortcuts": [...]}`` at the per-user config location."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path if self._path is not None else config.BOOKMARKS_PATH

    def load(self) -> list[Bookmark]:
        """Load bookmarks; a missing document yields ``[]``.

        Unreadable or structurally wrong documents raise
        :class:`BookmarkStoreError`. Individual malformed records are dropped.
        """
        path = self.path
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise BookmarkStoreError(f"Failed to read {path}: {exc}") from exc
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise BookmarkStoreError(f"Failed to read {path}: {exc}") from exc
        if not isinstance(data, dict) or not isinstance(data.get("shortcuts"), list):
            raise BookmarkStoreError(f"Unexpected bookmark document layout in {path}")

        bookmarks: list[Bookmark] = []
        for raw in data["shortcuts"]:
            if not isinstance(raw, dict):
                continue
            raw_path = raw.get("path")
            if not isinstance(raw_path, str) or not raw_path:
                continue
            created_at = _parse_timestamp(raw.get("created_at"))
            last_accessed = _parse_timestamp(raw.get("last_accessed"))
            if created_at is None or last_accessed is None:
                continue
            bookmarks.append(Bookmark(Path(raw_path), created_at, last_accessed))
        return bookmarks

    def save(self, bookmarks: list[Bookmark]) -> None:
        """Write ``bookmarks``, raising :class:`BookmarkStoreError` on failure."""
        path = self.path
        payload = {
            "shortcuts": [
                {
                    "path": str(bookmark.path),
                    "last_accessed": bookmark.last_accessed.isoformat(),
                    "created_at": bookmark.created_at.isoformat(),
                }
                for bookmark in bookmarks
            ]
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise BookmarkStoreError(f"Failed to write {path}: {exc}") from exc


class BookmarkIndex:
    """In-memory, recency-ranked view over the bookmark store."""

    def __init__(self, store: BookmarkStore, now: Callable[[], datetime] = utc_now) -> None:
        self._store = store
        self._now = now
        self._bookmarks: list[Bookmark] = []
        self.reload()

    def reload(self) -> None:
        """Replace in-memory bookmarks with the stored ones (empty on failure)."""
        try:
            self._bookmarks = self._store.load()
        except BookmarkStoreError as exc:
            logger.warning("Ignoring unreadable bookmarks: {}", exc)
            self._bookmarks = []

    def _persist(self) -> None:
        try:
            self._store.save(self._bookmarks)
        except BookmarkStoreError as exc:
            logger.warning("Bookmark change kept in memory only: {}", exc)

    def __len__(self) -> int:
        return len(self._bookmarks)

    def is_empty(self) -> bool:
        return not self._bookmarks

    def ranked(self) -> list[Bookmark]:
        """Return bookmarks most-recently-accessed first."""
        return sorted(self._bookmarks, key=lambda bookmark: bookmark.last_accessed, reverse=True)

    def slot_count(self) -> int:
        """Return how many of the numbered slots are filled."""
        return min(len(self._bookmarks), MAX_SLOTS)

    def get(self, slot: int) -> Bookmark | None:
        """Return the bookmark in 1-based ``slot`` (1-9), if any."""
        if slot < 1 or slot > MAX_SLOTS:
            return None
        ranked = self.ranked()
        if slot > len(ranked):
            return None
        return ranked[slot - 1]

    def add(self, path: Path) -> Bookmark:
        """Bookmark ``path``, or refresh its access time if already saved."""
        now = self._now()
        for idx, bookmark in enumerate(self._bookmarks):
            if bookmark.path == path:
                self._bookmarks[idx] = bookmark.touched(now)
                self._persist()
                return self._bookmarks[idx]
        created = Bookmark.create(path, now)
        self._bookmarks.append(created)
        self._persist()
        return created

    def touch(self, path: Path) -> bool:
        """Refresh the access time of the bookmark for ``path``."""
        for idx, bookmark in enumerate(self._bookmarks):
            if bookmark.path == path:
                self._bookmarks[idx] = bookmark.touched(self._now())
                self._persist()
                return True
        return False

    def remove(self, path: Path) -> bool:
        remaining = [bookmark for bookmark in self._bookmarks if bookmark.path != path]
        if len(remaining) == len(self._bookmarks):
            return False
        self._bookmarks = remaining
        self._persist()
        return True


__all__ = [
    "MAX_SLOTS",
    "Bookmark",
    "BookmarkStore",
    "BookmarkIndex",
    "abbreviate_home",
    "format_time_ago",
    "utc_now",
]
