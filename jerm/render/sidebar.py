"""Bookmark sidebar rows."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from ..bookmarks import MAX_SLOTS, Bookmark
from ..ui_theme import UITheme
from ..ansi import display_width, pad_ansi_line, truncate_left

SIDEBAR_TITLE = "Bookmarks"


def format_bookmark_row(
    slot: int,
    bookmark: Bookmark,
    width: int,
    theme: UITheme,
    home: Path,
    now: datetime,
    selected: bool = False,
) -> str:
    """Render ``N <path> <age>`` with the age flush right."""
    age = bookmark.time_ago(now)
    name_width = max(1, width - 2 - 1 - display_width(age))
    name = truncate_left(bookmark.display_name(home), name_width)
    gap = " " * max(1, width - 2 - display_width(name) - display_width(age))
    if selected:
        return pad_ansi_line(f"{theme.reverse}{slot} {name}{gap}{age}{theme.reset}", width)
    return pad_ansi_line(
        f"{theme.bookmark_slot}{slot}{theme.reset} {name}{gap}{theme.bookmark_age}{age}{theme.reset}",
        width,
    )


def sidebar_rows(
    bookmarks: list[Bookmark],
    width: int,
    height: int,
    theme: UITheme,
    home: Path,
    now: datetime,
    selected_index: int | None = None,
) -> list[str]:
    """Return exactly ``height`` padded sidebar rows."""
    rows = [pad_ansi_line(f"{theme.title}{SIDEBAR_TITLE}{theme.reset}", width)]
    if not bookmarks:
        rows.append(pad_ansi_line(f"{theme.dim}No bookmarks{theme.reset}", width))
        rows.append(pad_ansi_line(f"{theme.dim}Use 'jerm save'{theme.reset}", width))
    else:
        for idx, bookmark in enumerate(bookmarks[:MAX_SLOTS]):
            rows.append(
                format_bookmark_row(
                    idx + 1,
                    bookmark,
                    width,
                    theme,
                    home,
                    now,
                    selected=selected_index == idx,
                )
            )
        rows.append(pad_ansi_line(f"{theme.dim}Alt+1-9 jump{theme.reset}", width))

    blank = " " * width
    rows = rows[:height]
    rows.extend(blank for _ in range(height - len(rows)))
    return rows


__all__ = ["SIDEBAR_TITLE", "format_bookmark_row", "sidebar_rows"]
