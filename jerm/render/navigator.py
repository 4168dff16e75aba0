"""Directory-navigator overlay drawn in place of the terminal view."""

from __future__ import annotations

from ..navigator import DirectoryBrowser, DirectoryEntry
from ..ui_theme import Icons, UITheme
from ..ansi import pad_ansi_line, truncate_left

NAVIGATOR_HINTS = (
    "↑↓ move  → enter  ← up",
    "Enter confirm  Esc cancel",
)
HEADER_ROWS = 1


def navigator_list_height(height: int) -> int:
    return max(1, height - HEADER_ROWS - len(NAVIGATOR_HINTS))


def _entry_label(entry: DirectoryEntry, icons: Icons) -> str:
    icon = icons.up_arrow if entry.is_parent else icons.folder
    if not icon or icon == entry.name:
        return entry.name
    return f"{icon} {entry.name}"


def navigator_rows(
    browser: DirectoryBrowser,
    width: int,
    height: int,
    theme: UITheme,
    icons: Icons,
) -> list[str]:
    """Return exactly ``height`` rows: header, entry window, and key hints.

    The browser's scroll offset is brought in line with the list height first.
    """
    list_height = navigator_list_height(height)
    browser.adjust_scroll(list_height)

    prefix = f"{icons.folder} " if icons.folder else ""
    header = truncate_left(str(browser.current_path), max(1, width - len(prefix)))
    rows = [pad_ansi_line(f"{theme.title}{prefix}{header}{theme.reset}", width)]

    window = browser.visible_window(list_height)
    if not browser.entries:
        rows.append(pad_ansi_line(f"{theme.dim}(no subdirectories){theme.reset}", width))
    for index, entry in window:
        label = _entry_label(entry, icons)
        color = theme.nav_parent if entry.is_parent else theme.nav_dir
        if index == browser.selected_index:
            rows.append(pad_ansi_line(f"{theme.reverse}> {label}{theme.reset}", width))
        else:
            rows.append(pad_ansi_line(f"  {color}{label}{theme.reset}", width))

    body_rows = HEADER_ROWS + list_height
    rows = rows[:body_rows]
    rows.extend(" " * width for _ in range(body_rows - len(rows)))
    rows.extend(pad_ansi_line(f"{theme.dim}{hint}{theme.reset}", width) for hint in NAVIGATOR_HINTS)
    return rows[:height]


__all__ = ["NAVIGATOR_HINTS", "navigator_list_height", "navigator_rows"]
