"""Rendering engine for the sidebar + terminal view.

Composes full ANSI frames from session state and writes them in one call.
Composition is kept separate from the write so frames can be inspected.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from datetime import datetime

from ..bookmarks import utc_now
from ..highlight import DEFAULT_STYLE, colorize_command_line
from ..session import Mode, Session
from ..ui_theme import DEFAULT_THEME, Icons, UITheme, resolve_icons
from ..ansi import pad_ansi_line
from .layout import TerminalLayout, layout_terminal_view
from .navigator import navigator_rows
from .sidebar import sidebar_rows
from .status import build_status_line

MIN_MAIN_WIDTH = 20


@dataclass(frozen=True)
class RenderOptions:
    theme: UITheme = DEFAULT_THEME
    icons: Icons = field(default_factory=lambda: resolve_icons(False))
    style: str = DEFAULT_STYLE
    no_color: bool = False
    sidebar_width: int = 25


@dataclass(frozen=True)
class Frame:
    """Composed screen rows and the 1-based terminal cell for the cursor."""

    rows: list[str]
    cursor: tuple[int, int] | None


def split_widths(width: int, sidebar_width: int) -> tuple[int, int]:
    """Return ``(sidebar, main)`` widths; the sidebar collapses on narrow screens."""
    if width - sidebar_width - 1 < MIN_MAIN_WIDTH:
        return 0, max(1, width - 1)
    return sidebar_width, max(1, width - sidebar_width - 1 - 1)


def terminal_layout(session: Session, width: int, height: int, options: RenderOptions) -> TerminalLayout:
    prompt = session.prompt()
    styled_input = colorize_command_line(session.input_buffer, options.style, options.no_color)
    rendered = f"{options.theme.prompt}{prompt}{options.theme.reset}{styled_input}"
    return layout_terminal_view(
        session.scrollback,
        prompt,
        session.input_buffer,
        session.cursor,
        width,
        height,
        rendered_input=rendered,
    )


def compose_frame(
    session: Session,
    width: int,
    height: int,
    options: RenderOptions,
    now: datetime | None = None,
) -> Frame:
    """Lay out one full screen of ``width`` x ``height`` cells."""
    theme = options.theme
    content_rows = max(1, height - 1)
    left_width, main_width = split_widths(width, options.sidebar_width)
    main_x = left_width + 1 if left_width else 0

    if session.mode is Mode.NAVIGATING:
        main = navigator_rows(session.browser, main_width, content_rows, theme, options.icons)
        cursor = None
    else:
        layout = terminal_layout(session, main_width, content_rows, options)
        main = [pad_ansi_line(row, main_width) for row in layout.rows]
        main.extend(" " * main_width for _ in range(content_rows - len(main)))
        cursor = None
        if session.mode is Mode.NORMAL and layout.cursor is not None:
            row, col = layout.cursor
            cursor = (row + 1, main_x + col + 1)

    rows: list[str] = []
    if left_width:
        picker_selected = session.picker_selected if session.mode is Mode.PICKING_BOOKMARK else None
        side = sidebar_rows(
            session.bookmarks.ranked(),
            left_width,
            content_rows,
            theme,
            session.services.home,
            now if now is not None else utc_now(),
            selected_index=picker_selected,
        )
        divider = f"{theme.divider}│{theme.reset}"
        for side_row, main_row in zip(side, main):
            rows.append(f"{side_row}{divider}{main_row}")
    else:
        rows.extend(main)

    rows.append(
        build_status_line(
            session.mode,
            session.cwd,
            session.services.home,
            session.repo_status,
            width,
            theme,
            options.icons,
        )
    )
    return Frame(rows=rows, cursor=cursor)


def frame_to_ansi(frame: Frame) -> str:
    out: list[str] = ["\033[?25l\033[H\033[J"]
    out.append("\r\n".join(frame.rows))
    if frame.cursor is not None:
        row, col = frame.cursor
        out.append(f"\033[{row};{col}H\033[?25h")
    return "".join(out)


def render_frame(session: Session, width: int, height: int, options: RenderOptions) -> None:
    frame = compose_frame(session, width, height, options)
    os.write(sys.stdout.fileno(), frame_to_ansi(frame).encode("utf-8", errors="replace"))


__all__ = [
    "Frame",
    "RenderOptions",
    "compose_frame",
    "frame_to_ansi",
    "render_frame",
    "split_widths",
    "terminal_layout",
]
