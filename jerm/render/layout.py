"""Scrollback plus live input laid out on a fixed viewport.

Wrapping and cursor placement both go through :mod:`jerm.ansi`, so the
cursor cell always lands on the row the wrapped input actually occupies.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import cursor_cell, wrap_ansi_line


@dataclass(frozen=True)
class TerminalLayout:
    """Visible rows and the viewport-relative cursor cell (``None`` when off-screen)."""

    rows: list[str]
    cursor: tuple[int, int] | None
    scroll: int
    total_rows: int
    input_start_row: int


def wrap_lines(lines: list[str], width: int) -> list[str]:
    rows: list[str] = []
    for line in lines:
        rows.extend(wrap_ansi_line(line, width))
    return rows


def layout_terminal_view(
    scrollback: list[str],
    prompt: str,
    input_buffer: str,
    cursor: int,
    width: int,
    height: int,
    rendered_input: str | None = None,
) -> TerminalLayout:
    """Wrap scrollback and the live line into ``width`` x ``height`` cells.

    ``rendered_input`` is the styled form of ``prompt + input_buffer``; it
    must strip back to that plain text. Content taller than the viewport is
    clipped from the top so the live line stays visible. ``cursor`` is a
    character index into ``input_buffer``.
    """
    width = max(1, width)
    height = max(0, height)
    cursor = max(0, min(cursor, len(input_buffer)))

    rows = wrap_lines(scrollback, width)
    input_start_row = len(rows)

    live_line = rendered_input if rendered_input is not None else prompt + input_buffer
    input_rows = wrap_ansi_line(live_line, width)
    next_char = input_buffer[cursor] if cursor < len(input_buffer) else None
    cursor_row, cursor_col = cursor_cell(prompt + input_buffer[:cursor], width, next_char)
    while len(input_rows) <= cursor_row:
        input_rows.append("")
    rows.extend(input_rows)

    scroll = max(0, len(rows) - height)
    visible = rows[scroll : scroll + height]
    screen_row = input_start_row + cursor_row - scroll
    cursor_position = (screen_row, cursor_col) if 0 <= screen_row < height else None
    return TerminalLayout(
        rows=visible,
        cursor=cursor_position,
        scroll=scroll,
        total_rows=len(rows),
        input_start_row=input_start_row,
    )


__all__ = ["TerminalLayout", "layout_terminal_view", "wrap_lines"]
