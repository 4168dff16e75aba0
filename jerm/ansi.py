"""ANSI-aware text measurement and line shaping utilities.

Provides clipping, padding, and wrapping that preserve escape sequences.
The wrapping rule and the cursor-cell walk share one placement rule so the
rendered rows and the edit cursor can never disagree.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")
_SGR_RE = re.compile(r"\x1b\[([0-9;]*)m")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns, East Asian wide/fullwidth characters
    consume two, everything else one.
    """
    if unicodedata.combining(ch) or unicodedata.category(ch) in {"Mn", "Me"}:
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the column width of ``text`` with escape sequences ignored."""
    plain = ANSI_ESCAPE_RE.sub("", text)
    return sum(char_display_width(ch) for ch in plain)


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes and expand tabs for plain-text display."""
    if "\t" in source:
        source = source.expandtabs(TAB_STOP)
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and right-pad it with spaces."""
    clipped = clip_ansi_line(text, width)
    used = display_width(clipped)
    if "\033" in clipped:
        clipped += "\033[0m"
    if used < width:
        clipped += " " * (width - used)
    return clipped


def truncate_left(text: str, width: int, marker: str = "..") -> str:
    """Keep the tail of plain ``text`` so it fits ``width`` columns.

    Dropped leading characters are replaced by ``marker``.
    """
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text
    budget = width - len(marker)
    if budget <= 0:
        return marker[:width]
    tail: list[str] = []
    used = 0
    for ch in reversed(text):
        w = char_display_width(ch)
        if used + w > budget:
            break
        tail.append(ch)
        used += w
    return marker + "".join(reversed(tail))


def _track_sgr(active: list[str], escape: str) -> None:
    match = _SGR_RE.fullmatch(escape)
    if match is None:
        return
    params = match.group(1).split(";")
    if any(param in {"", "0", "00"} for param in params):
        active.clear()
    active.append(escape)


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Wrap a styled line into the fewest chunks that fit ``width`` columns.

    A character that would overflow the current row starts a new row, unless
    the row is still empty (a lone wide character on a 1-column viewport).
    SGR state active at a break is replayed at the start of the next chunk.
    """
    if width <= 0:
        return [""]
    if not text:
        return [""]

    wrapped: list[str] = []
    chunk: list[str] = []
    active_sgr: list[str] = []
    col = 0
    row_has_text = False
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                escape = match.group(0)
                chunk.append(escape)
                _track_sgr(active_sgr, escape)
                i = match.end()
                continue

        ch = text[i]
        w = char_display_width(ch)
        if col + w > width and row_has_text:
            wrapped.append("".join(chunk))
            chunk = list(active_sgr)
            col = 0
            row_has_text = False
        chunk.append(ch)
        col += w
        row_has_text = True
        i += 1

    wrapped.append("".join(chunk))
    return wrapped


def cursor_cell(before_cursor: str, width: int, next_char: str | None = None) -> tuple[int, int]:
    """Return ``(row, col)`` of the cell right after ``before_cursor``.

    Walks the same placement rule as :func:`wrap_ansi_line`. When ``next_char``
    is given and would itself wrap, the cursor moves to where that character
    is drawn. A row filled exactly to ``width`` puts the cursor at column 0 of
    the following row.
    """
    width = max(1, width)
    row = 0
    col = 0
    row_has_text = False
    for ch in ANSI_ESCAPE_RE.sub("", before_cursor):
        w = char_display_width(ch)
        if col + w > width and row_has_text:
            row += 1
            col = 0
            row_has_text = False
        col += w
        row_has_text = True

    if next_char is not None and row_has_text and col + char_display_width(next_char) > width:
        return row + 1, 0
    if col >= width:
        return row + 1, 0
    return row, col


__all__ = [
    "ANSI_ESCAPE_RE",
    "TAB_STOP",
    "char_display_width",
    "display_width",
    "sanitize_terminal_text",
    "clip_ansi_line",
    "pad_ansi_line",
    "truncate_left",
    "wrap_ansi_line",
    "cursor_cell",
]
