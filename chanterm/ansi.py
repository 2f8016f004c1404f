"""Display-width helpers for styled terminal text.

Escape sequences never count toward width, wide East Asian glyphs take two
cells, and tabs expand to 8-column stops. Pane borders stay aligned only if
every label goes through these helpers.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
_WIDE_WIDTHS = frozenset({"W", "F"})


def char_display_width(ch: str, col: int) -> int:
    """Cells taken by ``ch`` when drawn starting at column ``col``."""
    if ch == "\t":
        return TAB_STOP - col % TAB_STOP
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in _WIDE_WIDTHS else 1


def _segments(text: str) -> Iterator[tuple[bool, str]]:
    """Yield ``(is_escape, chunk)``: escapes whole, plain text one char at a time."""
    pos = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        for ch in text[pos:match.start()]:
            yield False, ch
        yield True, match.group(0)
        pos = match.end()
    for ch in text[pos:]:
        yield False, ch


def display_width(text: str) -> int:
    col = 0
    for is_escape, chunk in _segments(text):
        if not is_escape:
            col += char_display_width(chunk, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut ``text`` after ``max_cols`` cells, keeping escapes met along the way.

    Tabs become spaces so the result lines up with what the terminal draws.
    Escapes after the last kept cell are dropped.
    """
    out: list[str] = []
    col = 0
    for is_escape, chunk in _segments(text):
        if col >= max_cols:
            break
        if is_escape:
            out.append(chunk)
            continue
        cells = char_display_width(chunk, col)
        if col + cells > max_cols:
            break
        out.append(" " * cells if chunk == "\t" else chunk)
        col += cells
    return "".join(out)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip or right-pad ``text`` to exactly ``width`` display columns."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


def wrap_plain_text(text: str, width: int) -> list[str]:
    """Hard-wrap unstyled text to ``width`` cells per row.

    Each embedded newline starts a new row; empty input yields one empty row.
    """
    if width <= 0:
        return [""]
    rows: list[str] = []
    for paragraph in text.split("\n"):
        row = ""
        used = 0
        for ch in paragraph:
            cells = char_display_width(ch, used)
            if row and used + cells > width:
                rows.append(row)
                row, used = "", 0
                cells = char_display_width(ch, 0)
            row += " " * cells if ch == "\t" else ch
            used += cells
        rows.append(row)
    return rows
