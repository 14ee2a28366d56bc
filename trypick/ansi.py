"""ANSI-aware text measurement and clipping.

Keeps rendered rows inside the terminal width when color codes and wide
characters are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")

CLEAR_SCREEN = "\033[2J"
CLEAR_TO_EOL = "\033[K"
CURSOR_HOME = "\033[H"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"


def move_cursor(row: int, col: int = 0) -> str:
    """Absolute cursor move; ``row`` and ``col`` are zero-based."""
    return f"\033[{row + 1};{col + 1}H"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks and variation selectors consume no columns, and East Asian
    wide/fullwidth characters consume two.
    """
    if unicodedata.combining(ch) or unicodedata.category(ch) in {"Mn", "Cf"}:
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Visible width of ``text`` with escape sequences ignored."""
    plain = ANSI_ESCAPE_RE.sub("", text)
    return sum(char_display_width(ch) for ch in plain)


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
