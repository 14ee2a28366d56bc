"""Differential frame output.

Rows are repainted in place with absolute cursor moves and clear-to-EOL.
Only rows that changed since the previous frame are written; a full clear
happens only after ``invalidate``.
"""

from __future__ import annotations

from collections.abc import Callable

from ..ansi import CLEAR_SCREEN, CLEAR_TO_EOL, clip_ansi_line, move_cursor
from ..ui_theme import SelectorTheme
from .frame import Frame, Row


def compose_row(row: Row, theme: SelectorTheme) -> str:
    """Render one row's segments to an ANSI string."""
    out: list[str] = []
    for segment in row:
        style = "".join(theme.sgr(role) for role in segment.roles)
        if style:
            out.append(f"{style}{segment.text}{theme.reset}")
        else:
            out.append(segment.text)
    return "".join(out)


class FrameWriter:
    """Paint frames onto a terminal stream, rewriting only changed rows."""

    def __init__(self, write: Callable[[str], None], theme: SelectorTheme) -> None:
        self._write = write
        self.theme = theme
        self._previous: list[str] | None = None

    def invalidate(self) -> None:
        """Force the next ``paint`` to clear the screen and redraw every row."""
        self._previous = None

    def compose(self, frame: Frame, width: int) -> list[str]:
        # Stay off the last column so the bottom row never triggers a scroll.
        max_cols = max(1, width - 1)
        return [clip_ansi_line(compose_row(row, self.theme), max_cols) for row in frame.rows]

    def paint(self, frame: Frame, width: int) -> int:
        """Write ``frame`` and return the number of rows that were rewritten."""
        lines = self.compose(frame, width)
        out: list[str] = []
        previous = self._previous
        if previous is None:
            out.append(CLEAR_SCREEN)
            previous = []

        rewritten = 0
        for idx, line in enumerate(lines):
            if idx < len(previous) and previous[idx] == line:
                continue
            out.append(f"{move_cursor(idx)}{line}{self.theme.reset}{CLEAR_TO_EOL}")
            rewritten += 1
        for idx in range(len(lines), len(previous)):
            out.append(f"{move_cursor(idx)}{CLEAR_TO_EOL}")

        self._previous = lines
        if out:
            self._write("".join(out))
        return rewritten
