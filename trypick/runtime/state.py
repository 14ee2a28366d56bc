"""Selector state: query, scored candidates, cursor, and delete marks.

``view`` is a list of indices into ``entries`` rebuilt on every rescore, so
the loaded entries are never reordered or copied. The optional "create new"
row sits one past the last filtered entry.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from ..entries import Entry, ScanMode, SelectorMode, load_entries
from ..scoring import score_entry
from ..shell import ChangeDirectory, CreateAndEnter, SelectWorkspace, ShellAction, dated_name

CHROME_ROWS = 8
MIN_LIST_ROWS = 3
# Header, rule, search field and rule above the list; rule and footer below.
FRAME_CHROME_ROWS = 6


@dataclass
class SelectorState:
    mode: SelectorMode
    workspace_path: Path
    query: str = ""
    entries: list[Entry] = field(default_factory=list)
    view: list[int] = field(default_factory=list)
    cursor_index: int = 0
    scroll_offset: int = 0
    marked_for_deletion: set[Path] = field(default_factory=set)
    delete_mode: bool = False
    status_message: str | None = None
    terminal_size: tuple[int, int] = (80, 24)
    clock: Callable[[], float] = time.time

    @classmethod
    def create(
        cls,
        mode: SelectorMode,
        search_term: str,
        workspace_path: Path,
        terminal_size: tuple[int, int] = (80, 24),
        clock: Callable[[], float] = time.time,
    ) -> SelectorState:
        """Build a state seeded with ``search_term`` and load its entries."""
        state = cls(
            mode=mode,
            workspace_path=workspace_path,
            query=search_term.replace(" ", "-"),
            terminal_size=terminal_size,
            clock=clock,
        )
        state.reload_entries()
        return state

    # -- derived view -----------------------------------------------------

    @property
    def offers_create_new(self) -> bool:
        return bool(self.query) and isinstance(self.mode, ScanMode)

    @property
    def visible_count(self) -> int:
        return len(self.view) + (1 if self.offers_create_new else 0)

    @property
    def max_visible_rows(self) -> int:
        return max(self.terminal_size[1] - CHROME_ROWS, MIN_LIST_ROWS)

    @property
    def list_rows(self) -> int:
        """List rows that fit on screen, never more than ``max_visible_rows``."""
        return max(1, min(self.max_visible_rows, self.terminal_size[1] - FRAME_CHROME_ROWS))

    def filtered_entries(self) -> list[Entry]:
        return [self.entries[idx] for idx in self.view]

    def entry_at(self, row: int) -> Entry | None:
        """Entry backing view row ``row``; ``None`` for the virtual row."""
        if 0 <= row < len(self.view):
            return self.entries[self.view[row]]
        return None

    def is_create_new_row(self, row: int) -> bool:
        return self.offers_create_new and row == len(self.view)

    def selected_entry(self) -> Entry | None:
        return self.entry_at(self.cursor_index)

    # -- mutations --------------------------------------------------------

    def reload_entries(self) -> None:
        """Reload candidates wholesale and drop marks for vanished locations."""
        self.entries = load_entries(self.mode, self.clock())
        loaded = {entry.location for entry in self.entries}
        self.marked_for_deletion &= loaded
        self.delete_mode = bool(self.marked_for_deletion)
        self.rescore()

    def rescore(self) -> None:
        """Score every entry against the query and rebuild the sorted view.

        Ties on score go to the more recently modified entry, then to load
        order.
        """
        now = self.clock()
        query = self.query.lower()
        for entry in self.entries:
            entry.score = score_entry(entry, query, now)

        indices = list(range(len(self.entries)))
        if self.query:
            indices = [idx for idx in indices if self.entries[idx].score > 0]
        self.view = sorted(
            indices,
            key=lambda idx: (-self.entries[idx].score, -self.entries[idx].modified_at),
        )
        self.clamp()

    def clamp(self) -> None:
        """Restore the cursor and scroll invariants after any change."""
        count = self.visible_count
        if count == 0:
            self.cursor_index = 0
        else:
            self.cursor_index = max(0, min(self.cursor_index, count - 1))

        rows = self.list_rows
        if self.cursor_index < self.scroll_offset:
            self.scroll_offset = self.cursor_index
        elif self.cursor_index >= self.scroll_offset + rows:
            self.scroll_offset = self.cursor_index + 1 - rows
        self.scroll_offset = max(0, min(self.scroll_offset, max(0, count - rows)))

    def move_cursor(self, delta: int) -> bool:
        """Move the cursor by ``delta`` without wrapping; report whether it moved."""
        if self.visible_count == 0:
            return False
        previous = self.cursor_index
        self.cursor_index = max(0, min(self.visible_count - 1, self.cursor_index + delta))
        self.clamp()
        return self.cursor_index != previous

    def resize(self, width: int, height: int) -> None:
        self.terminal_size = (width, height)
        self.clamp()

    def toggle_mark(self) -> bool:
        """Toggle the delete mark on the current entry row.

        Returns ``False`` when the cursor is not on a real entry.
        """
        entry = self.selected_entry()
        if entry is None:
            return False
        if entry.location in self.marked_for_deletion:
            self.marked_for_deletion.discard(entry.location)
        else:
            self.marked_for_deletion.add(entry.location)
        self.delete_mode = bool(self.marked_for_deletion)
        return True

    def clear_marks(self) -> None:
        self.marked_for_deletion.clear()
        self.delete_mode = False

    def commit_selection(self, today: date) -> ShellAction | None:
        """Action for Enter on the current row, or ``None`` when nothing is selectable."""
        if self.is_create_new_row(self.cursor_index):
            assert isinstance(self.mode, ScanMode)
            return CreateAndEnter(self.mode.base_directory / dated_name(self.query, today))

        entry = self.selected_entry()
        if entry is None:
            return None
        if isinstance(self.mode, ScanMode):
            return ChangeDirectory(entry.location)
        return SelectWorkspace(entry.location)
