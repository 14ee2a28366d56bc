"""Batch-delete confirmation.

Marked workspaces are removed only after the user types the literal word
``YES`` and presses Enter. Anything else, including Esc, cancels.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Iterable
from pathlib import Path

from ..ansi import CLEAR_SCREEN, CURSOR_HOME, HIDE_CURSOR, SHOW_CURSOR
from .state import SelectorState

logger = logging.getLogger(__name__)

CONFIRM_WORD = "YES"
CONFIRM_POLL_MS = 100


class DeleteConfirmation:
    """Line editor for the confirmation prompt.

    ``feed`` consumes one key token and returns the text to echo.
    """

    def __init__(self, count: int) -> None:
        self.count = count
        self.buffer = ""
        self.finished = False

    def prompt(self) -> str:
        return f"Delete {self.count} directories? Type {CONFIRM_WORD} to confirm: "

    def feed(self, key: str) -> str:
        if self.finished:
            return ""
        if key == "ENTER":
            self.finished = True
            return ""
        if key in {"ESC", "CTRL_C"}:
            self.buffer = ""
            self.finished = True
            return ""
        if key == "BACKSPACE":
            if not self.buffer:
                return ""
            self.buffer = self.buffer[:-1]
            return "\b \b"
        if len(key) == 1 and key.isprintable():
            self.buffer += key
            return key
        return ""

    @property
    def confirmed(self) -> bool:
        return self.finished and self.buffer == CONFIRM_WORD


def delete_locations(locations: Iterable[Path]) -> int:
    """Recursively remove each location; return how many were removed.

    A symlinked workspace is unlinked; its target is left alone. Locations that
    no longer exist are skipped. Any other error propagates and stops the batch.
    """
    removed = 0
    for location in sorted(locations):
        try:
            if location.is_symlink():
                location.unlink()
            else:
                shutil.rmtree(location)
        except FileNotFoundError:
            logger.debug("skipping %s: already gone", location)
            continue
        removed += 1
    return removed


def finish_delete(state: SelectorState, confirmation: DeleteConfirmation) -> None:
    """Apply the outcome of a finished confirmation to ``state``.

    Entries are reloaded and marks cleared whatever the answer was.
    """
    if confirmation.confirmed:
        removed = delete_locations(state.marked_for_deletion)
        state.status_message = f"Deleted {removed} items."
    else:
        state.status_message = "Delete cancelled."
    state.clear_marks()
    state.reload_entries()


def run_delete_confirmation(
    state: SelectorState,
    read_key: Callable[[int], str],
    write: Callable[[str], None],
) -> DeleteConfirmation:
    """Run the modal prompt until Enter or Esc, then apply the result.

    ``read_key`` is called with a poll timeout in milliseconds and returns
    ``""`` when no key arrived.
    """
    confirmation = DeleteConfirmation(len(state.marked_for_deletion))
    write(CLEAR_SCREEN + CURSOR_HOME + SHOW_CURSOR + confirmation.prompt())
    try:
        while not confirmation.finished:
            key = read_key(CONFIRM_POLL_MS)
            if not key:
                continue
            echo = confirmation.feed(key)
            if echo:
                write(echo)
    finally:
        write(HIDE_CURSOR)
    finish_delete(state, confirmation)
    return confirmation
