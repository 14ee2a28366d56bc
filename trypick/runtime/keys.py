"""Browsing-mode keyboard handling.

Maps one decoded key token to one selector state transition. Redraw and
rescore are reported separately so cursor moves repaint without rescoring.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..shell import ShellAction
from .state import SelectorState

QUERY_PUNCTUATION = frozenset("-_. ")


@dataclass(frozen=True)
class KeyOutcome:
    """Result of handling one key."""

    needs_redraw: bool = False
    needs_rescore: bool = False
    confirm_delete: bool = False
    exit: bool = False
    action: ShellAction | None = None


IGNORED = KeyOutcome()
REDRAW = KeyOutcome(needs_redraw=True)
RESCORE = KeyOutcome(needs_redraw=True, needs_rescore=True)
CANCELLED = KeyOutcome(exit=True)


def is_query_char(key: str) -> bool:
    return len(key) == 1 and (key.isalnum() or key in QUERY_PUNCTUATION)


def handle_key(state: SelectorState, key: str, today: date) -> KeyOutcome:
    """Apply ``key`` to ``state``.

    Query edits update ``state.query`` and reset the cursor; the caller runs
    the rescore when ``needs_rescore`` is set.
    """
    if key in {"ESC", "CTRL_C"}:
        if state.delete_mode:
            state.clear_marks()
            return REDRAW
        return CANCELLED

    if key == "ENTER":
        if state.delete_mode and state.marked_for_deletion:
            return KeyOutcome(confirm_delete=True)
        action = state.commit_selection(today)
        if action is None:
            return IGNORED
        return KeyOutcome(exit=True, action=action)

    if key in {"UP", "CTRL_P"}:
        return REDRAW if state.move_cursor(-1) else IGNORED
    if key in {"DOWN", "CTRL_N"}:
        return REDRAW if state.move_cursor(1) else IGNORED

    if key == "DELETE":
        state.toggle_mark()
        return REDRAW

    if key == "BACKSPACE":
        state.query = state.query[:-1]
        state.cursor_index = 0
        return RESCORE

    if key == "CTRL_U":
        if not state.query:
            return IGNORED
        state.query = ""
        state.cursor_index = 0
        return RESCORE

    if is_query_char(key):
        state.query += key
        state.cursor_index = 0
        return RESCORE

    return IGNORED
