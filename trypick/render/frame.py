"""Frame model for the selector screen.

``build_frame`` turns selector state into rows of role-tagged segments
without touching the terminal. Roles are resolved to colors by the writer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..runtime.state import SelectorState
from ..scoring import match_positions, split_date_suffix
from ..shell import dated_name

TITLE = "📁 Try Selector"
RULE_CHAR = "─"
POINTER = "→ "
NO_POINTER = "  "
FOLDER_ICON = "📁 "
TRASH_ICON = "🗑️  "
CREATE_ICON = "✨ "
SEARCH_LABEL = "Search: "
FOOTER_HINT = "↑↓: Navigate  Enter: Select  Del: Delete  Esc: Cancel"


@dataclass(frozen=True)
class Segment:
    text: str
    roles: tuple[str, ...] = ()


Row = tuple[Segment, ...]


@dataclass(frozen=True)
class Frame:
    rows: tuple[Row, ...]

    def plain_lines(self) -> list[str]:
        return [row_text(row) for row in self.rows]


def row_text(row: Row) -> str:
    return "".join(segment.text for segment in row)


def _rule(width: int) -> Row:
    return (Segment(RULE_CHAR * max(0, width - 1), ("dim",)),)


def _header(state: SelectorState) -> Row:
    return (
        Segment(TITLE, ("title",)),
        Segment(" @ ", ("dim",)),
        Segment(str(state.workspace_path), ("path",)),
    )


def _search_field(state: SelectorState) -> Row:
    return (
        Segment(SEARCH_LABEL, ("dim",)),
        Segment(state.query, ("query",)),
        Segment(" ", ("block_cursor",)),
    )


def highlight_name(name: str, query: str, base_roles: tuple[str, ...] = ()) -> list[Segment]:
    """Split ``name`` into segments marking query matches and a date suffix.

    Matched characters come from the scorer's own greedy walk. For
    ``<name>-<YYYY-MM-DD>`` names the hyphen and date are dimmed unless matched.
    """
    matched = set(match_positions(name, query))
    split = split_date_suffix(name)
    date_start = len(split[0]) if split is not None else len(name)

    segments: list[Segment] = []
    run: list[str] = []
    run_roles: tuple[str, ...] | None = None
    for idx, ch in enumerate(name):
        if idx in matched:
            roles = base_roles + ("match",)
        elif idx >= date_start:
            roles = base_roles + ("dim",)
        else:
            roles = base_roles
        if roles != run_roles and run:
            segments.append(Segment("".join(run), run_roles or ()))
            run = []
        run_roles = roles
        run.append(ch)
    if run:
        segments.append(Segment("".join(run), run_roles or ()))
    return segments


def _list_row(state: SelectorState, row: int, today: date) -> Row:
    selected = row == state.cursor_index
    pointer = Segment(POINTER, ("pointer",)) if selected else Segment(NO_POINTER)
    emphasis: tuple[str, ...] = ("selected",) if selected else ()

    entry = state.entry_at(row)
    if entry is None:
        label = f"{CREATE_ICON}Create new: {dated_name(state.query, today)}"
        return (pointer, Segment(label, ("create_new",) + emphasis))

    if entry.location in state.marked_for_deletion:
        icon = Segment(TRASH_ICON)
        emphasis = emphasis + ("marked",)
    else:
        icon = Segment(FOLDER_ICON)
    return (pointer, icon, *highlight_name(entry.display_name, state.query, emphasis))


def _footer(state: SelectorState) -> Row:
    if state.status_message:
        return (Segment(state.status_message, ("status",)),)
    if state.delete_mode:
        count = len(state.marked_for_deletion)
        text = f"DELETE MODE ({count} marked) | Enter: Confirm | Esc: Cancel"
        return (Segment(text, ("delete_banner",)),)
    return (Segment(FOOTER_HINT, ("dim",)),)


def build_frame(state: SelectorState, today: date) -> Frame:
    """Compose the full screen for ``state``.

    The frame is exactly ``height`` rows: header, rule, search field, rule,
    the scrollable list padded with blank rows, rule, and footer. On very
    short terminals the list is cut so the footer stays on screen.
    """
    width, height = state.terminal_size
    rows: list[Row] = [_header(state), _rule(width), _search_field(state), _rule(width)]

    list_rows = state.list_rows
    visible_end = min(state.scroll_offset + list_rows, state.visible_count)
    for row in range(state.scroll_offset, visible_end):
        rows.append(_list_row(state, row, today))

    body_height = max(0, height - 2)
    while len(rows) < body_height:
        rows.append(())
    del rows[body_height:]

    rows.append(_rule(width))
    rows.append(_footer(state))
    return Frame(rows=tuple(rows))
