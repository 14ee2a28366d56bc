"""Selector bootstrap.

Wires terminal, state, theme and frame writer together and runs the loop.
All painting goes to stderr so stdout carries only the emitted script.
"""

from __future__ import annotations

import sys
from pathlib import Path

from ..entries import SelectorMode
from ..render import FrameWriter
from ..shell import ShellAction
from ..ui_theme import resolve_theme
from .loop import run_main_loop
from .state import SelectorState
from .terminal import TerminalController


def run_selector(
    mode: SelectorMode,
    search_term: str,
    workspace_path: Path,
    *,
    theme_name: str | None = None,
    no_color: bool = False,
) -> ShellAction | None:
    """Run the interactive picker and return the committed action.

    ``None`` means the user cancelled. Filesystem errors while loading or
    deleting entries propagate to the caller after the terminal is restored.
    """
    stdin = sys.stdin
    stderr = sys.stderr
    if not stdin.isatty():
        raise SystemExit("try: interactive mode requires a terminal")

    terminal = TerminalController(stdin_fd=stdin.fileno(), out_fd=stderr.fileno())
    size = terminal.size()
    state = SelectorState.create(
        mode,
        search_term,
        workspace_path,
        terminal_size=(size.columns, size.lines),
    )
    writer = FrameWriter(terminal.write, resolve_theme(theme_name, no_color=no_color))
    return run_main_loop(state, terminal, writer, stdin_fd=stdin.fileno())
