"""Terminal control helpers for the selector session.

Owns the raw-mode lifecycle on the output stream the selector paints to.
Teardown always restores the saved tty attributes, even when writes fail.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

from ..ansi import CLEAR_SCREEN, CURSOR_HOME, HIDE_CURSOR, SHOW_CURSOR


class TerminalController:
    """Manage raw-mode transitions for a stdin/output descriptor pair."""

    def __init__(self, stdin_fd: int, out_fd: int) -> None:
        """Capture tty state and bind the input and render descriptors."""
        self.stdin_fd = stdin_fd
        self.out_fd = out_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def size(self) -> os.terminal_size:
        """Current size of the render stream, 80x24 when unknown."""
        try:
            return os.get_terminal_size(self.out_fd)
        except OSError:
            return os.terminal_size((80, 24))

    def write(self, text: str) -> None:
        os.write(self.out_fd, text.encode("utf-8", errors="replace"))

    def enable_tui_mode(self) -> None:
        """Enter raw mode, hide the cursor and clear the screen."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self.write(HIDE_CURSOR + CLEAR_SCREEN + CURSOR_HOME)

    def disable_tui_mode(self) -> None:
        """Show the cursor, clear the screen and restore the saved tty state."""
        try:
            self.write(SHOW_CURSOR + CLEAR_SCREEN + CURSOR_HOME)
        finally:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
