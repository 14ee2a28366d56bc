"""Main interactive event loop for the selector.

Polls for one key at a time with a bounded timeout, applies it, and repaints
when something changed. Terminal size is re-checked every iteration.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from ..input import read_key
from ..render import FrameWriter, build_frame
from ..shell import ShellAction
from .confirm import run_delete_confirmation
from .keys import handle_key
from .state import SelectorState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoopTiming:
    """Timing constants controlling the interactive loop."""

    poll_ms: int = 1000


def run_main_loop(
    state: SelectorState,
    terminal: TerminalController,
    writer: FrameWriter,
    stdin_fd: int,
    timing: LoopTiming = LoopTiming(),
    today: Callable[[], date] = date.today,
    get_terminal_size: Callable[[], os.terminal_size] | None = None,
) -> ShellAction | None:
    """Run the selector until an action is committed or the user cancels.

    Returns the committed action, or ``None`` when cancelled. Raw mode is left
    on every exit path, including exceptions.
    """
    measure = get_terminal_size if get_terminal_size is not None else terminal.size

    def paint() -> None:
        width, _height = state.terminal_size
        writer.paint(build_frame(state, today()), width)

    def sync_size() -> bool:
        size = measure()
        if (size.columns, size.lines) == state.terminal_size:
            return False
        logger.debug("terminal resized to %sx%s", size.columns, size.lines)
        state.resize(size.columns, size.lines)
        return True

    with terminal.raw_mode():
        sync_size()
        state.rescore()
        writer.invalidate()
        paint()

        while True:
            if sync_size():
                writer.invalidate()
                paint()

            key = read_key(stdin_fd, timeout_ms=timing.poll_ms)
            if key == "":
                continue

            outcome = handle_key(state, key, today())
            if outcome.exit:
                return outcome.action

            if outcome.confirm_delete:
                run_delete_confirmation(
                    state,
                    lambda timeout_ms: read_key(stdin_fd, timeout_ms=timeout_ms),
                    terminal.write,
                )
                writer.invalidate()
                paint()
                continue

            if not (outcome.needs_redraw or outcome.needs_rescore):
                continue
            state.status_message = None
            if outcome.needs_rescore:
                state.rescore()
            paint()
