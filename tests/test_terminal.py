"""Tests for terminal mode control.

Verifies the raw-mode lifecycle and that the saved tty state is restored on
every exit path.
"""

from __future__ import annotations

import os
import termios
import unittest
from unittest import mock

from trypick.runtime.terminal import TerminalController


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_write_expected_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("trypick.runtime.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "trypick.runtime.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("trypick.runtime.terminal.os.write") as write_mock, mock.patch(
            "trypick.runtime.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, out_fd=2)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (2, b"\x1b[?25l\x1b[2J\x1b[H"))
        self.assertEqual(write_mock.call_args_list[1].args, (2, b"\x1b[?25h\x1b[2J\x1b[H"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_disable_restores_tty_state_when_write_fails(self) -> None:
        with mock.patch("trypick.runtime.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, out_fd=2)

        with mock.patch("trypick.runtime.terminal.os.write", side_effect=OSError("closed")), mock.patch(
            "trypick.runtime.terminal.termios.tcsetattr"
        ) as setattr_mock:
            with self.assertRaises(OSError):
                controller.disable_tui_mode()

        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, [0])

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("trypick.runtime.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, out_fd=2)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_size_falls_back_when_output_is_not_a_terminal(self) -> None:
        with mock.patch("trypick.runtime.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, out_fd=2)

        with mock.patch("trypick.runtime.terminal.os.get_terminal_size", side_effect=OSError("not a tty")):
            self.assertEqual(controller.size(), os.terminal_size((80, 24)))

        with mock.patch(
            "trypick.runtime.terminal.os.get_terminal_size",
            return_value=os.terminal_size((120, 40)),
        ) as size_mock:
            self.assertEqual(controller.size(), os.terminal_size((120, 40)))
        size_mock.assert_called_once_with(2)


if __name__ == "__main__":
    unittest.main()
