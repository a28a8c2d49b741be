"""Terminal mode lifecycle and the escape sequences it writes."""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from lazyrebase.runtime.terminal import TerminalController


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("lazyrebase.runtime.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "lazyrebase.runtime.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("lazyrebase.runtime.terminal.os.write") as write_mock, mock.patch(
            "lazyrebase.runtime.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(
            [call.args for call in write_mock.call_args_list],
            [
                (1, b"\x1b[?1049h\x1b[?25l"),
                (1, b"\x1b[?1000h\x1b[?1002h\x1b[?1006h"),
                (1, b"\x1b[?1000l\x1b[?1002l\x1b[?1006l"),
                (1, b"\x1b[?25h\x1b[?1049l"),
            ],
        )
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_mouse_can_be_left_off(self) -> None:
        with mock.patch("lazyrebase.runtime.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
            "lazyrebase.runtime.terminal.tty.setraw"
        ), mock.patch("lazyrebase.runtime.terminal.os.write") as write_mock, mock.patch(
            "lazyrebase.runtime.terminal.termios.tcsetattr"
        ):
            controller = TerminalController(stdin_fd=0, stdout_fd=1, mouse=False)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        self.assertEqual(
            [call.args for call in write_mock.call_args_list],
            [(1, b"\x1b[?1049h\x1b[?25l"), (1, b"\x1b[?25h\x1b[?1049l")],
        )

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("lazyrebase.runtime.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()


if __name__ == "__main__":
    unittest.main()
