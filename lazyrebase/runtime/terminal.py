"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, and mouse toggles.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty


class TerminalController:
    """Manage terminal mode transitions for one interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int, mouse: bool = True) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._mouse = mouse
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._mouse_reporting_enabled = False

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode, with mouse reporting if requested."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # alternate screen, hide cursor
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")
        self.set_mouse_reporting(self._mouse)

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and disable mouse mode."""
        self.set_mouse_reporting(False)
        # show cursor, main screen buffer
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def set_mouse_reporting(self, enabled: bool) -> None:
        desired = bool(enabled)
        if desired == self._mouse_reporting_enabled:
            return
        if desired:
            os.write(self.stdout_fd, b"\x1b[?1000h\x1b[?1002h\x1b[?1006h")
        else:
            os.write(self.stdout_fd, b"\x1b[?1000l\x1b[?1002l\x1b[?1006l")
        self._mouse_reporting_enabled = desired

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["TerminalController"]
