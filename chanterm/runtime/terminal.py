"""Raw tty session control.

``TerminalController`` switches the terminal into the full-screen client mode
(raw input, alternate screen, SGR mouse reporting, hidden cursor) and back.
It also rings the bell for new unread activity.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ALT_SCREEN_ON = b"\x1b[?1049h"
ALT_SCREEN_OFF = b"\x1b[?1049l"
CURSOR_HIDE = b"\x1b[?25l"
CURSOR_SHOW = b"\x1b[?25h"
# Button press/release, drag tracking, and SGR coordinate encoding.
MOUSE_ON = b"\x1b[?1000h\x1b[?1002h\x1b[?1006h"
MOUSE_OFF = b"\x1b[?1000l\x1b[?1002l\x1b[?1006l"
BELL = b"\a"


class TerminalController:
    """Enter and leave client mode on one pair of tty descriptors."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._cooked_attrs = termios.tcgetattr(stdin_fd)

    def _emit(self, *sequences: bytes) -> None:
        os.write(self.stdout_fd, b"".join(sequences))

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self._emit(ALT_SCREEN_ON, CURSOR_HIDE, MOUSE_ON)

    def disable_tui_mode(self) -> None:
        """Undo ``enable_tui_mode`` in reverse order and restore cooked input."""
        self._emit(MOUSE_OFF, CURSOR_SHOW, ALT_SCREEN_OFF)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._cooked_attrs)

    def bell(self) -> None:
        self._emit(BELL)

    @contextlib.contextmanager
    def raw_mode(self):
        """Run the enclosed block in client mode, restoring the tty on any exit."""
        self.enable_tui_mode()
        try:
            yield self
        finally:
            self.disable_tui_mode()
