"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and alternate-screen switching. ``raw_mode`` is the
only supported way in: the previous tty state is restored on every exit path.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

# Rows taken by the frame title, the bottom border and the help box.
CHROME_ROWS = 5


class TerminalController:
    """Manage terminal mode transitions for one interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state; raises ``termios.error`` when stdin is not a terminal."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen and restore tty state."""
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> os.terminal_size:
        return shutil.get_terminal_size((80, 24))

    def viewport_height(self) -> int:
        """Rows available for tree or file content inside the frame."""
        return max(1, self.size().lines - CHROME_ROWS)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
