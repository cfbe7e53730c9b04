"""Terminal control and the character-grid display surface.

``TerminalController`` owns the raw-mode and alternate-screen lifecycle.
``Screen`` buffers one frame of positioned writes and flushes it in a
single ``os.write`` on ``refresh``.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty
from typing import Callable

from .ansi import clip_ansi_line, reverse_video

DEFAULT_TERMINAL_SIZE = (80, 24)


class TerminalController:
    """Switches the terminal into and out of full-screen raw mode."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Remember the tty attributes of ``stdin_fd`` so they can be restored."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw mode on the alternate screen with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Undo ``enable_tui_mode``."""
        # Show cursor and restore the main screen buffer.
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Keep the terminal in TUI mode for the duration of the block."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


def terminal_size() -> tuple[int, int]:
    """Return ``(rows, cols)`` of the controlling terminal."""
    size = shutil.get_terminal_size(DEFAULT_TERMINAL_SIZE)
    return max(1, size.lines), max(1, size.columns)


class Screen:
    """Display surface: positioned text on a ``rows x cols`` grid.

    Writes outside the grid are dropped and rows are clipped to the
    remaining width, so callers never need to pre-measure text.
    """

    def __init__(self, stdout_fd: int, size_fn: Callable[[], tuple[int, int]] = terminal_size) -> None:
        self.stdout_fd = stdout_fd
        self._size_fn = size_fn
        self._rows, self._cols = size_fn()
        self._highlight = False
        self._frame: list[str] = []

    def size(self) -> tuple[int, int]:
        """Re-read the terminal size; the result also bounds later writes."""
        self._rows, self._cols = self._size_fn()
        return self._rows, self._cols

    def clear(self) -> None:
        """Start a new frame that begins by blanking the screen."""
        self._frame = ["\033[H\033[2J"]
        self._highlight = False

    def set_highlight(self, enabled: bool) -> None:
        """Toggle reverse video for subsequent ``write_at`` calls."""
        self._highlight = bool(enabled)

    def write_at(self, row: int, col: int, text: str) -> None:
        """Queue ``text`` at ``(row, col)``, clipped to the screen width."""
        if row < 0 or row >= self._rows or col < 0 or col >= self._cols:
            return
        clipped = clip_ansi_line(text, self._cols - col)
        if self._highlight:
            clipped = reverse_video(clipped)
        elif "\033" in clipped:
            clipped += "\033[0m"
        self._frame.append(f"\033[{row + 1};{col + 1}H{clipped}")

    def refresh(self) -> None:
        """Flush the queued frame to the terminal."""
        if not self._frame:
            return
        os.write(self.stdout_fd, "".join(self._frame).encode("utf-8", errors="replace"))
        self._frame = []
