"""File pager: line buffer, scroll window, and cursor line for one file.

Row 0 of the screen holds the file name and the last row the help text,
so ``visible_rows`` is always the display height minus two (at least one).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .syntax import (
    COLORIZE_MAX_FILE_BYTES,
    DEFAULT_STYLE,
    colorize_lines,
    read_text,
    sanitize_terminal_text,
    split_source_lines,
)

logger = logging.getLogger(__name__)

RESERVED_ROWS = 2


def visible_rows_for(display_rows: int) -> int:
    """Return how many file lines fit between the header and help rows."""
    return max(1, display_rows - RESERVED_ROWS)


@dataclass
class PagerState:
    """Scroll state for one viewing session.

    Invariants after every operation: ``0 <= top_line <= max(0, len(lines) -
    visible_rows)`` and ``top_line <= current_line < top_line + visible_rows``
    (``current_line`` is 0 for an empty file).
    """

    file_path: Path
    lines: list[str]
    visible_rows: int
    top_line: int = 0
    current_line: int = 0
    styled_lines: list[str] | None = None

    @property
    def max_top_line(self) -> int:
        return max(0, len(self.lines) - self.visible_rows)

    def _follow_cursor(self) -> None:
        if self.current_line < self.top_line:
            self.top_line = self.current_line
        elif self.current_line >= self.top_line + self.visible_rows:
            self.top_line = self.current_line - self.visible_rows + 1

    def scroll(self, delta: int) -> bool:
        """Move the cursor line by ``delta``, dragging the window along."""
        if not self.lines:
            return False
        previous = (self.current_line, self.top_line)
        self.current_line = max(0, min(self.current_line + delta, len(self.lines) - 1))
        self._follow_cursor()
        return (self.current_line, self.top_line) != previous

    def fit(self, display_rows: int) -> None:
        """Adopt a new display height and restore the window invariants."""
        self.visible_rows = visible_rows_for(display_rows)
        self.top_line = max(0, min(self.top_line, self.max_top_line))
        self._follow_cursor()

    def visible_lines(self) -> list[tuple[int, str]]:
        """Return ``(line_index, text)`` for each row in the window."""
        source = self.styled_lines if self.styled_lines is not None else self.lines
        end = min(len(source), self.top_line + self.visible_rows)
        return [(idx, source[idx]) for idx in range(self.top_line, end)]


def _file_size(path: Path, source: str) -> int:
    """Return the on-disk size of ``path`` in bytes."""
    try:
        return path.stat().st_size
    except OSError:
        return len(source.encode("utf-8", errors="surrogateescape"))


def load_pager(
    path: Path,
    display_rows: int,
    style: str = DEFAULT_STYLE,
    colorize: bool = True,
) -> tuple[PagerState | None, str | None]:
    """Read ``path`` into a fresh ``PagerState``.

    Returns ``(state, None)`` on success and ``(None, message)`` when the file
    cannot be read.
    """
    try:
        source = read_text(path)
    except OSError as exc:
        logger.warning("cannot open %s for paging: %s", path, exc)
        return None, f"Error: Unable to open file: {exc.strerror or exc}"

    lines = split_source_lines(sanitize_terminal_text(source))
    state = PagerState(file_path=path, lines=lines, visible_rows=visible_rows_for(display_rows))
    if colorize and _file_size(path, source) <= COLORIZE_MAX_FILE_BYTES:
        state.styled_lines = colorize_lines(lines, path, style)
    logger.debug("paging %s (%d lines)", path, len(lines))
    return state, None
