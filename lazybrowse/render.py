"""Frame composition for the browser, pager, and notice screens.

Each function draws one complete frame on a display surface: clear,
positioned writes, then a single refresh. Nothing here mutates state.
"""

from __future__ import annotations

from .navigation import NavigationState
from .pager import PagerState

DIRECTORY_HEADER = "Directory: "
FILE_HEADER = "File: "
PAGER_HELP_TEXT = "Use arrow keys to navigate, ESC to exit"
OPENING_EXTERNALLY_TEXT = "File not readable. Opening with default application..."
NOTICE_HINT_TEXT = "Press any key to return to the directory view"


def _write_row(surface, row: int, text: str, highlighted: bool = False) -> None:
    if highlighted:
        surface.set_highlight(True)
        surface.write_at(row, 0, text)
        surface.set_highlight(False)
    else:
        surface.write_at(row, 0, text)


def render_browser(surface, state: NavigationState) -> None:
    """Draw the path header and one row per entry, cursor row highlighted.

    Listings taller than the screen overflow; the surface drops those rows.
    """
    surface.clear()
    _write_row(surface, 0, f"{DIRECTORY_HEADER}{state.current_path}")
    for idx, entry in enumerate(state.listing):
        _write_row(surface, idx + 1, entry.display_label, highlighted=idx == state.selection_index)
    surface.refresh()


def render_pager(surface, pager: PagerState, rows: int) -> None:
    """Draw the pager frame with the cursor line highlighted."""
    surface.clear()
    _write_row(surface, 0, f"{FILE_HEADER}{pager.file_path}")
    for offset, (line_idx, text) in enumerate(pager.visible_lines()):
        _write_row(surface, offset + 1, text, highlighted=line_idx == pager.current_line)
    _write_row(surface, rows - 1, PAGER_HELP_TEXT)
    surface.refresh()


def render_notice(surface, message: str, rows: int, hint: str = NOTICE_HINT_TEXT) -> None:
    """Draw a single message at the top, with an optional hint on the last row."""
    surface.clear()
    _write_row(surface, 0, message)
    if hint and rows > 1:
        _write_row(surface, rows - 1, hint)
    surface.refresh()
