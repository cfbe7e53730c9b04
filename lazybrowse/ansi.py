"""Display-width helpers for styled terminal rows.

Rows written to the screen may carry SGR color sequences from the syntax
colorizer. Width math here skips those sequences so clipping happens on
visible cells only.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return how many terminal cells ``ch`` occupies when drawn at ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Visible width of ``text`` with escape sequences ignored."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut a row down to ``max_cols`` cells, keeping escapes and expanding tabs."""
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        i += 1
        if col >= max_cols:
            # Keep scanning so trailing resets still reach the terminal.
            continue
        w = char_display_width(ch, col)
        if col + w > max_cols:
            col = max_cols
            continue
        out.append(" " * w if ch == "\t" else ch)
        col += w

    return "".join(out)


def _is_attribute_reset(sequence: str) -> bool:
    """Return whether an SGR sequence clears all attributes (``0``, ``00``, or empty)."""
    if not sequence.endswith("m"):
        return False
    params = sequence[2:-1]
    return params == "" or any(param in {"", "0", "00"} for param in params.split(";"))


def _reassert_reverse(match: re.Match[str]) -> str:
    sequence = match.group(0)
    if _is_attribute_reset(sequence):
        return sequence + "\033[7m"
    return sequence


def reverse_video(text: str) -> str:
    """Wrap ``text`` in reverse video that survives embedded color resets."""
    return "\033[7m" + ANSI_ESCAPE_RE.sub(_reassert_reverse, text) + "\033[0m"
