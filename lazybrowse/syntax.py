"""Text loading and Pygments colorizing for the file pager.

Decoding is tolerant (UTF-8, UTF-8 with BOM, latin-1, then replacement),
and terminal control bytes are escaped before anything reaches the screen.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"
COLORIZE_MAX_FILE_BYTES = 1024 * 1024

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics. ``OSError`` propagates.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def split_source_lines(source: str) -> list[str]:
    """Split on ``\\n``; a final newline does not open an extra empty line."""
    if not source:
        return []
    lines = source.split("\n")
    if source.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.info("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    """Return cached Pygments terminal formatter for style name."""
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=_normalize_style(style))
        _FORMATTERS[style] = formatter
    return formatter


def colorize_lines(lines: list[str], path: Path, style: str = DEFAULT_STYLE) -> list[str] | None:
    """Colorize pager lines, one output row per input line.

    Returns ``None`` when Pygments fails or the row count would drift, so the
    caller keeps showing the plain lines.
    """
    if not lines:
        return []
    source = "\n".join(lines) + "\n"
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)

    try:
        rendered = highlight(source, lexer, _formatter_for_style(style))
    except Exception as exc:
        logger.warning("highlighting %s failed: %s", path, exc)
        return None

    colored = split_source_lines(rendered)
    if len(colored) != len(lines):
        logger.debug("highlighted row count mismatch for %s", path)
        return None
    return colored
