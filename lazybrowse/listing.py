"""Directory enumeration and path classification.

Produces ``ls -l`` style rows for one directory. Failures never raise:
listing errors come back next to a degraded listing, classification
errors come back as ``None``.
"""

from __future__ import annotations

import logging
import os
import stat
import time
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

KIND_DIR = "dir"
KIND_FILE = "file"

TIMESTAMP_FORMAT = "%b %d %H:%M"
DOT_NAMES = (".", "..")


@dataclass(frozen=True)
class Entry:
    """One row of a directory listing.

    ``display_label`` always ends with ``name``; everything before the last
    space is presentation only.
    """

    name: str
    is_dir: bool
    display_label: str


def format_entry_label(name: str, st: os.stat_result) -> str:
    """Render ``<mode> <size> <mtime> <name>`` for one stat result."""
    mtime = time.strftime(TIMESTAMP_FORMAT, time.localtime(st.st_mtime))
    return f"{stat.filemode(st.st_mode)} {st.st_size} {mtime} {name}"


def _dot_entries(directory: Path) -> list[Entry]:
    """Build the ``.`` and ``..`` rows, skipping any that cannot be stat-ed."""
    entries: list[Entry] = []
    for name in DOT_NAMES:
        try:
            st = (directory / name).stat()
        except OSError:
            continue
        entries.append(Entry(name=name, is_dir=True, display_label=format_entry_label(name, st)))
    return entries


def list_directory(directory: Path) -> tuple[list[Entry], Exception | None]:
    """List ``directory`` as entries, ``.`` and ``..`` first.

    Returns ``(entries, scan_error)``. A directory that cannot be scanned
    (missing, permission denied) yields an empty listing and the exception.
    """
    children: list[Entry] = []
    try:
        with os.scandir(directory) as scan:
            for child in scan:
                try:
                    # Follow symlinks so a linked directory can be entered.
                    st = child.stat()
                except OSError:
                    continue
                children.append(
                    Entry(
                        name=child.name,
                        is_dir=stat.S_ISDIR(st.st_mode),
                        display_label=format_entry_label(child.name, st),
                    )
                )
    except OSError as exc:
        logger.warning("cannot list %s: %s", directory, exc)
        return [], exc

    children.sort(key=lambda item: (not item.is_dir, item.name.lower()))
    return _dot_entries(directory) + children, None


def classify(path: Path) -> str | None:
    """Return ``"dir"``, ``"file"``, or ``None`` for unreadable or special paths."""
    try:
        mode = path.stat().st_mode
    except OSError as exc:
        logger.info("cannot stat %s: %s", path, exc)
        return None
    if stat.S_ISDIR(mode):
        return KIND_DIR
    if stat.S_ISREG(mode):
        return KIND_FILE
    return None
