"""Readability probe and hand-off to the desktop's default application.

The opener temporarily leaves raw/alternate-screen TUI mode around the
launch. Nothing here raises; failures are only logged.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

BINARY_PROBE_BYTES = 8192
OPENER_COMMANDS = ("xdg-open", "open")


def is_text_readable(path: Path) -> bool:
    """Return whether ``path`` opens for reading and its head has no NUL byte."""
    try:
        with path.open("rb") as handle:
            sample = handle.read(BINARY_PROBE_BYTES)
    except OSError:
        return False
    return b"\x00" not in sample


def find_opener() -> str | None:
    """Return the first available opener executable on ``PATH``."""
    for command in OPENER_COMMANDS:
        executable = shutil.which(command)
        if executable:
            return executable
    return None


def open_with_default_application(
    target: Path,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> None:
    opener = find_opener()
    if opener is None:
        logger.warning("no opener found for %s (tried %s)", target, ", ".join(OPENER_COMMANDS))
        return

    disable_tui_mode()
    try:
        logger.info("opening %s with %s", target, opener)
        subprocess.run(
            [opener, str(target)],
            check=False,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as exc:
        logger.warning("failed to launch %s for %s: %s", opener, target, exc)
    finally:
        enable_tui_mode()
