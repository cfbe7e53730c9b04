"""Main interactive event loop.

Each iteration re-reads the screen size, draws the active mode, blocks for
one key, and routes it. The active mode is one of ``Browsing``, ``Paging``,
or ``Notice``; feature logic lives in the navigation engine, the pager, and
the injected callbacks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .navigation import NavigationEngine
from .pager import PagerState
from .render import OPENING_EXTERNALLY_TEXT, render_browser, render_notice, render_pager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Browsing:
    """The directory listing has the keyboard."""


@dataclass
class Paging:
    """A text file is open in the pager."""

    pager: PagerState


@dataclass(frozen=True)
class Notice:
    """A message shown until any key is pressed, then back to browsing."""

    message: str


Mode = Browsing | Paging | Notice
BROWSING = Browsing()


@dataclass(frozen=True)
class LoopCallbacks:
    """Injected collaborators used by ``run_main_loop``."""

    read_key: Callable[[], str]
    is_text_readable: Callable[[Path], bool]
    open_externally: Callable[[Path], None]
    load_pager: Callable[[Path, int], tuple[PagerState | None, str | None]]


def draw(surface, engine: NavigationEngine, mode: Mode, rows: int) -> None:
    """Render one frame for the active mode."""
    if isinstance(mode, Paging):
        mode.pager.fit(rows)
        render_pager(surface, mode.pager, rows)
    elif isinstance(mode, Notice):
        render_notice(surface, mode.message, rows)
    else:
        render_browser(surface, engine.state)


def open_file(surface, target: Path, rows: int, callbacks: LoopCallbacks) -> Mode:
    """Start paging ``target``, or hand it to the desktop opener."""
    if not callbacks.is_text_readable(target):
        render_notice(surface, OPENING_EXTERNALLY_TEXT, rows, hint="")
        callbacks.open_externally(target)
        return BROWSING

    pager, error = callbacks.load_pager(target, rows)
    if pager is None:
        return Notice(error or f"Error: Unable to open file: {target}")
    return Paging(pager)


def handle_browsing_key(
    key: str,
    engine: NavigationEngine,
    surface,
    rows: int,
    callbacks: LoopCallbacks,
) -> Mode | None:
    """Apply one browsing key; ``None`` means quit."""
    if key == "ESC":
        return None
    if key == "UP":
        engine.move_selection(-1)
    elif key == "DOWN":
        engine.move_selection(1)
    elif key == "LEFT":
        engine.go_back()
    elif key == "RIGHT":
        engine.go_forward()
    elif key == "ENTER":
        target = engine.enter()
        if target is not None:
            return open_file(surface, target, rows, callbacks)
    return BROWSING


def handle_paging_key(key: str, mode: Paging) -> Mode:
    """Apply one pager key; Escape goes back to browsing."""
    if key == "ESC":
        return BROWSING
    if key == "UP":
        mode.pager.scroll(-1)
    elif key == "DOWN":
        mode.pager.scroll(1)
    return mode


def run_main_loop(engine: NavigationEngine, terminal, surface, callbacks: LoopCallbacks) -> None:
    """Run until Escape is pressed while browsing or input is closed."""
    mode: Mode = BROWSING
    skip_next_lf = False

    with terminal.raw_mode():
        while True:
            rows, _cols = surface.size()
            draw(surface, engine, mode, rows)

            try:
                key = callbacks.read_key()
            except KeyboardInterrupt:
                # Ignore SIGINT-style interrupts; Escape is the only way out.
                continue
            if key == "":
                logger.info("input closed, exiting")
                break
            if skip_next_lf and key == "ENTER_LF":
                skip_next_lf = False
                continue
            skip_next_lf = key == "ENTER_CR"
            if key in {"ENTER_CR", "ENTER_LF"}:
                key = "ENTER"

            if isinstance(mode, Paging):
                mode = handle_paging_key(key, mode)
            elif isinstance(mode, Notice):
                mode = BROWSING
            else:
                next_mode = handle_browsing_key(key, engine, surface, rows, callbacks)
                if next_mode is None:
                    break
                mode = next_mode
