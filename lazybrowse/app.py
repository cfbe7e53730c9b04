"""Runtime wiring: terminal, screen, navigation engine, and loop callbacks."""

from __future__ import annotations

import os
import sys
from functools import partial
from pathlib import Path

from .config import BrowserConfig
from .input import read_key
from .loop import LoopCallbacks, run_main_loop
from .navigation import NavigationEngine
from .opener import is_text_readable, open_with_default_application
from .pager import load_pager
from .terminal import Screen, TerminalController


def build_callbacks(
    terminal: TerminalController,
    stdin_fd: int,
    config: BrowserConfig,
    colorize: bool,
) -> LoopCallbacks:
    """Bind the real collaborators to the loop's callback slots."""
    return LoopCallbacks(
        read_key=partial(read_key, stdin_fd),
        is_text_readable=is_text_readable,
        open_externally=partial(
            open_with_default_application,
            disable_tui_mode=terminal.disable_tui_mode,
            enable_tui_mode=terminal.enable_tui_mode,
        ),
        load_pager=partial(load_pager, style=config.style, colorize=colorize),
    )


def run_browser(start: Path, config: BrowserConfig) -> None:
    """Browse from ``start`` until the user presses Escape in the directory view."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    colorize = not config.no_color and os.isatty(stdout_fd)
    engine = NavigationEngine(start)
    run_main_loop(
        engine,
        terminal,
        Screen(stdout_fd),
        build_callbacks(terminal, stdin_fd, config, colorize),
    )
