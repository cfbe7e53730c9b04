"""Command-line front door for lazybrowse.

Parses the (option-free) command line, loads preferences, sets up file
logging, and starts browsing at the current working directory.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from platformdirs import user_log_dir

from . import __version__
from .app import run_browser
from .config import APP_NAME, load_config

LOG_FILENAME = f"{APP_NAME}.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int, log_dir: Path | None = None) -> Path | None:
    """Send package logs to a file; the terminal belongs to the UI.

    Returns the log file path, or ``None`` when the directory is unusable.
    """
    directory = Path(user_log_dir(APP_NAME, appauthor=False)) if log_dir is None else log_dir
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None

    log_path = directory / LOG_FILENAME
    handler = logging.FileHandler(log_path, encoding="utf-8", delay=True)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger(__package__)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return log_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=(
            "Browse directories and page through text files in the terminal. "
            "Starts in the current directory; arrows move, Enter opens, Esc quits."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    build_parser().parse_args(argv)
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit(f"{APP_NAME} needs an interactive terminal.")

    config = load_config()
    configure_logging(config.log_level)
    run_browser(Path.cwd(), config)


if __name__ == "__main__":
    main()
