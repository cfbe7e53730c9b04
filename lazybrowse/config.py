"""Read-only JSON preferences.

Looks for ``config.json`` in the platform config directory. The file is
never written; malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .syntax import DEFAULT_STYLE

APP_NAME = "lazybrowse"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class BrowserConfig:
    """Preferences applied for one program run."""

    style: str = DEFAULT_STYLE
    no_color: bool = False
    log_level: int = logging.WARNING


def load_config_data(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_config(path: Path | None = None) -> BrowserConfig:
    """Build a ``BrowserConfig``, ignoring any value of the wrong type."""
    data = load_config_data(path)
    defaults = BrowserConfig()

    style = data.get("style")
    if not isinstance(style, str) or not style.strip():
        style = defaults.style

    no_color = data.get("no_color")
    if not isinstance(no_color, bool):
        no_color = defaults.no_color

    log_level = defaults.log_level
    raw_level = data.get("log_level")
    if isinstance(raw_level, str) and raw_level.strip().upper() in _LOG_LEVELS:
        log_level = logging.getLevelName(raw_level.strip().upper())

    return BrowserConfig(style=style.strip(), no_color=no_color, log_level=log_level)
