"""Directory navigation: current listing, selection cursor, back/forward history.

This module has no terminal concerns. Collaborators for listing and
classifying paths are injected so the engine runs against any filesystem
view.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .listing import KIND_DIR, KIND_FILE, Entry, classify, list_directory

logger = logging.getLogger(__name__)

MAX_HISTORY = 256
PARENT_NAME = ".."


class DirectoryHistory:
    """Bounded back/forward stacks of visited directories.

    The top of each stack is the end of its list. Recording a new visit
    empties the forward stack; only ``go_forward`` consumes it.
    """

    def __init__(self, max_entries: int = MAX_HISTORY) -> None:
        self.max_entries = max(1, max_entries)
        self.back: list[Path] = []
        self.forward: list[Path] = []

    def _push(self, stack: list[Path], path: Path) -> None:
        stack.append(path)
        overflow = len(stack) - self.max_entries
        if overflow > 0:
            del stack[:overflow]

    def record(self, origin: Path) -> None:
        """Push ``origin`` onto the back stack and clear forward history."""
        self._push(self.back, origin)
        self.forward.clear()

    def go_back(self, current: Path) -> Path | None:
        """Pop the back target, pushing ``current`` onto the forward stack."""
        if not self.back:
            return None
        target = self.back.pop()
        self._push(self.forward, current)
        return target

    def go_forward(self, current: Path) -> Path | None:
        """Pop the forward target, pushing ``current`` onto the back stack."""
        if not self.forward:
            return None
        target = self.forward.pop()
        self._push(self.back, current)
        return target


@dataclass
class NavigationState:
    current_path: Path
    listing: list[Entry] = field(default_factory=list)
    selection_index: int = 0
    history: DirectoryHistory = field(default_factory=DirectoryHistory)


def clamp_selection(index: int, count: int) -> int:
    """Clamp ``index`` into ``[0, count - 1]``; an empty listing pins it at 0."""
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


class NavigationEngine:
    """Owns ``NavigationState`` and applies browsing key actions to it."""

    def __init__(
        self,
        start: Path,
        list_entries: Callable[[Path], tuple[list[Entry], Exception | None]] = list_directory,
        classify_path: Callable[[Path], str | None] = classify,
        max_history: int = MAX_HISTORY,
    ) -> None:
        self._list_entries = list_entries
        self._classify_path = classify_path
        self.state = NavigationState(
            current_path=Path(start).absolute(),
            history=DirectoryHistory(max_history),
        )
        self.reload()

    @property
    def current_path(self) -> Path:
        """Directory being shown."""
        return self.state.current_path

    @property
    def listing(self) -> list[Entry]:
        """Entries of the current directory, in display order."""
        return self.state.listing

    @property
    def selection_index(self) -> int:
        """Row of the selection cursor within ``listing``."""
        return self.state.selection_index

    def selected_entry(self) -> Entry | None:
        """Return the entry under the cursor, or ``None`` for an empty listing."""
        if not self.state.listing:
            return None
        return self.state.listing[self.state.selection_index]

    def reload(self) -> None:
        """Replace the listing for the current path and reset the cursor."""
        entries, error = self._list_entries(self.state.current_path)
        if error is not None:
            logger.debug("showing empty listing for %s: %s", self.state.current_path, error)
        self.state.listing = list(entries) if error is None else []
        self.state.selection_index = 0

    def _navigate(self, target: Path) -> None:
        self.state.history.record(self.state.current_path)
        self.state.current_path = target
        self.reload()
        logger.debug("entered %s", target)

    def move_selection(self, delta: int) -> bool:
        """Move the cursor by ``delta`` rows; return whether it moved."""
        previous = self.state.selection_index
        self.state.selection_index = clamp_selection(previous + delta, len(self.state.listing))
        return self.state.selection_index != previous

    def enter(self) -> Path | None:
        """Act on the selected entry.

        Directories (and ``..``) are navigated into. For a regular file the
        state is left alone and the file path is returned for paging.
        """
        entry = self.selected_entry()
        if entry is None:
            return None

        current = self.state.current_path
        if entry.name == PARENT_NAME:
            parent = current.parent
            if parent == current:
                return None
            self._navigate(parent)
            return None

        target = current / entry.name
        kind = self._classify_path(target)
        if kind == KIND_DIR:
            self._navigate(target)
        elif kind == KIND_FILE:
            return target
        return None

    def go_back(self) -> bool:
        """Return to the previous directory; ``False`` when history is empty."""
        target = self.state.history.go_back(self.state.current_path)
        if target is None:
            return False
        self.state.current_path = target
        self.reload()
        logger.debug("back to %s", target)
        return True

    def go_forward(self) -> bool:
        """Redo the last ``go_back``; ``False`` when there is nothing to redo."""
        target = self.state.history.go_forward(self.state.current_path)
        if target is None:
            return False
        self.state.current_path = target
        self.reload()
        logger.debug("forward to %s", target)
        return True
