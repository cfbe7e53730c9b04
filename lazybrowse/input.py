"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into key tokens:
``UP``, ``DOWN``, ``LEFT``, ``RIGHT``, ``ENTER_CR``, ``ENTER_LF``, ``ESC``,
``OTHER`` for unhandled escape sequences and Alt+key chords, or the decoded
character itself.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_CSI_BYTES = 16
_PENDING_BYTES: list[bytes] = []

_ARROWS = {b"A": "UP", b"B": "DOWN", b"C": "RIGHT", b"D": "LEFT"}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_csi(fd: int) -> str:
    # CSI: parameter/intermediate bytes, then one final byte in 0x40..0x7e.
    body: list[bytes] = []
    while len(body) < MAX_CSI_BYTES:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if 0x40 <= part[0] <= 0x7E:
            if not body and part in _ARROWS:
                return _ARROWS[part]
            return "OTHER"
        body.append(part)
    return "OTHER"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Block for one key and return its token, or ``""`` on timeout or end of input."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch == b"\r":
        return "ENTER_CR"
    if ch == b"\n":
        return "ENTER_LF"

    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        # SS3 arrows, sent in application cursor mode.
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        return _ARROWS.get(final, "OTHER")
    if seq == b"\x1b":
        # Two Escape presses in quick succession.
        _PENDING_BYTES.append(seq)
        return "ESC"
    # Alt+key arrives as ESC followed by the key.
    return "OTHER"
