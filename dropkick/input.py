"""Low-level terminal input decoding and key-to-action mapping.

Reads raw bytes from stdin and translates them into normalized key tokens.
``read_latest_key`` drains every queued key and returns only the last one,
so a burst of input typed during a slow frame collapses to a single action.
"""

from __future__ import annotations

import os
import select

from .browser import Action

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

TREE_KEYMAP: dict[str, Action] = {
    "UP": Action.UP,
    "k": Action.UP,
    "DOWN": Action.DOWN,
    "j": Action.DOWN,
    "LEFT": Action.LEFT,
    "h": Action.LEFT,
    "RIGHT": Action.RIGHT,
    "l": Action.RIGHT,
    "v": Action.VIEW,
    "ENTER": Action.VIEW,
    " ": Action.TOGGLE,
    "e": Action.EXPORT,
    "q": Action.QUIT,
    "CTRL_C": Action.QUIT,
}

FILE_KEYMAP: dict[str, Action] = {
    "UP": Action.UP,
    "k": Action.UP,
    "DOWN": Action.DOWN,
    "j": Action.DOWN,
    "LEFT": Action.BACK,
    "h": Action.BACK,
    "q": Action.BACK,
    "ESC": Action.BACK,
    "e": Action.EXPORT,
    "CTRL_C": Action.QUIT,
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def input_pending(fd: int) -> bool:
    if _PENDING_BYTES:
        return True
    ready, _, _ = select.select([fd], [], [], 0.0)
    return bool(ready)


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token, or ``""`` when nothing arrives within ``timeout_ms``."""
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

    if ch == b"\x03":
        return "CTRL_C"
    if ch in {b"\r", b"\n"}:
        return "ENTER"

    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"A":
        return "UP"
    if seq == b"B":
        return "DOWN"
    if seq == b"C":
        return "RIGHT"
    if seq == b"D":
        return "LEFT"
    return "ESC"


def read_latest_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read every pending key and return only the most recent one."""
    key = read_key(fd, timeout_ms)
    if not key:
        return ""
    while input_pending(fd):
        newer = read_key(fd, 0)
        if not newer:
            break
        key = newer
    return key


def action_for_key(key: str, in_file_view: bool) -> Action | None:
    keymap = FILE_KEYMAP if in_file_view else TREE_KEYMAP
    return keymap.get(key)
