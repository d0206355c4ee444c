"""Edit state machine - apply one logical keystroke to a field state.

Keys arrive already decoded: one of the navigation/deletion names from
``termfield.keys.Key`` or a single character. Boundary violations ring the
bell and leave the state unchanged; keys that mean nothing to a text field
(and any character typed into a read-only field) are dropped silently.
"""

from __future__ import annotations

import logging
from typing import Callable, Literal

from termfield.keys import Key
from termfield.state import FieldState
from termfield.utils import is_printable

logger = logging.getLogger(__name__)

EditResult = Literal["applied", "rejected", "ignored"]

Bell = Callable[[], None]


def insert_before(buffer: str, index: int, ch: str) -> str:
    """Insert *ch* before position *index* (``len(buffer)`` appends)."""
    return buffer[:index] + ch + buffer[index:]


def remove_at(buffer: str, index: int) -> str:
    """Remove the character at position *index*."""
    return buffer[:index] + buffer[index + 1 :]


def _reject(bell: Bell, key: str, reason: str) -> EditResult:
    logger.debug("Rejected %r: %s", key, reason)
    bell()
    return "rejected"


def apply_key(state: FieldState, key: str, bell: Bell) -> EditResult:
    """Apply *key* to *state*.

    Returns ``"applied"`` when the state changed (or a navigation key was
    honoured), ``"rejected"`` after ringing *bell* exactly once, and
    ``"ignored"`` for silently dropped keys.
    """
    cursor = state.cursor
    length = len(state.buffer)

    if key == Key.backspace:
        if state.is_read_only:
            return _reject(bell, key, "field is read-only")
        if cursor == 0:
            return _reject(bell, key, "cursor at start")
        state.update(
            buffer=remove_at(state.buffer, cursor - 1),
            cursor=cursor - 1,
            viewport_start=min(state.viewport_start, length - 1),
        )
        return "applied"

    if key == Key.right:
        if cursor >= length:
            return _reject(bell, key, "cursor at end")
        state.update(cursor=cursor + 1)
        return "applied"

    if key == Key.left:
        if cursor == 0:
            return _reject(bell, key, "cursor at start")
        state.update(cursor=cursor - 1)
        return "applied"

    if key == Key.home:
        state.update(cursor=0)
        return "applied"

    if key == Key.end:
        state.update(cursor=length)
        return "applied"

    # Regular character input
    if state.is_read_only or not is_printable(key):
        logger.debug("Ignored %r", key)
        return "ignored"

    if state.at_capacity:
        return _reject(bell, key, f"max length {state.max_length} reached")

    state.update(buffer=insert_before(state.buffer, cursor, key), cursor=cursor + 1)
    return "applied"
