"""Render pipeline - map field state to a fixed-width segment and cursor cell.

Rendering is stateful: besides producing display data it writes the
drift-corrected cursor and viewport back into the state, so edits made
outside the edit state machine (``set_value`` and friends) are reconciled
the next time the field is drawn.
"""

from __future__ import annotations

from dataclasses import dataclass

from termfield.state import FieldState

MASK_GLYPH = "*"
PAD_GLYPH = " "


@dataclass(frozen=True)
class RenderedField:
    """Display output of one render pass.

    ``segment`` is always exactly ``display_width`` glyphs long.
    ``cursor_cell`` is the column of the cursor within the segment, or
    ``None`` for read-only fields, which never show a cursor.
    """

    segment: str
    cursor_cell: int | None


def correct_drift(cursor: int, viewport_start: int, display_width: int) -> int:
    """Return a viewport start that keeps *cursor* inside the visible window."""
    if cursor > viewport_start + display_width - 1:
        viewport_start = cursor + 1 - display_width
    elif cursor < viewport_start:
        viewport_start = cursor
    return max(viewport_start, 0)


def render_field(state: FieldState) -> RenderedField:
    """Render *state* and persist the corrected cursor/viewport into it."""
    width = state.display_width

    effective = state.buffer
    if state.max_length is not None:
        effective = effective[: state.max_length]

    cursor = min(max(state.cursor, 0), len(effective))
    start = correct_drift(cursor, state.viewport_start, width)

    visible = effective[start : start + width]
    if state.is_password:
        visible = MASK_GLYPH * len(visible)
    segment = visible + PAD_GLYPH * (width - len(visible))

    cursor_cell = None if state.is_read_only else cursor - start

    state.update(buffer=effective, cursor=cursor, viewport_start=start)
    return RenderedField(segment=segment, cursor_cell=cursor_cell)
