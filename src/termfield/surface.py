"""Drawing surfaces for character-cell widgets.

Provides the ``DrawingSurface`` protocol a widget draws through, colour-name
resolution, and ``ScreenSurface``: an in-memory cell grid that can be
exported as plain text or as ANSI-styled lines.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Protocol

# ---------------------------------------------------------------------------
# Attributes and colours
# ---------------------------------------------------------------------------


class Attr(enum.IntFlag):
    NORMAL = 0
    BOLD = 1
    UNDERLINE = 2
    STANDOUT = 4


COLOURS: dict[str, int] = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}

_ATTR_SGR: dict[Attr, int] = {
    Attr.BOLD: 1,
    Attr.UNDERLINE: 4,
    Attr.STANDOUT: 7,
}

_SGR_RESET = "\x1b[0m"


def resolve_colour(name: str | None) -> int | None:
    """Return the ANSI colour index for *name*; ``None`` means terminal default.

    Raises ``ValueError`` for names not in ``COLOURS``.
    """
    if name is None:
        return None
    index = COLOURS.get(name.lower())
    if index is None:
        raise ValueError(
            f"Unknown colour {name!r}; expected one of {', '.join(COLOURS)}"
        )
    return index


# ---------------------------------------------------------------------------
# DrawingSurface protocol
# ---------------------------------------------------------------------------


class DrawingSurface(Protocol):
    """Interface a widget needs from the screen it is drawn on."""

    def write(
        self, row: int, col: int, text: str, attr: Attr = Attr.NORMAL, pair: int = 0
    ) -> None:
        """Write a run of glyphs starting at (*row*, *col*)."""
        ...

    def change_attr(self, row: int, col: int, count: int, attr: Attr, pair: int) -> None:
        """Replace attributes of *count* cells without touching their glyphs."""
        ...

    def colour_pair(self, foreground: str | None, background: str | None) -> int:
        """Resolve a foreground/background colour pair to an attribute value."""
        ...

    def bell(self) -> None:
        """Emit an audible or visual alert."""
        ...


# ---------------------------------------------------------------------------
# ScreenSurface implementation
# ---------------------------------------------------------------------------


@dataclass
class Cell:
    char: str = " "
    attr: Attr = Attr.NORMAL
    pair: int = 0


class ScreenSurface:
    """In-memory ``DrawingSurface`` backed by a grid of cells.

    Writes outside the grid are clipped. Colour pairs are allocated on first
    use, starting at 1; pair 0 is the terminal default.
    """

    def __init__(self, rows: int, columns: int) -> None:
        self._rows = rows
        self._columns = columns
        self._grid: list[list[Cell]] = [
            [Cell() for _ in range(columns)] for _ in range(rows)
        ]
        self._pairs: dict[tuple[int | None, int | None], int] = {}
        self.bells = 0

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    # -- DrawingSurface protocol ---------------------------------------------

    def write(
        self, row: int, col: int, text: str, attr: Attr = Attr.NORMAL, pair: int = 0
    ) -> None:
        if not 0 <= row < self._rows:
            return
        for offset, ch in enumerate(text):
            c = col + offset
            if 0 <= c < self._columns:
                self._grid[row][c] = Cell(ch, attr, pair)

    def change_attr(self, row: int, col: int, count: int, attr: Attr, pair: int) -> None:
        if not 0 <= row < self._rows:
            return
        for c in range(max(col, 0), min(col + count, self._columns)):
            cell = self._grid[row][c]
            cell.attr = attr
            cell.pair = pair

    def colour_pair(self, foreground: str | None, background: str | None) -> int:
        key = (resolve_colour(foreground), resolve_colour(background))
        if key == (None, None):
            return 0
        if key not in self._pairs:
            self._pairs[key] = len(self._pairs) + 1
        return self._pairs[key]

    def bell(self) -> None:
        self.bells += 1

    # -- Inspection / export -------------------------------------------------

    def cell(self, row: int, col: int) -> Cell:
        return self._grid[row][col]

    def pair_colours(self, pair: int) -> tuple[int | None, int | None]:
        """Return the (foreground, background) colour indices of *pair*."""
        for key, value in self._pairs.items():
            if value == pair:
                return key
        return (None, None)

    def text_lines(self) -> list[str]:
        """Return the grid as plain text, one string per row."""
        return ["".join(cell.char for cell in row) for row in self._grid]

    def _sgr(self, attr: Attr, pair: int) -> str:
        codes: list[int] = [0]
        for flag, code in _ATTR_SGR.items():
            if attr & flag:
                codes.append(code)
        fg, bg = self.pair_colours(pair)
        if fg is not None:
            codes.append(30 + fg)
        if bg is not None:
            codes.append(40 + bg)
        return "\x1b[" + ";".join(str(c) for c in codes) + "m"

    def render_lines(self) -> list[str]:
        """Return the grid as ANSI-styled lines.

        Styling is emitted only where it changes; every styled line ends
        with a reset.
        """
        lines: list[str] = []
        for row in self._grid:
            parts: list[str] = []
            current: tuple[Attr, int] = (Attr.NORMAL, 0)
            for cell in row:
                style = (cell.attr, cell.pair)
                if style != current:
                    parts.append(self._sgr(*style))
                    current = style
                parts.append(cell.char)
            if current != (Attr.NORMAL, 0):
                parts.append(_SGR_RESET)
            lines.append("".join(parts))
        return lines
