"""Character grid with per-cell dirty tracking.

The buffer is the single source of truth for what should be on screen.
Every mutation marks the touched cell dirty; the renderer paints dirty
cells and clears the flag, so each edit is painted exactly once.

Writes outside the grid are ignored: ``update_cell`` and
``update_cell_content`` return ``False`` and leave every cell untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from iota.tui.style import CharColor

logger = logging.getLogger(__name__)


@dataclass
class Cell:
    """One character position on screen."""

    x: int
    y: int
    ch: str = " "
    fg: CharColor = CharColor.DEFAULT
    bg: CharColor = CharColor.DEFAULT
    dirty: bool = True


class ScreenBuffer:
    """A ``width`` x ``height`` grid of :class:`Cell` objects.

    Dimensions are fixed; a terminal resize means building a new buffer.
    All cells start blank and dirty so the first paint covers the screen.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"invalid buffer size {width}x{height}")
        self._width = width
        self._height = height
        self.rows: list[list[Cell]] = [
            [Cell(x, y) for x in range(width)] for y in range(height)
        ]

    def get_width(self) -> int:
        return self._width

    def get_height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get_cell(self, x: int, y: int) -> Cell | None:
        if not self.in_bounds(x, y):
            return None
        return self.rows[y][x]

    def update_cell_content(self, x: int, y: int, ch: str) -> bool:
        """Write *ch* at (*x*, *y*) and mark the cell dirty."""
        if not self.in_bounds(x, y):
            logger.debug("Ignoring write of %r outside grid at (%d, %d)", ch, x, y)
            return False
        cell = self.rows[y][x]
        cell.ch = ch
        cell.dirty = True
        return True

    def update_cell(
        self,
        x: int,
        y: int,
        ch: str,
        fg: CharColor,
        bg: CharColor,
    ) -> bool:
        """Write *ch* and its colors at (*x*, *y*) and mark the cell dirty."""
        if not self.in_bounds(x, y):
            logger.debug("Ignoring write of %r outside grid at (%d, %d)", ch, x, y)
            return False
        cell = self.rows[y][x]
        cell.ch = ch
        cell.fg = fg
        cell.bg = bg
        cell.dirty = True
        return True

    def fill_row(
        self,
        y: int,
        ch: str = " ",
        start: int = 0,
        stop: int | None = None,
    ) -> int:
        """Overwrite columns ``start:stop`` of row *y* with *ch*.

        Colors are reset to the default. Returns the number of cells
        written.
        """
        if not 0 <= y < self._height:
            return 0
        stop = self._width if stop is None else min(stop, self._width)
        count = 0
        for x in range(max(start, 0), stop):
            self.update_cell(x, y, ch, CharColor.DEFAULT, CharColor.DEFAULT)
            count += 1
        return count

    def rows_in_range(self, start: int, stop: int) -> list[list[Cell]]:
        """Return rows ``start:stop`` (clamped to the grid).

        The returned lists are the buffer's own rows, so cells can be
        modified in place.
        """
        start = max(start, 0)
        stop = min(stop, self._height)
        return self.rows[start:stop]

    def dirty_cells(self) -> Iterator[Cell]:
        """Yield every dirty cell in row-major order."""
        for row in self.rows:
            for cell in row:
                if cell.dirty:
                    yield cell

    def dirty_count(self) -> int:
        return sum(1 for _ in self.dirty_cells())
