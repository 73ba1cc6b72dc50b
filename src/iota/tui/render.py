"""Paint dirty screen-buffer cells to a terminal."""

from __future__ import annotations

from typing import TYPE_CHECKING

from iota.tui.style import CharStyle, sgr
from iota.tui.terminal import cursor_to
from iota.tui.utils import visible_width

if TYPE_CHECKING:
    from iota.tui.screen_buffer import ScreenBuffer
    from iota.tui.terminal import Terminal


def draw_everything(buffer: ScreenBuffer, terminal: Terminal) -> int:
    """Write every dirty cell of *buffer* and clear its dirty flag.

    The cursor move is skipped when the next dirty cell directly follows
    the previous one, and the SGR sequence is only re-sent when the
    attributes change. Returns the number of cells painted.
    """
    out: list[str] = []
    painted = 0
    next_pos: tuple[int, int] | None = None
    attrs: str | None = None

    for row in buffer.rows_in_range(0, buffer.get_height()):
        for cell in row:
            if not cell.dirty:
                continue

            if next_pos != (cell.x, cell.y):
                out.append(cursor_to(cell.x, cell.y))

            cell_attrs = sgr(cell.fg, cell.bg, CharStyle.NORMAL)
            if cell_attrs != attrs:
                out.append(cell_attrs)
                attrs = cell_attrs

            out.append(cell.ch)
            cell.dirty = False
            painted += 1
            # Wide and zero-width glyphs move the terminal cursor unpredictably
            next_pos = (cell.x + 1, cell.y) if visible_width(cell.ch) == 1 else None

    if out:
        terminal.write("".join(out))
    return painted


def present(terminal: Terminal, cursor: tuple[int, int] | None) -> None:
    """Place the hardware cursor (hidden when *cursor* is ``None``) and flush."""
    if cursor is None:
        terminal.hide_cursor()
    else:
        terminal.set_cursor(*cursor)
    terminal.flush()
