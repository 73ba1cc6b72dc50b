"""Tests for the ScreenBuffer dirty-cell grid."""

from __future__ import annotations

import pytest

from iota.tui.screen_buffer import Cell, ScreenBuffer
from iota.tui.style import CharColor


def _clear(buf: ScreenBuffer) -> None:
    """Clear pass as performed by the renderer."""
    for cell in buf.dirty_cells():
        cell.dirty = False


class TestScreenBufferInitialState:
    def test_dimensions(self) -> None:
        buf = ScreenBuffer(10, 4)
        assert buf.get_width() == 10
        assert buf.get_height() == 4
        assert len(buf.rows) == 4
        assert all(len(row) == 10 for row in buf.rows)

    def test_cells_know_their_position(self) -> None:
        buf = ScreenBuffer(3, 2)
        assert buf.rows[1][2].x == 2
        assert buf.rows[1][2].y == 1

    def test_cells_start_blank_and_dirty(self) -> None:
        buf = ScreenBuffer(3, 2)
        assert buf.dirty_count() == 6
        assert all(cell.ch == " " for cell in buf.dirty_cells())

    def test_default_colors(self) -> None:
        cell = ScreenBuffer(1, 1).rows[0][0]
        assert cell.fg is CharColor.DEFAULT
        assert cell.bg is CharColor.DEFAULT

    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValueError):
            ScreenBuffer(-1, 5)

    def test_zero_size_is_empty(self) -> None:
        buf = ScreenBuffer(0, 0)
        assert list(buf.dirty_cells()) == []


class TestUpdateCellContent:
    """Single-cell writes mark exactly the written cell dirty."""

    def test_write_marks_only_target_dirty(self) -> None:
        buf = ScreenBuffer(5, 3)
        _clear(buf)
        assert buf.update_cell_content(2, 1, "x") is True
        dirty = list(buf.dirty_cells())
        assert len(dirty) == 1
        assert (dirty[0].x, dirty[0].y, dirty[0].ch) == (2, 1, "x")

    def test_identical_content_still_marks_dirty(self) -> None:
        buf = ScreenBuffer(2, 2)
        _clear(buf)
        buf.update_cell_content(0, 0, " ")
        assert buf.dirty_count() == 1

    def test_clear_pass_leaves_nothing_dirty(self) -> None:
        buf = ScreenBuffer(4, 4)
        buf.update_cell_content(1, 1, "a")
        _clear(buf)
        assert buf.dirty_count() == 0
        # Stays clean until the next mutation
        assert buf.dirty_count() == 0
        buf.update_cell_content(3, 3, "b")
        assert buf.dirty_count() == 1

    def test_content_change_keeps_colors(self) -> None:
        buf = ScreenBuffer(2, 1)
        buf.update_cell(0, 0, "a", CharColor.BLUE, CharColor.BLACK)
        buf.update_cell_content(0, 0, "b")
        cell = buf.get_cell(0, 0)
        assert cell == Cell(0, 0, "b", CharColor.BLUE, CharColor.BLACK, True)


class TestOutOfBounds:
    """Writes outside the grid are ignored."""

    @pytest.mark.parametrize("x,y", [(5, 0), (0, 3), (-1, 0), (0, -1), (99, 99)])
    def test_write_is_ignored(self, x: int, y: int) -> None:
        buf = ScreenBuffer(5, 3)
        _clear(buf)
        assert buf.update_cell_content(x, y, "!") is False
        assert buf.update_cell(x, y, "!", CharColor.BLUE, CharColor.BLUE) is False
        assert buf.dirty_count() == 0
        assert all(cell.ch == " " for row in buf.rows for cell in row)

    def test_get_cell_outside_returns_none(self) -> None:
        assert ScreenBuffer(2, 2).get_cell(2, 0) is None


class TestUpdateCell:
    def test_sets_content_and_colors(self) -> None:
        buf = ScreenBuffer(3, 1)
        _clear(buf)
        buf.update_cell(1, 0, "z", CharColor.BLUE, CharColor.BLACK)
        cell = buf.get_cell(1, 0)
        assert cell is not None
        assert (cell.ch, cell.fg, cell.bg, cell.dirty) == (
            "z",
            CharColor.BLUE,
            CharColor.BLACK,
            True,
        )


class TestFillRow:
    def test_fills_whole_row(self) -> None:
        buf = ScreenBuffer(4, 2)
        _clear(buf)
        assert buf.fill_row(1, "-") == 4
        assert [c.ch for c in buf.rows[1]] == ["-"] * 4
        assert buf.dirty_count() == 4

    def test_partial_range_is_clamped(self) -> None:
        buf = ScreenBuffer(4, 1)
        _clear(buf)
        assert buf.fill_row(0, "x", start=2, stop=10) == 2
        assert "".join(c.ch for c in buf.rows[0]) == "  xx"

    def test_resets_colors(self) -> None:
        buf = ScreenBuffer(1, 1)
        buf.update_cell(0, 0, "a", CharColor.BLUE, CharColor.BLUE)
        buf.fill_row(0)
        assert buf.rows[0][0].bg is CharColor.DEFAULT

    def test_row_outside_grid(self) -> None:
        buf = ScreenBuffer(3, 1)
        _clear(buf)
        assert buf.fill_row(1) == 0
        assert buf.dirty_count() == 0


class TestRowsInRange:
    def test_returns_requested_rows(self) -> None:
        buf = ScreenBuffer(2, 5)
        rows = buf.rows_in_range(1, 3)
        assert [row[0].y for row in rows] == [1, 2]

    def test_range_is_clamped(self) -> None:
        buf = ScreenBuffer(2, 3)
        assert len(buf.rows_in_range(-2, 10)) == 3

    def test_rows_are_mutable_views(self) -> None:
        buf = ScreenBuffer(2, 2)
        for row in buf.rows_in_range(0, 2):
            for cell in row:
                cell.dirty = False
        assert buf.dirty_count() == 0

    def test_dirty_cells_in_row_major_order(self) -> None:
        buf = ScreenBuffer(3, 3)
        _clear(buf)
        buf.update_cell_content(2, 2, "c")
        buf.update_cell_content(0, 1, "b")
        buf.update_cell_content(1, 0, "a")
        assert [c.ch for c in buf.dirty_cells()] == ["a", "b", "c"]
