"""Unit tests for cells, candidate masks and units."""

import pytest
from sudoku_engine.core.cell import Cell
from sudoku_engine.core.digits import (
    ALL_CANDIDATES, bit, count, digits_of, k_subsets, mask_of,
)
from sudoku_engine.core.grid import Grid
from sudoku_engine.core.units import Box, Line, LineType


class TestDigits:
    """Tests for bitmask helpers."""

    def test_mask_round_trip(self):
        """Test converting digit lists to masks and back."""
        mask = mask_of([9, 1, 4])
        assert digits_of(mask) == [1, 4, 9]
        assert count(mask) == 3
        assert digits_of(ALL_CANDIDATES) == list(range(1, 10))

    def test_mask_rejects_bad_digits(self):
        """Test that digits outside 1-9 are rejected."""
        with pytest.raises(ValueError):
            mask_of([0])
        with pytest.raises(ValueError):
            mask_of([10])

    def test_k_subsets(self):
        """Test k-subset enumeration, including out-of-range sizes."""
        assert list(k_subsets("abc", 2)) == [("a", "b"), ("a", "c"), ("b", "c")]
        assert list(k_subsets("abc", 4)) == []
        assert list(k_subsets("abc", -1)) == []
        assert len(list(k_subsets(range(9), 5))) == 126

    def test_k_subsets_restartable(self):
        """Test that each call starts a fresh enumeration."""
        items = [1, 2, 3]
        first = k_subsets(items, 2)
        next(first)
        assert next(k_subsets(items, 2)) == (1, 2)


class TestCell:
    """Tests for Cell state changes."""

    def test_defaults(self):
        """Test a fresh cell's derived properties."""
        cell = Cell(4, 7)
        assert cell.box == 5
        assert cell.position == (4, 7)
        assert not cell.is_solved
        assert cell.candidate_count == 9

    def test_assign_collapses_candidates(self):
        """Test that assigning a value leaves only that candidate."""
        cell = Cell(0, 0)
        cell.assign(6)
        assert cell.value == 6
        assert cell.candidates == bit(6)
        assert cell.candidate_digits() == [6]

    def test_assign_rejects_bad_value(self):
        """Test assigning a value outside 1-9."""
        with pytest.raises(ValueError):
            Cell(0, 0).assign(0)

    def test_solved_cell_keeps_its_candidate(self):
        """Eliminations never touch a solved cell."""
        cell = Cell(0, 0)
        cell.assign(3)
        assert not cell.remove_candidates(bit(3) | bit(4))
        assert cell.candidates == bit(3)

    def test_remove_candidates(self):
        """Test candidate removal and its change flag."""
        cell = Cell(0, 0)
        assert cell.remove_candidates(bit(2) | bit(5))
        assert not cell.has_candidate(2)
        assert cell.candidate_count == 7
        assert not cell.remove_candidates(bit(2))

    def test_unassign_restores_candidates(self):
        """Test putting back a guessed cell."""
        cell = Cell(0, 0, candidates=mask_of([2, 7]))
        cell.assign(7)
        cell.unassign(mask_of([2, 7]))
        assert cell.value is None
        assert cell.candidate_digits() == [2, 7]

    def test_clear_and_reset(self):
        """Test clearing a clue and resetting candidates."""
        cell = Cell(1, 1, value=2, fixed=True, candidates=bit(2), row_segment=bit(2))
        cell.clear()
        assert cell.value is None
        assert not cell.fixed
        assert cell.candidates == ALL_CANDIDATES
        assert cell.row_segment == 0
        cell.candidates = bit(1)
        cell.reset_candidates()
        assert cell.candidates == ALL_CANDIDATES

    def test_reset_keeps_solved_cell(self):
        """Test that resetting a solved cell keeps its value as the only candidate."""
        cell = Cell(0, 0)
        cell.assign(4, fixed=True)
        cell.reset_candidates()
        assert cell.value == 4
        assert cell.candidates == bit(4)

    def test_to_dict(self):
        """Test the snapshot form of a cell."""
        cell = Cell(2, 3, candidates=mask_of([1, 8]), column_segment=bit(8))
        assert cell.to_dict() == {
            "row": 2,
            "col": 3,
            "value": None,
            "fixed": False,
            "candidates": [1, 8],
            "row_segment": [],
            "column_segment": [8],
        }


class TestUnits:
    """Tests for lines and boxes."""

    def test_line_requires_nine_cells(self):
        """Test that lines and boxes need nine cells."""
        with pytest.raises(ValueError):
            Line(LineType.ROW, 0, [Cell(0, 0)])
        with pytest.raises(ValueError):
            Box(0, [])

    def test_cells_with(self):
        """Test finding the cells of a line that allow a digit."""
        grid = Grid()
        row = grid.rows[3]
        for cell in row.cells[2:]:
            cell.remove_candidates(bit(8))
        assert [cell.col for cell in row.cells_with(8)] == [0, 1]

    def test_box_missing_digits(self):
        """Test digits not yet placed in a box."""
        grid = Grid.from_string("530070000600195000098000060" + "0" * 54)
        assert grid.boxes[0].missing_digits() == {1, 2, 4, 7}
        assert grid.boxes[8].missing_digits() == set(range(1, 10))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
