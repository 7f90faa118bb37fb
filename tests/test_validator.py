"""Unit tests for validation utilities."""

import numpy as np
import pytest
from sudoku_engine.core.grid import Grid
from sudoku_engine.core.validator import (
    has_no_conflicts, is_complete_solution, is_valid_grid, validate_solution,
)


TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


class TestValidator:
    """Tests for validation utilities."""

    def test_empty_is_valid(self):
        """Test an empty grid."""
        assert has_no_conflicts(np.zeros((9, 9), dtype=np.int32))

    def test_row_conflict(self):
        """Test a repeated digit in a row."""
        values = np.zeros((9, 9), dtype=np.int32)
        values[0, 0] = 5
        values[0, 5] = 5
        assert not has_no_conflicts(values)

    def test_box_conflict(self):
        """Test a repeated digit in a box."""
        values = np.zeros((9, 9), dtype=np.int32)
        values[0, 0] = 5
        values[1, 1] = 5
        assert not has_no_conflicts(values)

    def test_complete_solution(self):
        """Test a valid, complete solution."""
        grid = Grid.from_string(TEST_SOLUTION)
        assert is_complete_solution(grid.to_array())
        assert is_valid_grid(grid)
        assert validate_solution(TEST_PUZZLE, grid)

    def test_incomplete_is_not_a_solution(self):
        """Test that a valid puzzle is not yet a solution."""
        grid = Grid.from_string(TEST_PUZZLE)
        assert is_valid_grid(grid)
        assert not is_complete_solution(grid.to_array())
        assert not validate_solution(TEST_PUZZLE, grid)

    def test_solution_must_keep_clues(self):
        """Test a solution that disagrees with a clue."""
        other_puzzle = "6" + TEST_PUZZLE[1:]
        assert not validate_solution(other_puzzle, Grid.from_string(TEST_SOLUTION))

    def test_swapped_rows_break_boxes(self):
        """Test row swaps inside and across bands."""
        swapped = TEST_SOLUTION[9:18] + TEST_SOLUTION[:9] + TEST_SOLUTION[18:]
        assert is_complete_solution(Grid.from_string(swapped).to_array())
        swapped = TEST_SOLUTION[27:36] + TEST_SOLUTION[9:27] + TEST_SOLUTION[:9] + TEST_SOLUTION[36:]
        assert not is_complete_solution(Grid.from_string(swapped).to_array())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
