"""Validation utilities for Sudoku value layouts."""

from __future__ import annotations
import numpy as np
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from .grid import Grid

FULL_UNIT = np.arange(1, 10, dtype=np.int32)


def _units(values: np.ndarray) -> Iterator[np.ndarray]:
    """Yield the 27 rows, columns and boxes of a 9x9 value array."""
    for i in range(9):
        yield values[i, :]
        yield values[:, i]
    for box_row in range(0, 9, 3):
        for box_col in range(0, 9, 3):
            yield values[box_row:box_row + 3, box_col:box_col + 3].flatten()


def has_no_conflicts(values: np.ndarray) -> bool:
    """
    Check that no row, column or box repeats a value.

    Args:
        values: 9x9 array, 0 for empty cells.

    Returns:
        True if no constraint is violated. Empty cells are ignored.
    """
    for unit in _units(values):
        non_zero = unit[unit != 0]
        if len(non_zero) != len(np.unique(non_zero)):
            return False
    return True


def is_complete_solution(values: np.ndarray) -> bool:
    """True if each row, column and box holds every digit 1-9 exactly once."""
    return all(np.array_equal(np.sort(unit), FULL_UNIT) for unit in _units(values))


def is_valid_grid(grid: Grid) -> bool:
    """True if the grid's placed values violate no constraint."""
    return has_no_conflicts(grid.to_array())


def validate_solution(clues: str, solution: Grid) -> bool:
    """
    Validate that a grid correctly solves a puzzle.

    Args:
        clues: The 81-character puzzle the solve started from.
        solution: The proposed solution.

    Returns:
        True if the solution is complete, valid and keeps every clue.
    """
    if len(clues) != 81:
        return False
    solved = solution.to_string()
    for clue, value in zip(clues, solved):
        if clue in "123456789" and clue != value:
            return False
    return is_complete_solution(solution.to_array())
