"""Single cell of a Sudoku grid."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .digits import ALL_CANDIDATES, NO_CANDIDATES, bit, count, digits_of


@dataclass(eq=False)
class Cell:
    """
    State of one cell, stored in the grid's arena.

    A cell does not know its grid: box, row and column membership follow
    from (row, col). Candidate sets are 9-bit masks, see core.digits.

    Attributes:
        row, col: Position, 0-8.
        value: Solved digit, or None.
        fixed: True for clues given by the puzzle.
        candidates: Digits still possible for this cell.
        row_segment: Candidates that, inside this cell's box, are confined
            to this cell's row.
        column_segment: Same for this cell's column.
    """
    row: int
    col: int
    value: Optional[int] = None
    fixed: bool = False
    candidates: int = ALL_CANDIDATES
    row_segment: int = NO_CANDIDATES
    column_segment: int = NO_CANDIDATES

    @property
    def box(self) -> int:
        """Index (0-8) of the box containing this cell."""
        return (self.row // 3) * 3 + self.col // 3

    @property
    def position(self) -> tuple:
        return (self.row, self.col)

    @property
    def is_solved(self) -> bool:
        return self.value is not None

    @property
    def candidate_count(self) -> int:
        return count(self.candidates)

    def candidate_digits(self) -> List[int]:
        """Sorted list of remaining candidates."""
        return digits_of(self.candidates)

    def has_candidate(self, digit: int) -> bool:
        return bool(self.candidates & bit(digit))

    def reset_candidates(self) -> None:
        """Make every digit possible again. Solved cells keep {value}."""
        if self.value is None:
            self.candidates = ALL_CANDIDATES

    def assign(self, value: int, fixed: bool = False) -> None:
        """Solve the cell; its candidates collapse to {value}."""
        if value < 1 or value > 9:
            raise ValueError(f"Value must be 1-9, got {value}")
        self.value = value
        self.fixed = fixed
        self.candidates = bit(value)

    def unassign(self, candidates: int) -> None:
        """Return the cell to the unsolved state with the given candidates."""
        self.value = None
        self.fixed = False
        self.candidates = candidates

    def remove_candidates(self, mask: int) -> bool:
        """
        Drop the digits in mask from the candidates of an unsolved cell.

        Solved cells are left alone. Returns True if anything was removed.
        """
        if self.value is not None:
            return False
        remaining = self.candidates & ~mask
        if remaining == self.candidates:
            return False
        self.candidates = remaining
        return True

    def clear(self) -> None:
        """Reset to a blank, unfixed cell."""
        self.value = None
        self.fixed = False
        self.candidates = ALL_CANDIDATES
        self.row_segment = NO_CANDIDATES
        self.column_segment = NO_CANDIDATES

    def copy(self) -> Cell:
        return Cell(self.row, self.col, self.value, self.fixed,
                    self.candidates, self.row_segment, self.column_segment)

    def state(self) -> tuple:
        """Comparable tuple of everything that changes while solving."""
        return (self.value, self.fixed, self.candidates,
                self.row_segment, self.column_segment)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary with a fixed key order."""
        return {
            "row": self.row,
            "col": self.col,
            "value": self.value,
            "fixed": self.fixed,
            "candidates": digits_of(self.candidates),
            "row_segment": digits_of(self.row_segment),
            "column_segment": digits_of(self.column_segment),
        }

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Cell(r{self.row}c{self.col}={self.value}{'*' if self.fixed else ''})"
        return f"Cell(r{self.row}c{self.col} {self.candidate_digits()})"
