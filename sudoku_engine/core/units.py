"""Rows, columns and boxes: fixed views of nine shared cells."""

from __future__ import annotations
from enum import Enum
from typing import Iterator, List, Sequence, Set

from .cell import Cell
from .digits import DIGITS


class LineType(Enum):
    """Orientation of a line."""
    ROW = "row"
    COLUMN = "column"


class Line:
    """
    A row or column of the grid.

    Holds references to the grid's own Cell objects, ordered by position
    along the line.
    """

    def __init__(self, line_type: LineType, index: int, cells: Sequence[Cell]):
        if len(cells) != 9:
            raise ValueError(f"A line holds 9 cells, got {len(cells)}")
        self.line_type = line_type
        self.index = index
        self.cells: List[Cell] = list(cells)

    def digit_occurrence(self) -> List[int]:
        """
        Count, per digit, how often it occurs along the line.

        A solved cell counts once for its value; an unsolved cell counts
        once for each of its candidates. Index 0 holds digit 1.
        """
        occurrence = [0] * 9
        for cell in self.cells:
            if cell.value is not None:
                occurrence[cell.value - 1] += 1
            else:
                for digit in cell.candidate_digits():
                    occurrence[digit - 1] += 1
        return occurrence

    def cells_with(self, digit: int) -> List[Cell]:
        """Cells along the line whose candidates include digit."""
        return [cell for cell in self.cells if cell.has_candidate(digit)]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __repr__(self) -> str:
        return f"Line({self.line_type.value} {self.index})"


class Box:
    """A 3x3 box, its cells in row-major order."""

    def __init__(self, index: int, cells: Sequence[Cell]):
        if len(cells) != 9:
            raise ValueError(f"A box holds 9 cells, got {len(cells)}")
        self.index = index
        self.box_row = index // 3
        self.box_col = index % 3
        self.cells: List[Cell] = list(cells)

    def missing_digits(self) -> Set[int]:
        """Digits not yet placed in this box."""
        placed = {cell.value for cell in self.cells if cell.value is not None}
        return set(DIGITS) - placed

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __repr__(self) -> str:
        return f"Box({self.index})"
