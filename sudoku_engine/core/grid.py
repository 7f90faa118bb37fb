"""The 9x9 grid: an arena of 81 cells seen as boxes, rows and columns."""

from __future__ import annotations
import json
import logging
from typing import Any, Callable, Iterator, List, Optional, Sequence

import numpy as np

from .cell import Cell
from .digits import DIGITS, bit, k_subsets, mask_of
from .exceptions import InvalidPuzzleError, SnapshotFormatError
from .units import Box, Line, LineType
from . import validator

log = logging.getLogger(__name__)

SNAPSHOT_FORMAT = "sudoku-engine-snapshot"
SNAPSHOT_VERSION = 1
CLUE_DIGITS = "123456789"


class Grid:
    """
    Standard 9x9 Sudoku grid.

    Cells live in a flat row-major list; the 9 boxes, 9 rows and 9 columns
    are three partitions of the same Cell objects. Iterating a grid visits
    the cells in solving order: box by box, row-major inside each box.
    """

    def __init__(self, cells: Optional[Sequence[Cell]] = None):
        """
        Create a grid.

        Args:
            cells: Optional 81 cells in row-major order. If None, every
                   cell starts blank with all nine candidates.
        """
        if cells is None:
            cells = [Cell(r, c) for r in range(9) for c in range(9)]
        self._build(list(cells))

    def _build(self, cells: List[Cell]) -> None:
        """Derive rows, columns and boxes from the arena."""
        if len(cells) != 81:
            raise ValueError(f"A grid holds 81 cells, got {len(cells)}")
        self._cells = cells
        self.rows = [Line(LineType.ROW, r, cells[r * 9:(r + 1) * 9]) for r in range(9)]
        self.columns = [Line(LineType.COLUMN, c, cells[c::9]) for c in range(9)]
        self.boxes = []
        for b in range(9):
            top, left = (b // 3) * 3, (b % 3) * 3
            members = [cells[(top + i) * 9 + left + j] for i in range(3) for j in range(3)]
            self.boxes.append(Box(b, members))
        self._traversal = [cell for box in self.boxes for cell in box]

    # ------------------------------------------------------------------
    # Access

    def cell(self, row: int, col: int) -> Cell:
        return self._cells[row * 9 + col]

    @property
    def cells(self) -> List[Cell]:
        """Cells in row-major order."""
        return list(self._cells)

    def row_of(self, cell: Cell) -> Line:
        return self.rows[cell.row]

    def column_of(self, cell: Cell) -> Line:
        return self.columns[cell.col]

    def box_of(self, cell: Cell) -> Box:
        return self.boxes[cell.box]

    def line(self, line_type: LineType, index: int) -> Line:
        return self.rows[index] if line_type is LineType.ROW else self.columns[index]

    def peers(self, cell: Cell) -> List[Cell]:
        """Cells sharing a box, row or column with cell, excluding itself."""
        seen = {id(cell)}
        peers = []
        for group in (self.box_of(cell), self.row_of(cell), self.column_of(cell)):
            for other in group:
                if id(other) not in seen:
                    seen.add(id(other))
                    peers.append(other)
        return peers

    def unsolved_cells(self) -> List[Cell]:
        """Unsolved cells in solving order."""
        return [cell for cell in self._traversal if cell.value is None]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._traversal)

    def __len__(self) -> int:
        return len(self._cells)

    # ------------------------------------------------------------------
    # Loading and export

    def load(self, clues: str) -> None:
        """
        Load an 81-character puzzle, row-major.

        '1'-'9' marks a clue; any other character (usually '0' or '.')
        an empty cell. On failure the grid is left untouched.

        Raises:
            InvalidPuzzleError: If clues is not an 81-character string.
        """
        if not isinstance(clues, str) or len(clues) != 81:
            length = len(clues) if isinstance(clues, str) else type(clues).__name__
            raise InvalidPuzzleError(f"Puzzle must be 81 characters, got {length}")
        for cell, char in zip(self._cells, clues):
            cell.clear()
            if char in CLUE_DIGITS:
                cell.assign(int(char), fixed=True)
        log.debug("Loaded puzzle with %d clues", self.count_filled())

    @classmethod
    def from_string(cls, clues: str) -> Grid:
        """Create a grid and load clues into it."""
        grid = cls()
        grid.load(clues)
        return grid

    def to_string(self) -> str:
        """Values as an 81-character string, '0' for empty cells."""
        return "".join(str(cell.value) if cell.value is not None else "0"
                       for cell in self._cells)

    def to_array(self) -> np.ndarray:
        """Values as a 9x9 int32 array, 0 for empty cells."""
        values = [cell.value or 0 for cell in self._cells]
        return np.array(values, dtype=np.int32).reshape(9, 9)

    def copy(self) -> Grid:
        """Deep copy of the grid."""
        return Grid([cell.copy() for cell in self._cells])

    # ------------------------------------------------------------------
    # Snapshots

    def serialize(self) -> str:
        """
        Serialize every cell's state to a compact JSON snapshot.

        Equal states always produce identical text, so snapshots can be
        compared as strings.
        """
        document = {
            "format": SNAPSHOT_FORMAT,
            "version": SNAPSHOT_VERSION,
            "cells": [cell.to_dict() for cell in self._cells],
        }
        return json.dumps(document, separators=(",", ":"))

    @classmethod
    def deserialize(cls, snapshot: str) -> Grid:
        """
        Rebuild a grid from a snapshot made by serialize().

        Raises:
            SnapshotFormatError: If the snapshot is malformed.
        """
        return cls(_parse_snapshot(snapshot))

    def restore(self, snapshot: str) -> None:
        """
        Replace every cell's state with the snapshot's and re-derive the
        rows, columns and boxes. On failure the grid is left untouched.
        """
        self._build(_parse_snapshot(snapshot))

    # ------------------------------------------------------------------
    # Status

    def count_filled(self) -> int:
        return sum(1 for cell in self._cells if cell.value is not None)

    def count_empty(self) -> int:
        return 81 - self.count_filled()

    def is_complete(self) -> bool:
        """True if every cell holds a value."""
        return all(cell.value is not None for cell in self._cells)

    def is_valid(self) -> bool:
        """True if no row, column or box repeats a value."""
        return validator.has_no_conflicts(self.to_array())

    def is_solved(self) -> bool:
        """True if the grid is complete and valid."""
        return self.is_complete() and self.is_valid()

    def has_contradiction(self) -> bool:
        """True if some unsolved cell has no candidates left."""
        return any(cell.value is None and cell.candidates == 0 for cell in self._cells)

    def state(self) -> List[tuple]:
        """Per-cell state tuples, row-major."""
        return [cell.state() for cell in self._cells]

    # ------------------------------------------------------------------
    # Whole-grid patterns

    def x_wing_rows(self) -> bool:
        """
        X-Wing over pairs of rows.

        When a digit occurs exactly twice in each of two rows, in the same
        two columns, it is removed from every other cell of those columns.
        Returns True if any candidate was removed.
        """
        return self._x_wing(self.rows, self.columns, lambda cell: cell.col)

    def x_wing_columns(self) -> bool:
        """X-Wing over pairs of columns, eliminating along rows."""
        return self._x_wing(self.columns, self.rows, lambda cell: cell.row)

    @staticmethod
    def _x_wing(lines: List[Line], crossing: List[Line],
                position: Callable[[Cell], int]) -> bool:
        changed = False
        for first, second in k_subsets(lines, 2):
            first_counts = first.digit_occurrence()
            second_counts = second.digit_occurrence()
            for digit in DIGITS:
                if first_counts[digit - 1] != 2 or second_counts[digit - 1] != 2:
                    continue
                first_cells = first.cells_with(digit)
                second_cells = second.cells_with(digit)
                positions = [position(cell) for cell in first_cells]
                if positions != [position(cell) for cell in second_cells]:
                    continue
                corners = first_cells + second_cells
                for index in positions:
                    for cell in crossing[index]:
                        if not any(cell is corner for corner in corners):
                            changed |= cell.remove_candidates(bit(digit))
        return changed

    # ------------------------------------------------------------------

    def __str__(self) -> str:
        """Pretty-print the values."""
        lines = []
        horizontal_sep = "+" + ("-" * 7 + "+") * 3
        for r in range(9):
            if r % 3 == 0:
                lines.append(horizontal_sep)
            row_str = "|"
            for c in range(9):
                value = self.cell(r, c).value
                row_str += f" {value}" if value is not None else " ."
                if (c + 1) % 3 == 0:
                    row_str += " |"
            lines.append(row_str)
        lines.append(horizontal_sep)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Grid(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return False
        return self.state() == other.state()

    # Mutable; compare with serialize() when a key is needed
    __hash__ = None


def _parse_snapshot(snapshot: str) -> List[Cell]:
    """Validate a snapshot document and build its 81 cells."""
    try:
        document = json.loads(snapshot)
    except (TypeError, ValueError) as e:
        raise SnapshotFormatError(f"Snapshot is not valid JSON: {e}") from e

    if not isinstance(document, dict) or document.get("format") != SNAPSHOT_FORMAT:
        raise SnapshotFormatError("Not a grid snapshot")
    if document.get("version") != SNAPSHOT_VERSION:
        raise SnapshotFormatError(f"Unsupported snapshot version {document.get('version')!r}")

    raw_cells = document.get("cells")
    if not isinstance(raw_cells, list) or len(raw_cells) != 81:
        raise SnapshotFormatError("Snapshot must hold exactly 81 cells")
    return [_cell_from_dict(raw, index) for index, raw in enumerate(raw_cells)]


def _cell_from_dict(raw: Any, index: int) -> Cell:
    if not isinstance(raw, dict):
        raise SnapshotFormatError(f"Cell {index} is not an object")
    try:
        row, col, value, fixed = raw["row"], raw["col"], raw["value"], raw["fixed"]
        candidates = mask_of(raw["candidates"])
        row_segment = mask_of(raw["row_segment"])
        column_segment = mask_of(raw["column_segment"])
    except KeyError as e:
        raise SnapshotFormatError(f"Cell {index} is missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise SnapshotFormatError(f"Cell {index} has a bad digit set: {e}") from e

    if (row, col) != divmod(index, 9):
        raise SnapshotFormatError(f"Cell {index} is out of order: ({row}, {col})")
    if not isinstance(fixed, bool):
        raise SnapshotFormatError(f"Cell {index} has a non-boolean fixed flag")
    if value is not None:
        if not isinstance(value, int) or isinstance(value, bool) or value not in DIGITS:
            raise SnapshotFormatError(f"Cell {index} has invalid value {value!r}")
        if candidates != bit(value):
            raise SnapshotFormatError(f"Cell {index} is solved but has other candidates")
    return Cell(row, col, value, fixed, candidates, row_segment, column_segment)
