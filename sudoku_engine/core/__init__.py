"""Core module: grid data model, snapshots and validation."""

from .cell import Cell
from .exceptions import (
    SudokuError,
    InvalidPuzzleError,
    SnapshotFormatError,
    PuzzleUnsolvableError,
    PuzzleSourceExhausted,
)
from .grid import Grid
from .units import Box, Line, LineType
from .validator import is_complete_solution, is_valid_grid, validate_solution

__all__ = [
    "Cell",
    "Grid",
    "Box",
    "Line",
    "LineType",
    "SudokuError",
    "InvalidPuzzleError",
    "SnapshotFormatError",
    "PuzzleUnsolvableError",
    "PuzzleSourceExhausted",
    "is_complete_solution",
    "is_valid_grid",
    "validate_solution",
]
