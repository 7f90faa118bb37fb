"""Errors raised by the Sudoku engine."""


class SudokuError(Exception):
    """Base class for all engine errors."""


class InvalidPuzzleError(SudokuError, ValueError):
    """A clue string could not be loaded into a grid."""


class SnapshotFormatError(SudokuError, ValueError):
    """A serialized grid snapshot is malformed."""


class PuzzleUnsolvableError(SudokuError):
    """The guess stack ran out while the grid was still contradictory."""


class PuzzleSourceExhausted(SudokuError):
    """A puzzle source has no more puzzles to hand out."""
