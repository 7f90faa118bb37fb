"""Sudoku solving engine: candidate propagation with guess-and-backtrack search."""

from .config import SolverConfig, load_config
from .core import Grid, InvalidPuzzleError, PuzzleUnsolvableError, SnapshotFormatError
from .solvers import PropagationSolver, StepKind, solve_puzzle

__version__ = "1.0.0"

__all__ = [
    "Grid",
    "PropagationSolver",
    "SolverConfig",
    "StepKind",
    "InvalidPuzzleError",
    "PuzzleUnsolvableError",
    "SnapshotFormatError",
    "load_config",
    "solve_puzzle",
]
