"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats
from .propagation_solver import PassDiff, PropagationSolver, SolveStep, StepKind, solve_puzzle
from . import techniques

__all__ = [
    "BaseSolver",
    "SolverStats",
    "PropagationSolver",
    "PassDiff",
    "SolveStep",
    "StepKind",
    "solve_puzzle",
    "techniques",
]
