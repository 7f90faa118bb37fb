"""Solver interface: timed, memory-tracked solves of a loaded grid."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any
import time
import tracemalloc

from ..core.grid import Grid


@dataclass
class SolverStats:
    """Statistics from one solve."""
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    passes: int = 0

    # Guess stack activity
    guesses: int = 0
    backtracks: int = 0
    max_stack_depth: int = 0

    algorithm: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "algorithm": self.algorithm,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "passes": self.passes,
            "guesses": self.guesses,
            "backtracks": self.backtracks,
            "max_stack_depth": self.max_stack_depth
        }


class BaseSolver(ABC):
    """Abstract base class for grid solvers."""

    name: str = "BaseSolver"

    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, grid: Grid) -> tuple[Optional[Grid], SolverStats]:
        """
        Solve a copy of grid, timing it and tracking peak memory.

        Args:
            grid: The loaded puzzle. It is not modified.

        Returns:
            Tuple of (solved grid or None, stats).
        """
        self.stats = SolverStats(algorithm=self.name)

        tracemalloc.start()
        start_time = time.perf_counter()
        try:
            solution = self._solve(grid.copy())
            self.stats.solved = solution is not None and solution.is_solved()
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            _, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.stats.memory_bytes = peak

        return solution, self.stats

    @abstractmethod
    def _solve(self, grid: Grid) -> Optional[Grid]:
        """
        Solve grid in place.

        Returns:
            The solved grid, or None if the puzzle has no solution.
        """
