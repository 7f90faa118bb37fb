"""Solve a stream of puzzles and collect results."""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from ..config import SolverConfig
from ..core.exceptions import InvalidPuzzleError, PuzzleSourceExhausted
from ..core.grid import Grid
from ..core.validator import validate_solution
from ..solvers import BaseSolver, PropagationSolver
from ..sources import PuzzleSource

log = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Result of solving one puzzle."""
    puzzle_id: int
    puzzle: str
    solved: bool
    time_seconds: float = 0.0
    memory_bytes: int = 0
    passes: int = 0
    backtracks: int = 0
    guesses: int = 0
    max_stack_depth: int = 0
    solution: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "puzzle": self.puzzle,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "passes": self.passes,
            "backtracks": self.backtracks,
            "guesses": self.guesses,
            "max_stack_depth": self.max_stack_depth,
            "solution": self.solution,
            "error": self.error
        }


class Benchmark:
    """
    Pulls puzzles from a source and solves them one after another.

    A puzzle that is solved, or abandoned as unsolvable, is followed by a
    fresh one from the source until the requested count is reached or the
    source runs dry.
    """

    def __init__(
        self,
        source: PuzzleSource,
        solver: Optional[BaseSolver] = None,
        config: Optional[SolverConfig] = None
    ):
        """
        Initialize the benchmark.

        Args:
            source: Where puzzles come from.
            solver: Solver instance (default: PropagationSolver(config)).
            config: Solver settings, used when no solver is given.
        """
        self.source = source
        self.solver = solver or PropagationSolver(config)
        self.results: List[BenchmarkResult] = []

    def run(self, count: int, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Solve up to `count` puzzles.

        Returns:
            List of BenchmarkResult objects, one per puzzle attempted.
        """
        self.results = []
        for puzzle_id in tqdm(range(1, count + 1), desc="Solving", disable=not show_progress):
            try:
                puzzle = self.source.next_puzzle()
            except PuzzleSourceExhausted as e:
                log.info("Puzzle source exhausted: %s", e)
                break
            self.results.append(self.solve_one(puzzle_id, puzzle))
        return self.results

    def solve_one(self, puzzle_id: int, puzzle: str) -> BenchmarkResult:
        """Load and solve a single puzzle."""
        try:
            grid = Grid.from_string(puzzle)
        except InvalidPuzzleError as e:
            log.info("Puzzle %d rejected: %s", puzzle_id, e)
            return BenchmarkResult(puzzle_id, puzzle, solved=False, error=str(e))

        solution, stats = self.solver.solve(grid)
        solved = solution is not None and validate_solution(puzzle, solution)
        if solved:
            log.info("Puzzle %d solved in %d passes", puzzle_id, stats.passes)
        else:
            log.info("Puzzle %d abandoned after %d passes", puzzle_id, stats.passes)

        return BenchmarkResult(
            puzzle_id=puzzle_id,
            puzzle=puzzle,
            solved=solved,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            passes=stats.passes,
            backtracks=stats.backtracks,
            guesses=stats.guesses,
            solution=solution.to_string() if solution is not None else None,
            max_stack_depth=stats.max_stack_depth,
        )

    def get_summary(self) -> Dict[str, Any]:
        """Aggregate the results of the last run."""
        tested = len(self.results)
        solved = [r for r in self.results if r.solved]
        summary: Dict[str, Any] = {
            "algorithm": self.solver.name,
            "total_tested": tested,
            "total_solved": len(solved),
            "accuracy": len(solved) / tested * 100 if tested else 0.0,
        }
        if tested:
            summary["avg_time_seconds"] = sum(r.time_seconds for r in self.results) / tested
            summary["avg_memory_mb"] = sum(r.memory_bytes for r in self.results) / tested / (1024 * 1024)
            summary["avg_passes"] = sum(r.passes for r in self.results) / tested
            summary["avg_guesses"] = sum(r.guesses for r in self.results) / tested
        return summary

    def save_results(self, output_dir: str) -> None:
        """Save results and summary as JSON files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        log.info("Results saved to %s", output_dir)
