"""Propagation solver: deduction passes with guess-and-backtrack fallback."""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .base_solver import BaseSolver, SolverStats
from .techniques import apply_techniques, naked_hidden_single
from ..config import SolverConfig
from ..core.cell import Cell
from ..core.exceptions import PuzzleUnsolvableError
from ..core.grid import Grid

log = logging.getLogger(__name__)

Position = Tuple[int, int]


class StepKind(Enum):
    """What happened at a suspension point of the solve loop."""
    CELL = "cell"
    PASS = "pass"
    STALLED = "stalled"
    CONTRADICTION = "contradiction"
    RESTORED = "restored"
    SOLVED = "solved"


@dataclass
class PassDiff:
    """Cells changed by one pass."""
    narrowed: List[Position] = field(default_factory=list)
    assigned: Dict[Position, int] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return bool(self.narrowed or self.assigned)

    @classmethod
    def between(cls, before: List[tuple], after: List[tuple]) -> PassDiff:
        """Diff two Grid.state() lists."""
        diff = cls()
        for index, (old, new) in enumerate(zip(before, after)):
            position = divmod(index, 9)
            if old[0] is None and new[0] is not None:
                diff.assigned[position] = new[0]
            elif old[2] != new[2]:
                diff.narrowed.append(position)
        return diff


@dataclass
class SolveStep:
    """
    One observation of the solve loop.

    Attributes:
        kind: What happened.
        pass_number: 1-based pass counter.
        position: Cell concerned (CELL and STALLED steps).
        value: Value assigned to the cell, if any (CELL steps).
        digits: Digits pushed as guesses (STALLED steps).
        diff: Changes made by the pass (PASS steps).
    """
    kind: StepKind
    pass_number: int
    position: Optional[Position] = None
    value: Optional[int] = None
    digits: List[int] = field(default_factory=list)
    diff: Optional[PassDiff] = None


class PropagationSolver(BaseSolver):
    """
    Sudoku solver driven by repeated deduction passes.

    Each pass runs X-Wing over the whole grid, then visits every unsolved
    cell in grid order, applying the per-cell techniques and placing any
    forced value. When a pass changes nothing the solver guesses: it pushes
    one snapshot per candidate of the cell with the fewest candidates and
    resumes from the most recent one. A contradiction pops the next
    snapshot off the guess stack.
    """

    name = "Propagation+Guessing"

    def __init__(self, config: Optional[SolverConfig] = None):
        """
        Initialize the solver.

        Args:
            config: Solver settings (default: SolverConfig()).
        """
        super().__init__()
        self.config = config or SolverConfig()
        self.guess_stack: List[str] = []

    def _solve(self, grid: Grid) -> Optional[Grid]:
        """Run the solve loop to completion."""
        solved = False
        try:
            for step in self.steps(grid):
                solved = step.kind is StepKind.SOLVED
        except PuzzleUnsolvableError as e:
            log.debug("Giving up: %s", e)
            return None
        return grid if solved else None

    def steps(self, grid: Grid) -> Iterator[SolveStep]:
        """
        Solve grid in place, yielding after every cell and every pass.

        The yields only let a caller observe the grid or stop; closing the
        generator cancels the solve and discards the guess stack.

        Raises:
            PuzzleUnsolvableError: If a contradiction is reached with no
                guesses left to try.
        """
        self.stats = SolverStats(algorithm=self.name)
        self.guess_stack = []
        max_passes = self.config.max_passes
        pass_number = 0

        try:
            while True:
                if max_passes is not None and pass_number >= max_passes:
                    log.warning("Stopped after %d passes without a solution", pass_number)
                    return
                pass_number += 1
                self.stats.passes = pass_number
                start_snapshot = grid.serialize()
                start_state = grid.state()

                if self.config.use_x_wing:
                    grid.x_wing_rows()
                    grid.x_wing_columns()

                contradiction = False
                for cell in grid:
                    if cell.value is not None:
                        continue
                    apply_techniques(grid, cell, self.config.max_set_size)
                    value = naked_hidden_single(grid, cell)
                    if value is not None:
                        cell.assign(value)
                    yield SolveStep(StepKind.CELL, pass_number, cell.position, value)
                    if cell.value is None and cell.candidates == 0:
                        contradiction = True
                        break

                if not contradiction and grid.is_complete():
                    if grid.is_valid():
                        log.debug("Solved after %d passes", pass_number)
                        yield SolveStep(StepKind.SOLVED, pass_number)
                        return
                    contradiction = True

                if contradiction or grid.has_contradiction():
                    log.debug("Contradiction in pass %d, %d guesses left",
                              pass_number, len(self.guess_stack))
                    yield SolveStep(StepKind.CONTRADICTION, pass_number)
                    self.stats.backtracks += 1
                    self._restore_next(grid)
                    yield SolveStep(StepKind.RESTORED, pass_number)
                elif grid.serialize() == start_snapshot:
                    cell, digits = self._push_guesses(grid)
                    log.debug("Stalled in pass %d, guessing r%dc%d in %s",
                              pass_number, cell.row, cell.col, digits)
                    yield SolveStep(StepKind.STALLED, pass_number, cell.position, digits=digits)
                    self._restore_next(grid)
                    yield SolveStep(StepKind.RESTORED, pass_number)
                else:
                    diff = PassDiff.between(start_state, grid.state())
                    yield SolveStep(StepKind.PASS, pass_number, diff=diff)
        finally:
            self.guess_stack.clear()

    def _select_guess_cell(self, grid: Grid) -> Cell:
        """
        Unsolved cell with the fewest candidates.

        Ties go to the cell visited first in grid order.
        """
        return min(grid.unsolved_cells(), key=lambda cell: cell.candidate_count)

    def _push_guesses(self, grid: Grid) -> Tuple[Cell, List[int]]:
        """Push one snapshot per candidate of the chosen cell, ascending."""
        cell = self._select_guess_cell(grid)
        candidates = cell.candidates
        digits = cell.candidate_digits()
        for digit in digits:
            cell.assign(digit)
            self.guess_stack.append(grid.serialize())
            cell.unassign(candidates)
        self.stats.guesses += len(digits)
        self.stats.max_stack_depth = max(self.stats.max_stack_depth, len(self.guess_stack))
        return cell, digits

    def _restore_next(self, grid: Grid) -> None:
        """Pop the most recent snapshot and restore the grid to it."""
        if not self.guess_stack:
            raise PuzzleUnsolvableError("No guesses left to try")
        grid.restore(self.guess_stack.pop())


def solve_puzzle(clues: str, config: Optional[SolverConfig] = None) -> tuple[Optional[Grid], SolverStats]:
    """Load a clue string and solve it."""
    return PropagationSolver(config).solve(Grid.from_string(clues))
