"""Command-line interface for the Sudoku solving engine."""

import argparse
import logging
import sys

from .benchmark import Benchmark
from .config import SolverConfig, load_config
from .core.exceptions import InvalidPuzzleError, PuzzleUnsolvableError
from .core.grid import Grid
from .solvers import PropagationSolver, StepKind
from .sources import FilePuzzleSource


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku solving engine: candidate propagation with guessing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve one puzzle and show per-pass progress
  python -m sudoku_engine.cli solve --puzzle "530070000600195000..." --trace

  # Solve every puzzle in a file and save results
  python -m sudoku_engine.cli run --source puzzles.txt --count 20 --output results/
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show debug logging"
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON file with solver settings"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    solve_parser.add_argument(
        "--trace", "-t", action="store_true",
        help="Print one line per pass"
    )

    # Run command
    run_parser = subparsers.add_parser("run", help="Solve puzzles from a file one after another")
    run_parser.add_argument(
        "--source", "-s", type=str, required=True,
        help="Puzzle file (one puzzle per line, or a JSON list)"
    )
    run_parser.add_argument(
        "--count", "-n", type=int, default=10,
        help="Number of puzzles to solve (default: 10)"
    )
    run_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output directory for JSON results"
    )
    run_parser.add_argument(
        "--cycle", action="store_true",
        help="Start the file over when it runs out"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config(args.config) if args.config else SolverConfig()
    except (OSError, ValueError) as e:
        print(f"Error reading config: {e}")
        sys.exit(1)

    if args.command == "solve":
        cmd_solve(args, config)
    elif args.command == "run":
        cmd_run(args, config)


def cmd_solve(args, config: SolverConfig):
    """Handle the solve command."""
    try:
        grid = Grid.from_string(args.puzzle)
    except InvalidPuzzleError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)

    print("Input puzzle:")
    print(grid)
    print()

    solver = PropagationSolver(config)
    if args.trace:
        solved = _trace(solver, grid)
        solution = grid if solved else None
        stats = solver.stats
    else:
        solution, stats = solver.solve(grid)
        solved = stats.solved

    if solved:
        print(f"✓ Solved in {stats.passes} passes")
        print(f"  Guesses: {stats.guesses:,}")
        print(f"  Backtracks: {stats.backtracks:,}")
        if not args.trace:
            print(f"  Time: {stats.time_seconds:.4f}s")
            print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")
        print(solution)
    else:
        print("✗ Failed to solve")
        print(f"  Passes: {stats.passes:,}")
        sys.exit(1)


def _trace(solver: PropagationSolver, grid: Grid) -> bool:
    """Run the solve loop step by step, printing each pass."""
    try:
        for step in solver.steps(grid):
            if step.kind is StepKind.PASS:
                diff = step.diff
                print(f"Pass {step.pass_number}: {len(diff.assigned)} placed, "
                      f"{len(diff.narrowed)} narrowed, {grid.count_empty()} empty")
            elif step.kind is StepKind.STALLED:
                row, col = step.position
                print(f"Pass {step.pass_number}: stalled, guessing r{row + 1}c{col + 1} "
                      f"from {step.digits}")
            elif step.kind is StepKind.CONTRADICTION:
                print(f"Pass {step.pass_number}: contradiction, backtracking "
                      f"({len(solver.guess_stack)} guesses left)")
            elif step.kind is StepKind.SOLVED:
                return True
    except PuzzleUnsolvableError as e:
        print(f"Unsolvable: {e}")
    return False


def cmd_run(args, config: SolverConfig):
    """Handle the run command."""
    try:
        source = FilePuzzleSource(args.source, cycle=args.cycle)
    except (OSError, ValueError) as e:
        print(f"Error reading puzzles: {e}")
        sys.exit(1)

    print("=" * 60)
    print(f"Source: {args.source} ({len(source)} puzzles)")
    print(f"Puzzles to solve: {args.count}")
    print("=" * 60)

    benchmark = Benchmark(source, config=config)
    benchmark.run(args.count)
    summary = benchmark.get_summary()

    print(f"\n{summary['algorithm']}:")
    print(f"  Accuracy: {summary['accuracy']:.1f}% "
          f"({summary['total_solved']}/{summary['total_tested']})")
    if summary["total_tested"]:
        print(f"  Avg Time: {summary['avg_time_seconds']:.4f}s")
        print(f"  Avg Passes: {summary['avg_passes']:.1f}")
        print(f"  Avg Guesses: {summary['avg_guesses']:.1f}")

    if args.output:
        benchmark.save_results(args.output)
        print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
