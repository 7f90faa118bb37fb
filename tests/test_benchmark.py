"""Tests for the session driver."""

import json

import pytest
from sudoku_engine.benchmark import Benchmark
from sudoku_engine.sources import ListPuzzleSource


TEST_PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
TEST_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"
DEAD_END_PUZZLE = "12345678." + "........9" + "." * 63


class TestBenchmark:
    """Tests for solving a stream of puzzles."""

    def test_moves_on_after_each_puzzle(self):
        """Test that solved, rejected and unsolvable puzzles are all followed by the next."""
        source = ListPuzzleSource([TEST_PUZZLE, "123", DEAD_END_PUZZLE])
        benchmark = Benchmark(source)

        results = benchmark.run(count=5, show_progress=False)

        assert [r.puzzle_id for r in results] == [1, 2, 3]
        assert results[0].solved
        assert results[0].solution == TEST_SOLUTION
        assert results[0].guesses == 0
        assert not results[1].solved
        assert "81" in results[1].error
        assert not results[2].solved
        assert results[2].solution is None

    def test_summary_and_save(self, tmp_path):
        """Test summary statistics and the JSON result files."""
        benchmark = Benchmark(ListPuzzleSource([TEST_PUZZLE, DEAD_END_PUZZLE]))
        benchmark.run(count=2, show_progress=False)

        summary = benchmark.get_summary()
        assert summary["total_tested"] == 2
        assert summary["total_solved"] == 1
        assert summary["accuracy"] == pytest.approx(50.0)

        benchmark.save_results(str(tmp_path))
        with open(tmp_path / "benchmark_results.json") as f:
            saved = json.load(f)
        assert len(saved) == 2
        assert saved[0]["max_stack_depth"] == 0
        assert (tmp_path / "benchmark_summary.json").exists()

    def test_empty_summary(self):
        """Test running against an empty source."""
        benchmark = Benchmark(ListPuzzleSource([]))
        assert benchmark.run(count=3, show_progress=False) == []
        assert benchmark.get_summary()["accuracy"] == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
