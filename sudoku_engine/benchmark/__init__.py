"""Session driver: solve puzzle after puzzle from a source."""

from .benchmark import Benchmark, BenchmarkResult

__all__ = ["Benchmark", "BenchmarkResult"]
