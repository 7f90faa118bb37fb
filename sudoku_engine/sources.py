"""Puzzle sources: where the next puzzle comes from."""

from __future__ import annotations
import json
from abc import ABC, abstractmethod
from typing import Iterable, List

from .core.exceptions import PuzzleSourceExhausted


class PuzzleSource(ABC):
    """Hands out 81-character clue strings, '0' for empty cells."""

    @abstractmethod
    def next_puzzle(self) -> str:
        """
        Return the next puzzle.

        Raises:
            PuzzleSourceExhausted: If no puzzle is left.
        """
        pass


class ListPuzzleSource(PuzzleSource):
    """Serves puzzles from a list, optionally starting over when done."""

    def __init__(self, puzzles: Iterable[str], cycle: bool = False):
        self.puzzles: List[str] = list(puzzles)
        self.cycle = cycle
        self._index = 0

    def next_puzzle(self) -> str:
        if self._index >= len(self.puzzles):
            if not self.cycle or not self.puzzles:
                raise PuzzleSourceExhausted(f"All {len(self.puzzles)} puzzles handed out")
            self._index = 0
        puzzle = self.puzzles[self._index]
        self._index += 1
        return puzzle

    def __len__(self) -> int:
        return len(self.puzzles)


class FilePuzzleSource(ListPuzzleSource):
    """
    Puzzles read from a file.

    Either plain text with one puzzle per line (blank lines and lines
    starting with '#' are skipped), or a JSON list whose items are puzzle
    strings or objects with a "puzzle" key.
    """

    def __init__(self, path: str, cycle: bool = False):
        self.path = path
        super().__init__(read_puzzles(path), cycle=cycle)


def read_puzzles(path: str) -> List[str]:
    """Read puzzle strings from a text or JSON file."""
    with open(path, "r") as f:
        text = f.read()

    if text.lstrip().startswith("["):
        items = json.loads(text)
        puzzles = []
        for index, item in enumerate(items):
            if isinstance(item, dict):
                if "puzzle" not in item:
                    raise ValueError(f"{path}: item {index} has no \"puzzle\" key")
                puzzles.append(str(item["puzzle"]))
            else:
                puzzles.append(str(item))
        return puzzles

    puzzles = []
    for line in text.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            puzzles.append(line)
    return puzzles
