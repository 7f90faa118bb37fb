"""Candidate bitmask helpers and subset enumeration."""

from __future__ import annotations
from itertools import combinations
from typing import Iterable, Iterator, List, Sequence, Tuple, TypeVar

T = TypeVar("T")

DIGITS = range(1, 10)

# Bit d is set when digit d is still possible; bit 0 is unused.
NO_CANDIDATES = 0
ALL_CANDIDATES = 0b1111111110


def bit(digit: int) -> int:
    """Mask holding a single digit."""
    return 1 << digit


def mask_of(digits: Iterable[int]) -> int:
    """Build a candidate mask from an iterable of digits 1-9."""
    mask = NO_CANDIDATES
    for digit in digits:
        if digit not in DIGITS:
            raise ValueError(f"Digit must be 1-9, got {digit}")
        mask |= 1 << digit
    return mask


def digits_of(mask: int) -> List[int]:
    """Sorted digits contained in a mask."""
    return [d for d in DIGITS if mask & (1 << d)]


def count(mask: int) -> int:
    """Number of digits in a mask."""
    return bin(mask).count("1")


def k_subsets(items: Sequence[T], k: int) -> Iterator[Tuple[T, ...]]:
    """
    Lazily enumerate the size-k subsets of items, in index order.

    Every call returns a fresh generator, so enumeration can be restarted
    after the underlying candidate state changed. Sizes outside
    0..len(items) yield nothing.
    """
    if k < 0 or k > len(items):
        return iter(())
    return combinations(items, k)
