"""
Per-cell deduction techniques.

Each technique works on one cell of a grid and narrows the candidates of
that cell or of its peers. apply_techniques() runs them in the order the
solve loop relies on: later techniques build on what earlier ones removed
during the same visit.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Tuple

from ..core.cell import Cell
from ..core.digits import bit, count, digits_of, k_subsets
from ..core.grid import Grid
from ..config import DEFAULT_MAX_SET_SIZE


def _groups(grid: Grid, cell: Cell) -> Tuple[List[Cell], List[Cell], List[Cell]]:
    """The box, row and column of a cell, in that order."""
    return (grid.box_of(cell).cells, grid.row_of(cell).cells, grid.column_of(cell).cells)


def _contains(cells: Iterable[Cell], cell: Cell) -> bool:
    return any(cell is member for member in cells)


def remove_used_options(grid: Grid, cell: Cell) -> bool:
    """
    Remove digits ruled out by the cell's peers.

    Solved peers remove their value. Peers in another box on the same row
    remove their row-segment digits (a pointing pair seen from outside the
    box); likewise for columns.

    Returns:
        True if any candidate was removed.
    """
    if cell.value is not None:
        return False
    used = 0
    for group in _groups(grid, cell):
        for peer in group:
            if peer is cell:
                continue
            if peer.value is not None:
                used |= bit(peer.value)
            if peer.box != cell.box:
                if peer.row == cell.row:
                    used |= peer.row_segment
                elif peer.col == cell.col:
                    used |= peer.column_segment
    return cell.remove_candidates(used)


def compute_row_segment_candidates(grid: Grid, cell: Cell) -> int:
    """
    Store and return the candidates that, within the cell's box, can only
    sit in the cell's row.
    """
    confined = cell.candidates
    for other in grid.box_of(cell):
        if other.row != cell.row:
            confined &= ~other.candidates
    cell.row_segment = confined
    return confined


def compute_column_segment_candidates(grid: Grid, cell: Cell) -> int:
    """Column counterpart of compute_row_segment_candidates()."""
    confined = cell.candidates
    for other in grid.box_of(cell):
        if other.col != cell.col:
            confined &= ~other.candidates
    cell.column_segment = confined
    return confined


def box_line_reduction_row(grid: Grid, cell: Cell) -> bool:
    """
    Box-line reduction along the cell's row.

    A digit possible in the box's part of the row but nowhere else on the
    row must go in that part, so it is removed from the box's other rows.
    """
    inside = outside = 0
    for other in grid.row_of(cell):
        if other.box == cell.box:
            inside |= other.candidates
        else:
            outside |= other.candidates
    confined = inside & ~outside
    if not confined:
        return False
    changed = False
    for other in grid.box_of(cell):
        if other.row != cell.row:
            changed |= other.remove_candidates(confined)
    return changed


def box_line_reduction_column(grid: Grid, cell: Cell) -> bool:
    """Box-line reduction along the cell's column."""
    inside = outside = 0
    for other in grid.column_of(cell):
        if other.box == cell.box:
            inside |= other.candidates
        else:
            outside |= other.candidates
    confined = inside & ~outside
    if not confined:
        return False
    changed = False
    for other in grid.box_of(cell):
        if other.col != cell.col:
            changed |= other.remove_candidates(confined)
    return changed


def naked_set_in(cells: List[Cell], cell: Cell, size: int) -> bool:
    """
    Naked set anchored on cell within one group.

    Applies when the cell has exactly `size` candidates and exactly
    `size - 1` other unsolved cells of the group hold subsets of them:
    those digits are then used up by the set and leave every other cell.
    """
    if cell.value is not None or cell.candidate_count != size:
        return False
    others = [other for other in cells if other is not cell]
    members = [other for other in others
               if other.value is None and not other.candidates & ~cell.candidates]
    if len(members) != size - 1:
        return False
    changed = False
    for other in others:
        if not _contains(members, other):
            changed |= other.remove_candidates(cell.candidates)
    return changed


def naked_set(grid: Grid, cell: Cell, size: int) -> bool:
    """Naked set of the given size in the cell's box, row and column."""
    changed = False
    for group in _groups(grid, cell):
        changed |= naked_set_in(group, cell, size)
    return changed


def hidden_set_in(cells: List[Cell], size: int) -> bool:
    """
    Look at every combination of `size` unsolved cells of a group. When
    their candidates add up to exactly `size` digits, those digits are
    confined to the combination and are removed from the rest of the group.
    """
    unsolved = [other for other in cells if other.value is None]
    changed = False
    for combination in k_subsets(unsolved, size):
        union = 0
        for member in combination:
            union |= member.candidates
        if count(union) != size:
            continue
        for other in cells:
            if not _contains(combination, other):
                changed |= other.remove_candidates(union)
    return changed


def hidden_set(grid: Grid, cell: Cell, size: int) -> bool:
    """Hidden set of the given size in the cell's box, row and column."""
    changed = False
    for group in _groups(grid, cell):
        changed |= hidden_set_in(group, size)
    return changed


def _is_unique_in(cells: Iterable[Cell], digit: int, cell: Cell) -> bool:
    """True if no cell but `cell` holds or permits digit."""
    mask = bit(digit)
    return not any(other is not cell and other.candidates & mask for other in cells)


def naked_hidden_single(grid: Grid, cell: Cell) -> Optional[int]:
    """
    The value the cell is forced to take, if any.

    Returns the cell's value if already solved, its only candidate if one
    is left, or the first candidate no other cell of its box, row or column
    permits. None when nothing is forced.
    """
    if cell.value is not None:
        return cell.value
    digits = digits_of(cell.candidates)
    if len(digits) == 1:
        return digits[0]
    groups = _groups(grid, cell)
    for digit in digits:
        if any(_is_unique_in(group, digit, cell) for group in groups):
            return digit
    return None


def apply_techniques(grid: Grid, cell: Cell, max_set_size: int = DEFAULT_MAX_SET_SIZE) -> None:
    """Run every technique for one cell, in solving order."""
    remove_used_options(grid, cell)
    compute_row_segment_candidates(grid, cell)
    compute_column_segment_candidates(grid, cell)
    box_line_reduction_row(grid, cell)
    box_line_reduction_column(grid, cell)
    for size in range(2, max_set_size + 1):
        naked_set(grid, cell, size)
    for size in range(2, max_set_size + 1):
        hidden_set(grid, cell, size)
