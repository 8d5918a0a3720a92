"""Conflict counting for candidate grids."""

from __future__ import annotations

from typing import Iterable, Sequence

from .domains import BOX, DIGITS, SIZE


def _duplicates(values: Iterable[int]) -> int:
    seen = set()
    count = 0
    for value in values:
        if value in seen:
            count += 1
        else:
            seen.add(value)
    return count


def column_cost(grid: Sequence[Sequence[int]]) -> int:
    return sum(_duplicates(grid[r][c] for r in range(SIZE)) for c in range(SIZE))


def block_cost(grid: Sequence[Sequence[int]]) -> int:
    total = 0
    for box_row in range(0, SIZE, BOX):
        for box_col in range(0, SIZE, BOX):
            total += _duplicates(
                grid[r][c]
                for r in range(box_row, box_row + BOX)
                for c in range(box_col, box_col + BOX)
            )
    return total


def grid_cost(grid: Sequence[Sequence[int]]) -> int:
    """Number of repeated values over all columns and blocks.

    Rows are valid by construction and not counted.  ``0`` means solved.
    """

    return column_cost(grid) + block_cost(grid)


def is_solved(grid: Sequence[Sequence[int]]) -> bool:
    """``True`` if every row, column and block holds 1..9 exactly once."""

    expected = set(DIGITS)
    if len(grid) != SIZE or any(len(row) != SIZE for row in grid):
        return False
    for i in range(SIZE):
        if set(grid[i]) != expected:
            return False
        if {grid[r][i] for r in range(SIZE)} != expected:
            return False
    for box_row in range(0, SIZE, BOX):
        for box_col in range(0, SIZE, BOX):
            block = {
                grid[r][c]
                for r in range(box_row, box_row + BOX)
                for c in range(box_col, box_col + BOX)
            }
            if block != expected:
                return False
    return True


__all__ = ["block_cost", "column_cost", "grid_cost", "is_solved"]
