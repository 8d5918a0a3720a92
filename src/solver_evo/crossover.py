"""Permutation-preserving crossover operators.

Both operators take rows that are permutations of the same value set and
return a new row that is again such a permutation.

PMX (partially matched crossover) keeps ``parent1[low..upp]`` in place and
relocates the values of ``parent2``'s segment that were displaced, chasing
them through the segment mapping until they land outside it.

MPSX (multiparental sorting crossover) picks, column by column, the value of
the parent named by the mask, then swaps that value into the same column of
every other parent so that all parents stay permutations for the following
columns.
"""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence

from .domains import Grid


def _check_permutations(parent1: Sequence[int], parent2: Sequence[int]) -> None:
    if len(parent1) != len(parent2):
        raise ValueError("parents must have the same length")
    if len(set(parent1)) != len(parent1) or sorted(parent1) != sorted(parent2):
        raise ValueError("parents must be permutations of the same values")


def cross_pmx(parent1: Sequence[int], parent2: Sequence[int], low: int, upp: int) -> List[int]:
    """Partially matched crossover of two rows over ``[low, upp]`` (inclusive).

    Out-of-range bounds, ``low > upp`` and parents that are not permutations
    of the same values raise :class:`ValueError`.
    """

    size = len(parent1)
    if not 0 <= low <= upp < size:
        raise ValueError(f"invalid segment bounds low={low}, upp={upp} for length {size}")
    _check_permutations(parent1, parent2)

    position: Dict[int, int] = {value: index for index, value in enumerate(parent2)}
    segment = set(parent1[low:upp + 1])
    displaced = [value for value in parent2[low:upp + 1] if value not in segment]

    child: List[Optional[int]] = [None] * size
    for value in displaced:
        current = value
        while True:
            big = parent1[position[current]]
            target = position[big]
            if low <= target <= upp:
                current = big
                continue
            child[target] = value
            break

    child[low:upp + 1] = parent1[low:upp + 1]
    return [parent2[i] if slot is None else slot for i, slot in enumerate(child)]


def cross_mpsx(mask: Sequence[int], parents: Sequence[Sequence[int]]) -> List[int]:
    """Multiparental sorting crossover driven by a 1-based parent ``mask``.

    The parent rows are copied first; the caller's rows are left untouched.
    A mask of the wrong length, a mask entry outside ``1..len(parents)`` or
    mismatched parents raise :class:`ValueError`.
    """

    if not parents:
        raise ValueError("at least one parent row is required")
    rows = [list(parent) for parent in parents]
    size = len(rows[0])
    if len(mask) != size:
        raise ValueError(f"mask length {len(mask)} does not match row length {size}")
    for row in rows[1:]:
        _check_permutations(rows[0], row)
    if len(set(rows[0])) != size:
        raise ValueError("parents must be permutations of the same values")

    child = [0] * size
    for col in range(size):
        source = mask[col] - 1
        if not 0 <= source < len(rows):
            raise ValueError(f"mask entry {mask[col]} at column {col} is outside 1..{len(rows)}")
        value = rows[source][col]
        child[col] = value
        for index, row in enumerate(rows):
            if index == source or row[col] == value:
                continue
            other = row.index(value)
            row[other], row[col] = row[col], value
    return child


def random_bounds(rng: random.Random, size: int) -> tuple[int, int]:
    """Draw two distinct positions and return them ordered ``low < upp``."""

    low = rng.randrange(size)
    upp = rng.randrange(size)
    while upp == low:
        upp = rng.randrange(size)
    if low > upp:
        low, upp = upp, low
    return low, upp


def random_mask(rng: random.Random, size: int, parents: int) -> List[int]:
    return [rng.randrange(parents) + 1 for _ in range(size)]


def pmx_grid(grid: Grid, elite: Sequence[Sequence[int]], rng: random.Random) -> None:
    """Replace every row of ``grid`` by its PMX child with the elite's row."""

    for index, row in enumerate(grid):
        low, upp = random_bounds(rng, len(row))
        grid[index] = cross_pmx(row, elite[index], low, upp)


def mpsx_grid(
    grid: Grid,
    elite: Sequence[Sequence[int]],
    last_best: Sequence[Sequence[int]],
    rng: random.Random,
) -> None:
    """Replace every row of ``grid`` by an MPSX child of (row, elite, last best)."""

    for index, row in enumerate(grid):
        mask = random_mask(rng, len(row), 3)
        grid[index] = cross_mpsx(mask, (row, elite[index], last_best[index]))


__all__ = [
    "cross_mpsx",
    "cross_pmx",
    "mpsx_grid",
    "pmx_grid",
    "random_bounds",
    "random_mask",
]
