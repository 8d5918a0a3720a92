"""Swap mutation restricted to free cells."""

from __future__ import annotations

import random

from .domains import SIZE, Domains, Grid, free_columns


def mutate(grid: Grid, domains: Domains, rng: random.Random) -> int:
    """Swap two free cells in each of 1..9 randomly chosen distinct rows.

    Rows with fewer than two free cells are skipped.  Returns the number of
    swaps performed.
    """

    rows = list(range(SIZE))
    rng.shuffle(rows)
    count = rng.randrange(SIZE) + 1

    swaps = 0
    for row in rows[:count]:
        cells = free_columns(domains, row)
        if len(cells) < 2:
            continue
        first, second = rng.sample(cells, 2)
        grid[row][first], grid[row][second] = grid[row][second], grid[row][first]
        swaps += 1
    return swaps


__all__ = ["mutate"]
