"""Domain filtering by naked-single propagation.

Every cell starts with ``1..9`` (blank) or its given value.  Each cell whose
domain is a singleton eliminates its value from the row, column and block
peers; peers that collapse to a singleton are pushed onto a LIFO worklist.
The loop stops at a fixed point because domains only shrink.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Sequence, Tuple

from contracts.errors import UnsatisfiableError
from contracts.validator import ensure_grid

_LOGGER = logging.getLogger(__name__)

SIZE = 9
BOX = 3
DIGITS = tuple(range(1, SIZE + 1))

Grid = List[List[int]]
Domain = Tuple[int, ...]
Domains = Tuple[Tuple[Domain, ...], ...]


def peers(row: int, col: int) -> Iterator[Tuple[int, int]]:
    """Yield every cell sharing a row, column or block with ``(row, col)``."""

    for i in range(SIZE):
        if i != col:
            yield row, i
        if i != row:
            yield i, col
    box_row = (row // BOX) * BOX
    box_col = (col // BOX) * BOX
    for i in range(box_row, box_row + BOX):
        for j in range(box_col, box_col + BOX):
            # Row and column peers were already produced above.
            if i != row and j != col:
                yield i, j


def compute_domains(grid: Sequence[Sequence[int]]) -> Domains:
    """Return the propagated legal-value domain of every cell.

    A malformed grid raises :class:`InvalidPuzzleError`; clashing givens or a
    propagation that would empty a domain raise :class:`UnsatisfiableError`.
    """

    cells = ensure_grid(grid)
    domains: List[List[List[int]]] = [
        [list(DIGITS) if value == 0 else [value] for value in row] for row in cells
    ]

    worklist: List[Tuple[int, int]] = [(r, c) for r in range(SIZE) for c in range(SIZE)]
    # Reversed so the seed cells pop in row-major order.
    worklist.reverse()
    removed = 0
    while worklist:
        row, col = worklist.pop()
        domain = domains[row][col]
        if len(domain) != 1:
            continue
        value = domain[0]
        for i, j in peers(row, col):
            neighbour = domains[i][j]
            if value not in neighbour:
                continue
            if len(neighbour) == 1:
                raise UnsatisfiableError(
                    f"value {value} at ({row}, {col}) conflicts with ({i}, {j})"
                )
            neighbour.remove(value)
            removed += 1
            if len(neighbour) == 1:
                worklist.append((i, j))

    _LOGGER.debug("domain filter removed %d candidate(s)", removed)
    return tuple(tuple(tuple(domain) for domain in row) for row in domains)


def apply_singletons(grid: Sequence[Sequence[int]], domains: Domains) -> Grid:
    """Return a copy of ``grid`` with every singleton domain written in."""

    fixed = [list(row) for row in grid]
    for r in range(SIZE):
        for c in range(SIZE):
            domain = domains[r][c]
            if len(domain) == 1:
                fixed[r][c] = domain[0]
    return fixed


def size_ordering(domains: Domains) -> Tuple[Tuple[int, ...], ...]:
    """Free columns of each row ordered by ascending domain size.

    Ties keep column order.  Fixed cells (singleton domains) are excluded.
    """

    ordering = []
    for row in domains:
        free = [col for col, domain in enumerate(row) if len(domain) > 1]
        free.sort(key=lambda col: len(row[col]))
        ordering.append(tuple(free))
    return tuple(ordering)


def free_columns(domains: Domains, row: int) -> List[int]:
    """Column indices of ``row`` whose domain has more than one value."""

    return [col for col, domain in enumerate(domains[row]) if len(domain) > 1]


__all__ = [
    "BOX",
    "DIGITS",
    "Domain",
    "Domains",
    "Grid",
    "SIZE",
    "apply_singletons",
    "compute_domains",
    "free_columns",
    "peers",
    "size_ordering",
]
