"""Random candidate construction, one row at a time."""

from __future__ import annotations

import logging
import random
from typing import List, Sequence

from contracts.errors import RowConstructionError

from .domains import SIZE, Grid
from .state import PuzzleContext

_LOGGER = logging.getLogger(__name__)


def _fill(row: List[int], ordering: Sequence[int], domains: Sequence[List[int]], depth: int = 0) -> bool:
    if depth == len(ordering):
        return True
    col = ordering[depth]
    for value in domains[col]:
        if value in row:
            continue
        row[col] = value
        if _fill(row, ordering, domains, depth + 1):
            return True
        row[col] = 0
    return False


def build_row(context: PuzzleContext, row_index: int, rng: random.Random, *, retries: int = 0) -> List[int]:
    """Complete one row so that its values are pairwise distinct.

    Free cells are visited in ascending domain-size order and filled by
    backtracking over a freshly shuffled copy of their domains.  Column and
    block conflicts are ignored here; the search repairs them.  If no
    ordering works after ``retries`` additional reshuffles a
    :class:`RowConstructionError` is raised.
    """

    ordering = context.ordering[row_index]
    attempts = retries + 1
    for attempt in range(attempts):
        shuffled: List[List[int]] = []
        for domain in context.domains[row_index]:
            values = list(domain)
            if len(values) > 1:
                rng.shuffle(values)
            shuffled.append(values)
        row = list(context.fixed[row_index])
        if _fill(row, ordering, shuffled):
            return row
        _LOGGER.debug("row %d construction failed (attempt %d/%d)", row_index, attempt + 1, attempts)
    raise RowConstructionError(row_index, attempts)


def build_candidate(context: PuzzleContext, rng: random.Random, *, retries: int = 0) -> Grid:
    """Build a full grid whose rows are individually valid."""

    return [build_row(context, row_index, rng, retries=retries) for row_index in range(SIZE)]


__all__ = ["build_candidate", "build_row"]
