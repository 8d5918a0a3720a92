from __future__ import annotations

import random

import pytest

from contracts.errors import RowConstructionError, UnsatisfiableError
from solver_evo.builder import build_candidate, build_row
from solver_evo.domains import size_ordering
from solver_evo.state import PuzzleContext

SOLUTION = [
    [1, 2, 3, 4, 5, 6, 7, 8, 9],
    [4, 5, 6, 7, 8, 9, 1, 2, 3],
    [7, 8, 9, 1, 2, 3, 4, 5, 6],
    [2, 1, 4, 3, 6, 5, 8, 9, 7],
    [3, 6, 5, 8, 9, 7, 2, 1, 4],
    [8, 9, 7, 2, 1, 4, 3, 6, 5],
    [5, 3, 1, 6, 4, 2, 9, 7, 8],
    [6, 4, 2, 9, 7, 8, 5, 3, 1],
    [9, 7, 8, 5, 3, 1, 6, 4, 2],
]

HARD = [
    [8, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 3, 6, 0, 0, 0, 0, 0],
    [0, 7, 0, 0, 9, 0, 2, 0, 0],
    [0, 5, 0, 0, 0, 7, 0, 0, 0],
    [0, 0, 0, 0, 4, 5, 7, 0, 0],
    [0, 0, 0, 1, 0, 0, 0, 3, 0],
    [0, 0, 1, 0, 0, 0, 0, 6, 8],
    [0, 0, 8, 5, 0, 0, 0, 1, 0],
    [0, 9, 0, 0, 0, 0, 4, 0, 0],
]


def _impossible_row_context() -> PuzzleContext:
    # Row 0 fixes 3..8 and leaves three cells that can only take 1 or 2.
    first = [(1, 2), (1, 2), (1, 2)] + [(value,) for value in range(3, 9)]
    domains = (tuple(first),) + tuple(
        tuple((value,) for value in row) for row in SOLUTION[1:]
    )
    fixed = ((0, 0, 0, 3, 4, 5, 6, 7, 8),) + tuple(tuple(row) for row in SOLUTION[1:])
    return PuzzleContext(fixed=fixed, domains=domains, ordering=size_ordering(domains))


def test_candidate_rows_are_permutations_within_domains() -> None:
    context = PuzzleContext.from_grid(HARD)
    rng = random.Random(7)
    for _ in range(20):
        grid = build_candidate(context, rng)
        for r, row in enumerate(grid):
            assert sorted(row) == list(range(1, 10))
            for c, value in enumerate(row):
                assert value in context.domains[r][c]
                if context.fixed[r][c]:
                    assert value == context.fixed[r][c]


def test_fully_fixed_context_rebuilds_the_solution() -> None:
    context = PuzzleContext.from_grid(SOLUTION)
    assert context.is_fully_fixed()
    assert build_candidate(context, random.Random(0)) == SOLUTION


def test_same_seed_builds_same_candidate() -> None:
    context = PuzzleContext.from_grid(HARD)
    assert build_candidate(context, random.Random(11)) == build_candidate(context, random.Random(11))


def test_build_row_does_not_touch_context() -> None:
    context = PuzzleContext.from_grid(HARD)
    before = context.fixed_grid()
    build_row(context, 0, random.Random(3))
    assert context.fixed_grid() == before


def test_unbuildable_row_raises_after_retries() -> None:
    context = _impossible_row_context()
    with pytest.raises(RowConstructionError) as excinfo:
        build_row(context, 0, random.Random(1), retries=2)
    assert excinfo.value.row == 0
    assert excinfo.value.attempts == 3
    assert isinstance(excinfo.value, UnsatisfiableError)


def test_context_reports_free_cells() -> None:
    context = PuzzleContext.from_grid(HARD)
    free = sum(len(domain) > 1 for row in context.domains for domain in row)
    assert context.free_cells() == free
    assert not context.is_fully_fixed()
    assert 0 not in context.ordering[0]
