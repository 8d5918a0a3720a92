from __future__ import annotations

import random

import pytest

from contracts.errors import InvalidPuzzleError, UnsatisfiableError
from solver_evo.domains import (
    DIGITS,
    apply_singletons,
    compute_domains,
    free_columns,
    peers,
    size_ordering,
)

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


def _checkerboard() -> list[list[int]]:
    return [[0 if (r + c) % 2 == 0 else SOLUTION[r][c] for c in range(9)] for r in range(9)]


def test_peers_cover_row_column_and_block() -> None:
    cells = list(peers(4, 4))
    assert len(cells) == 20
    assert len(set(cells)) == 20
    assert (4, 4) not in cells
    assert (3, 3) in cells and (4, 0) in cells and (0, 4) in cells


def test_solved_grid_domains_are_singletons() -> None:
    domains = compute_domains(SOLUTION)
    for r in range(9):
        for c in range(9):
            assert domains[r][c] == (SOLUTION[r][c],)


def test_single_blank_resolves_to_missing_digit() -> None:
    grid = [list(row) for row in SOLUTION]
    grid[4][7] = 0
    domains = compute_domains(grid)
    assert domains[4][7] == (SOLUTION[4][7],)


def test_domains_are_sound_and_sorted() -> None:
    domains = compute_domains(_checkerboard())
    for r in range(9):
        for c in range(9):
            domain = domains[r][c]
            assert SOLUTION[r][c] in domain
            assert list(domain) == sorted(domain)
            assert set(domain) <= set(DIGITS)


def test_filter_is_idempotent() -> None:
    puzzle = _checkerboard()
    domains = compute_domains(puzzle)
    again = compute_domains(apply_singletons(puzzle, domains))
    assert again == domains


def test_blank_row_is_filled_by_propagation() -> None:
    grid = [list(row) for row in SOLUTION]
    grid[0] = [0] * 9
    fixed = apply_singletons(grid, compute_domains(grid))
    assert fixed == SOLUTION


def test_apply_singletons_leaves_input_untouched() -> None:
    grid = [list(row) for row in SOLUTION]
    grid[2][2] = 0
    fixed = apply_singletons(grid, compute_domains(grid))
    assert grid[2][2] == 0
    assert fixed[2][2] == SOLUTION[2][2]


def test_duplicate_givens_in_row_are_unsatisfiable() -> None:
    grid = [[0] * 9 for _ in range(9)]
    grid[0][0] = 5
    grid[0][8] = 5
    with pytest.raises(UnsatisfiableError):
        compute_domains(grid)


def test_duplicate_givens_in_block_are_unsatisfiable() -> None:
    grid = [[0] * 9 for _ in range(9)]
    grid[0][0] = 3
    grid[2][2] = 3
    with pytest.raises(UnsatisfiableError):
        compute_domains(grid)


def test_malformed_grids_are_rejected() -> None:
    with pytest.raises(InvalidPuzzleError):
        compute_domains([[0] * 9 for _ in range(8)])
    bad = [[0] * 9 for _ in range(9)]
    bad[3][3] = 10
    with pytest.raises(InvalidPuzzleError):
        compute_domains(bad)


def test_size_ordering_skips_fixed_cells_and_sorts_by_size() -> None:
    domains = compute_domains(_checkerboard())
    ordering = size_ordering(domains)
    for r, columns in enumerate(ordering):
        assert sorted(columns) == free_columns(domains, r)
        sizes = [len(domains[r][c]) for c in columns]
        assert sizes == sorted(sizes)
        assert all(len(domains[r][c]) > 1 for c in columns)


def test_empty_grid_keeps_full_domains() -> None:
    domains = compute_domains([[0] * 9 for _ in range(9)])
    assert all(domain == DIGITS for row in domains for domain in row)
    assert size_ordering(domains)[0] == tuple(range(9))


def test_domains_are_sound_for_random_blank_patterns() -> None:
    rng = random.Random(8128)
    for trial in range(200):
        density = 0.2 + 0.6 * (trial % 10) / 9
        puzzle = [
            [0 if rng.random() < density else value for value in row] for row in SOLUTION
        ]
        domains = compute_domains(puzzle)
        for r in range(9):
            for c in range(9):
                assert SOLUTION[r][c] in domains[r][c]
