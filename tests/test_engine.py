from __future__ import annotations

import itertools
import logging
import random

import pytest

from contracts.errors import InvalidPuzzleError
from solver_evo import (
    EngineState,
    EvolutionEngine,
    GenerationTrace,
    SolverSettings,
    is_solved,
    solve,
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


def _settings(**overrides) -> SolverSettings:
    values = {"population_size": 20, "time_budget_s": 60.0, "max_generations": 5}
    values.update(overrides)
    return SolverSettings(**values)


def _traced_run(seed: int, **overrides) -> GenerationTrace:
    trace = GenerationTrace(trace_level="full")
    EvolutionEngine(_settings(**overrides), random.Random(seed), trace=trace).solve(HARD)
    return trace


def test_solved_grid_returns_immediately() -> None:
    result = EvolutionEngine(_settings(), random.Random(0)).solve(SOLUTION)
    assert result.solved
    assert result.grid == SOLUTION
    assert result.cost == 0
    assert result.generations == 0


def test_single_blank_gets_missing_digit() -> None:
    puzzle = [list(row) for row in SOLUTION]
    puzzle[6][3] = 0
    result = EvolutionEngine(_settings(), random.Random(0)).solve(puzzle)
    assert result.solved
    assert result.grid[6][3] == 6


def test_search_fills_ambiguous_rectangle() -> None:
    puzzle = [list(row) for row in SOLUTION]
    for r, c in ((0, 0), (0, 1), (3, 0), (3, 1)):
        puzzle[r][c] = 0
    result = solve(puzzle, rng=random.Random(4), settings=_settings(max_generations=0, time_budget_s=30.0))
    assert result.solved
    assert is_solved(result.grid)
    for r in range(9):
        for c in range(9):
            if puzzle[r][c]:
                assert result.grid[r][c] == puzzle[r][c]


def test_blank_row_and_column_are_propagated() -> None:
    puzzle = [list(row) for row in SOLUTION]
    puzzle[0] = [0] * 9
    for row in puzzle:
        row[8] = 0
    result = EvolutionEngine(_settings(), random.Random(0)).solve(puzzle)
    assert result.solved
    assert result.grid == SOLUTION
def test_duplicate_givens_are_unsatisfiable() -> None:
    puzzle = [[0] * 9 for _ in range(9)]
    puzzle[3][1] = 7
    puzzle[3][6] = 7
    trace = GenerationTrace(trace_level="summary")
    result = EvolutionEngine(_settings(), random.Random(0), trace=trace).solve(puzzle)
    assert result.status == "unsatisfiable"
    assert result.grid is None
    assert "7" in result.reason
    assert trace.entries[-1].state is EngineState.UNSATISFIABLE


def test_malformed_grid_raises() -> None:
    with pytest.raises(InvalidPuzzleError):
        EvolutionEngine(_settings(), random.Random(0)).solve([[0] * 9])


def test_generation_cap_reports_not_found() -> None:
    result = EvolutionEngine(_settings(max_generations=3), random.Random(1)).solve(HARD)
    assert result.status == "not_found"
    assert result.grid is None
    assert result.cost > 0
    assert result.generations == 3


def test_time_budget_is_polled_per_generation() -> None:
    clock = itertools.count().__next__
    engine = EvolutionEngine(
        _settings(time_budget_s=2.5, max_generations=0), random.Random(1), clock=clock
    )
    result = engine.solve(HARD)
    assert result.status == "not_found"
    assert result.generations == 2


def test_same_seed_gives_identical_trace() -> None:
    first = _traced_run(1234)
    second = _traced_run(1234)
    assert first.snapshot() == second.snapshot()
    assert first.to_json() == second.to_json()
    assert all(entry.digest for entry in first.entries if entry.state is not EngineState.INIT)


def test_different_seed_changes_trace() -> None:
    assert _traced_run(1234).snapshot() != _traced_run(4321).snapshot()


def test_population_size_and_best_cost_across_generations() -> None:
    trace = _traced_run(77, max_generations=8)
    states = [entry.state for entry in trace.entries]
    assert states[:2] == [EngineState.INIT, EngineState.GENERATE_INITIAL]
    assert states[-1] is EngineState.NOT_FOUND

    sweeps = [entry for entry in trace.entries if entry.state is EngineState.GENERATION_SWEEP]
    assert [entry.generation for entry in sweeps] == list(range(1, 9))
    assert all(entry.size == 20 for entry in sweeps)

    costs = [entry.best_cost for entry in trace.entries if entry.best_cost is not None]
    assert costs == sorted(costs, reverse=True)


def test_module_solve_overrides_time_budget() -> None:
    result = solve(SOLUTION, time_budget=1.0, rng=random.Random(0), settings=_settings())
    assert result.solved


def test_fully_propagated_puzzle_is_logged(caplog) -> None:
    puzzle = [list(row) for row in SOLUTION]
    puzzle[0][0] = 0
    caplog.set_level(logging.DEBUG, logger="solver_evo.engine")
    result = EvolutionEngine(_settings(), random.Random(0)).solve(puzzle)
    assert result.solved
    assert "propagation fixed every cell" in caplog.text
