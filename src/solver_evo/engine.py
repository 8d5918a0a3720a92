"""Generational search driving a population of grids to zero conflicts.

One solve runs through::

    INIT -> GENERATE_INITIAL -> GENERATION_SWEEP ... -> SOLVED | NOT_FOUND

INIT propagates domains and fixes every single.  GENERATE_INITIAL fills the
population with row-valid random grids.  Each outer iteration then

1. stops if the elite (rank 0) has cost 0,
2. draws two distinct indices for elitist propagation,
3. sweeps the population once: every non-elite member is crossed with the
   elite (PMX) or with the elite and the previous best (MPSX), possibly
   mutated, re-scored and the population re-sorted,
4. inserts a copy of the first drawn member in front of the second when it
   is at least as good,
5. culls members worse than the elite with high probability, and
6. rebuilds the population back to its target size.

The wall clock is polled once per outer iteration; it is the only
cancellation point.  All randomness comes from the injected generator.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from contracts.errors import UnsatisfiableError
from contracts.validator import ensure_grid

from .builder import build_candidate
from .crossover import mpsx_grid, pmx_grid
from .domains import Grid
from .mutation import mutate
from .population import Candidate, Population
from .settings import SolverSettings
from .state import PuzzleContext
from .trace import EngineState, GenerationTrace

_LOGGER = logging.getLogger(__name__)

STATUS_SOLVED = "solved"
STATUS_NOT_FOUND = "not_found"
STATUS_UNSATISFIABLE = "unsatisfiable"


@dataclass(frozen=True)
class SolveResult:
    """Outcome of a solve.

    ``grid`` is only set when ``status`` is ``"solved"``.  ``cost`` is the
    best conflict count reached (``None`` if the search never started).
    """

    status: str
    grid: Optional[Grid]
    cost: Optional[int]
    generations: int
    elapsed_ms: int
    reason: Optional[str] = None

    @property
    def solved(self) -> bool:
        return self.status == STATUS_SOLVED


class EvolutionEngine:
    """Single-threaded evolutionary search over candidate grids."""

    def __init__(
        self,
        settings: SolverSettings | None = None,
        rng: random.Random | None = None,
        *,
        trace: GenerationTrace | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or SolverSettings()
        self.rng = rng if rng is not None else random.Random()
        self.trace = trace or GenerationTrace(trace_level=self.settings.trace_level)
        self.clock = clock

    # Public API -------------------------------------------------------

    def solve(self, grid: Sequence[Sequence[int]]) -> SolveResult:
        """Search for a completion of ``grid``.

        A malformed grid raises :class:`InvalidPuzzleError`; contradictory
        puzzles come back as an ``"unsatisfiable"`` result instead.
        """

        start = self.clock()
        puzzle = ensure_grid(grid)
        generation = 0
        population: Population | None = None

        try:
            self.trace.record(generation, EngineState.INIT, None)
            context = PuzzleContext.from_grid(puzzle)
            if context.is_fully_fixed():
                _LOGGER.debug("propagation fixed every cell")
            else:
                _LOGGER.debug("context ready: %d free cell(s)", context.free_cells())

            population = Population(self.settings.population_size)
            self._regenerate(context, population)
            self.trace.record(generation, EngineState.GENERATE_INITIAL, population)
            last_best = population.best().clone()

            budget = self.settings.time_budget_s
            cap = self.settings.generation_cap
            while self.clock() - start < budget and (cap is None or generation < cap):
                if population.best().cost == 0:
                    return self._finish(EngineState.SOLVED, population, generation, start)

                size = population.target_size
                first = self.rng.randrange(size)
                second = self.rng.randrange(size)
                while second == first:
                    second = self.rng.randrange(size)

                last_best = self._sweep(context, population, last_best)
                inserted = population.propagate_elite(first, second)
                culled = population.abandon_worst(self.rng, self.settings.prob_abandon)
                regenerated = self._regenerate(context, population)
                generation += 1

                _LOGGER.debug(
                    "generation %d: best=%d inserted=%s culled=%d regenerated=%d",
                    generation,
                    population.best().cost,
                    inserted,
                    culled,
                    regenerated,
                )
                self.trace.record(
                    generation,
                    EngineState.GENERATION_SWEEP,
                    population,
                    inserted=inserted,
                    culled=culled,
                    regenerated=regenerated,
                )
        except UnsatisfiableError as exc:
            elapsed = self._elapsed_ms(start)
            _LOGGER.info("puzzle unsatisfiable: %s", exc)
            self.trace.record(generation, EngineState.UNSATISFIABLE, population)
            return SolveResult(
                status=STATUS_UNSATISFIABLE,
                grid=None,
                cost=None,
                generations=generation,
                elapsed_ms=elapsed,
                reason=str(exc),
            )

        if population.best().cost == 0:
            return self._finish(EngineState.SOLVED, population, generation, start)
        return self._finish(EngineState.NOT_FOUND, population, generation, start)

    # Generation steps -------------------------------------------------

    def _sweep(self, context: PuzzleContext, population: Population, last_best: Candidate) -> Candidate:
        """Process every non-elite member exactly once; return the new last best.

        Members move while the population is re-sorted after each update, so
        passes are repeated until no unprocessed member remains below rank 0.
        """

        members = population.members
        while True:
            pending = False
            for index in range(1, len(members)):
                candidate = members[index]
                if candidate.processed:
                    continue
                pending = True
                candidate.processed = True
                elite = members[0].grid
                if self.rng.random() < self.settings.prob_pmx:
                    pmx_grid(candidate.grid, elite, self.rng)
                else:
                    mpsx_grid(candidate.grid, elite, last_best.grid, self.rng)
                if self.rng.random() < self.settings.prob_mutate:
                    mutate(candidate.grid, context.domains, self.rng)
                candidate.refresh_cost()
                population.sort()
                last_best = population.best().clone()
            if not pending:
                break
        population.reset_processed()
        return last_best

    def _regenerate(self, context: PuzzleContext, population: Population) -> int:
        population.trim()
        return population.fill(
            lambda: build_candidate(context, self.rng, retries=self.settings.row_retries)
        )

    # Helpers ----------------------------------------------------------

    def _elapsed_ms(self, start: float) -> int:
        return max(0, int((self.clock() - start) * 1000))

    def _finish(self, state: EngineState, population: Population, generation: int, start: float) -> SolveResult:
        best = population.best()
        elapsed = self._elapsed_ms(start)
        self.trace.record(generation, state, population)
        if state is EngineState.SOLVED:
            _LOGGER.info("solved after %d generation(s) in %d ms", generation, elapsed)
            return SolveResult(
                status=STATUS_SOLVED,
                grid=[list(row) for row in best.grid],
                cost=0,
                generations=generation,
                elapsed_ms=elapsed,
            )
        _LOGGER.info(
            "no solution after %d generation(s) in %d ms (best cost %d)", generation, elapsed, best.cost
        )
        return SolveResult(
            status=STATUS_NOT_FOUND,
            grid=None,
            cost=best.cost,
            generations=generation,
            elapsed_ms=elapsed,
        )


def solve(
    grid: Sequence[Sequence[int]],
    time_budget: float | None = None,
    rng: random.Random | None = None,
    *,
    settings: SolverSettings | None = None,
    trace: GenerationTrace | None = None,
) -> SolveResult:
    """Solve ``grid`` within ``time_budget`` seconds using ``rng``.

    ``time_budget`` overrides ``settings.time_budget_s`` when given.
    """

    resolved = settings or SolverSettings()
    if time_budget is not None:
        resolved = resolved.with_overrides(time_budget_s=time_budget)
    return EvolutionEngine(resolved, rng, trace=trace).solve(grid)


__all__ = [
    "EvolutionEngine",
    "STATUS_NOT_FOUND",
    "STATUS_SOLVED",
    "STATUS_UNSATISFIABLE",
    "SolveResult",
    "solve",
]
