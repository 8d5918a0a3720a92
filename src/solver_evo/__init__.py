"""Evolutionary solver for the classic 9x9 Sudoku puzzle."""

from __future__ import annotations

from .builder import build_candidate, build_row
from .crossover import cross_mpsx, cross_pmx, mpsx_grid, pmx_grid
from .domains import apply_singletons, compute_domains, size_ordering
from .engine import (
    STATUS_NOT_FOUND,
    STATUS_SOLVED,
    STATUS_UNSATISFIABLE,
    EvolutionEngine,
    SolveResult,
    solve,
)
from .fitness import grid_cost, is_solved
from .mutation import mutate
from .population import Candidate, Population
from .settings import SolverSettings, resolve_settings
from .state import PuzzleContext
from .trace import EngineState, GenerationRecord, GenerationTrace

DESCRIPTOR = {
    "module_id": "sudoku-9x9:solver/evo@1.0.0",
    "puzzle_kind": "sudoku-9x9",
    "role": "solver",
    "impl_id": "evo",
    "module_version": "1.0.0",
    "capabilities": {"parallelizable": False, "idempotent": False, "stateless": True},
}

__all__ = [
    "DESCRIPTOR",
    "Candidate",
    "EngineState",
    "EvolutionEngine",
    "GenerationRecord",
    "GenerationTrace",
    "Population",
    "PuzzleContext",
    "STATUS_NOT_FOUND",
    "STATUS_SOLVED",
    "STATUS_UNSATISFIABLE",
    "SolveResult",
    "SolverSettings",
    "apply_singletons",
    "build_candidate",
    "build_row",
    "compute_domains",
    "cross_mpsx",
    "cross_pmx",
    "grid_cost",
    "is_solved",
    "mpsx_grid",
    "mutate",
    "pmx_grid",
    "resolve_settings",
    "size_ordering",
    "solve",
]
