"""Facade wiring configuration, validation, the engine and the run log."""

from __future__ import annotations

import logging
import os
import random
import uuid
from typing import Any, Dict, Mapping, Optional, Sequence

import run_log
from contracts.canonical import canonical_sha256
from contracts.validator import ensure_grid
from project_config import get_section
from solver_evo import EvolutionEngine, GenerationTrace, SolveResult, resolve_settings
from sudoku_io import to_string

_LOGGER = logging.getLogger(__name__)


def _merge_env(overrides: Mapping[str, str] | None = None) -> Dict[str, str]:
    env: Dict[str, str] = {str(k): str(v) for k, v in os.environ.items()}
    if overrides:
        env.update({str(k): str(v) for k, v in overrides.items()})
    return env


def _coerce_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in {"1", "true", "yes", "on"}:
            return True
        if normalised in {"0", "false", "no", "off"}:
            return False
    return None


def _run_log_enabled(env: Mapping[str, str]) -> bool:
    section = get_section("run_log", {})
    enabled = bool(section.get("enabled", False)) if isinstance(section, Mapping) else False
    for key in ("CLI_PUZZLE_RUN_LOG_ENABLED", "PUZZLE_RUN_LOG_ENABLED"):
        override = _coerce_bool(env.get(key))
        if override is not None:
            return override
    return enabled


def _configure_run_log(env: Mapping[str, str]) -> None:
    section = get_section("run_log", {})
    if not isinstance(section, Mapping):
        section = {}
    run_log.configure_from_section(section, base_dir=env.get("PUZZLE_RUN_LOG_DIR"))


def _verdict(result: SolveResult, seed: Optional[int], settings_digest: str) -> Dict[str, Any]:
    return {
        "status": result.status,
        "grid": to_string(result.grid) if result.grid is not None else None,
        "cost": result.cost,
        "generations": result.generations,
        "time_ms": result.elapsed_ms,
        "seed": seed,
        "settings": settings_digest,
        "reason": result.reason,
    }


def solve_puzzle(
    grid: Sequence[Sequence[int]],
    *,
    seed: Optional[int] = None,
    env: Mapping[str, str] | None = None,
    time_budget: Optional[float] = None,
    trace: GenerationTrace | None = None,
) -> Dict[str, Any]:
    """Solve ``grid`` with settings resolved from config and environment.

    Parameters
    ----------
    grid:
        9×9 puzzle, ``0`` for blanks.
    seed:
        Seed for the search's random generator.  ``None`` draws a fresh one,
        which is reported in the verdict so the run can be replayed.
    env:
        Extra environment entries layered over ``os.environ``; recognised
        keys are ``PUZZLE_SOLVER_*`` / ``CLI_PUZZLE_SOLVER_*`` settings and
        ``PUZZLE_RUN_LOG_*`` switches.
    time_budget:
        Seconds; overrides the resolved ``time_budget_s``.

    Returns
    -------
    dict
        Verdict with ``status`` (``solved`` / ``not_found`` /
        ``unsatisfiable``), the 81-character ``grid`` when solved, the best
        ``cost``, ``generations``, ``time_ms``, ``seed`` and a digest of the
        settings used.

    A malformed ``grid`` raises :class:`InvalidPuzzleError` and invalid
    resolved settings raise :class:`SettingsError`.
    """

    env_map = _merge_env(env)
    puzzle = ensure_grid(grid)
    settings = resolve_settings(env_map)
    if time_budget is not None:
        settings = settings.with_overrides(time_budget_s=time_budget)
    if seed is None:
        seed = random.SystemRandom().randrange(1 << 31)

    engine = EvolutionEngine(settings, random.Random(seed), trace=trace)
    result = engine.solve(puzzle)

    settings_digest = canonical_sha256(settings.to_dict())
    verdict = _verdict(result, seed, settings_digest)

    if _run_log_enabled(env_map):
        _configure_run_log(env_map)
        path = run_log.append_event(
            {
                "event": "solve",
                "run_id": uuid.uuid4().hex,
                "puzzle": to_string(puzzle),
                **verdict,
            }
        )
        _LOGGER.debug("run event appended to %s", path)

    return verdict


__all__ = ["solve_puzzle"]
