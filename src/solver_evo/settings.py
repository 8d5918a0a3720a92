"""Solver settings and their precedence resolution.

Values are layered: built-in defaults < ``[solver]`` in ``config.toml`` <
``PUZZLE_SOLVER_*`` environment variables < ``CLI_PUZZLE_SOLVER_*``
variables (set by command-line front ends).  Unparseable overrides are
ignored; the merged result is validated against the bundled JSON schema.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional

from contracts.validator import validate_settings
from project_config import get_section


@dataclass(frozen=True)
class SolverSettings:
    """Tunables of the evolutionary search."""

    population_size: int = 1000
    time_budget_s: float = 13.5
    prob_pmx: float = 0.9208
    prob_mutate: float = 0.5169
    prob_abandon: float = 0.9781
    row_retries: int = 3
    max_generations: int = 0
    trace_level: str = "none"

    def __post_init__(self) -> None:
        validate_settings(self.to_dict())

    @property
    def generation_cap(self) -> Optional[int]:
        """``max_generations`` with ``0`` meaning unlimited."""

        return self.max_generations or None

    def with_overrides(self, **changes: Any) -> "SolverSettings":
        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _parse_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _parse_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and value.strip():
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _parse_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip().lower()
    return None


_PARSERS: Dict[str, Callable[[Any], Any]] = {
    "population_size": _parse_int,
    "time_budget_s": _parse_float,
    "prob_pmx": _parse_float,
    "prob_mutate": _parse_float,
    "prob_abandon": _parse_float,
    "row_retries": _parse_int,
    "max_generations": _parse_int,
    "trace_level": _parse_str,
}


def _apply_overrides(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, parser in _PARSERS.items():
        if key not in overrides:
            continue
        parsed = parser(overrides[key])
        if parsed is not None:
            merged[key] = parsed
    return merged


def _env_overrides(env: Mapping[str, str], prefix: str) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for key in _PARSERS:
        alias = f"{prefix}{key.upper()}"
        if alias in env:
            payload[key] = env[alias]
    return payload


def resolve_settings(
    env: Mapping[str, str] | None = None,
    *,
    config: Mapping[str, Any] | None = None,
) -> SolverSettings:
    """Merge defaults, ``[solver]`` config and environment overrides.

    Raises :class:`SettingsError` if the merged values violate the schema.
    """

    values: Dict[str, Any] = {
        item.name: item.default for item in fields(SolverSettings)
    }

    section = config if config is not None else get_section("solver", {})
    if isinstance(section, Mapping):
        values = _apply_overrides(values, section)

    env_map = {str(k).upper(): str(v) for k, v in (env or {}).items()}
    values = _apply_overrides(values, _env_overrides(env_map, "PUZZLE_SOLVER_"))
    values = _apply_overrides(values, _env_overrides(env_map, "CLI_PUZZLE_SOLVER_"))
    return SolverSettings(**values)


__all__ = ["SolverSettings", "resolve_settings"]
