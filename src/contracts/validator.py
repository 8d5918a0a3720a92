"""Input validation for puzzle grids and solver settings."""

from __future__ import annotations

from typing import Any, List, Mapping

from .errors import (
    InvalidPuzzleError,
    SettingsError,
    ValidationIssue,
    make_error,
    summarise,
)
from .loader import compile_schema

GRID_SCHEMA = "grid"
SETTINGS_SCHEMA = "solver_settings"


def _jsonschema_path(exc: Any) -> str:
    path = getattr(exc, "absolute_path", [])
    if not path:
        return "$"
    components: List[str] = ["$"]
    for part in path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def _schema_issues(schema_name: str, instance: Any, code: str) -> List[ValidationIssue]:
    validator = compile_schema(schema_name)
    issues: List[ValidationIssue] = []
    for exc in sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.absolute_path]):
        issues.append(make_error(code, exc.message, _jsonschema_path(exc)))
    return issues


def _as_lists(grid: Any) -> Any:
    # jsonschema only treats ``list`` as an array, so tuples are normalised first.
    if isinstance(grid, (list, tuple)):
        return [list(row) if isinstance(row, (list, tuple)) else row for row in grid]
    return grid


def validate_grid(grid: Any) -> List[ValidationIssue]:
    """Return schema issues for ``grid``; an empty list means well-formed."""

    return _schema_issues(GRID_SCHEMA, _as_lists(grid), "grid.schema")


def ensure_grid(grid: Any) -> List[List[int]]:
    """Return a fresh ``list[list[int]]`` copy of ``grid``.

    Raises :class:`InvalidPuzzleError` when the grid is not 9×9 or holds
    values outside ``0..9``.
    """

    candidate = _as_lists(grid)
    issues = _schema_issues(GRID_SCHEMA, candidate, "grid.schema")
    if issues:
        raise InvalidPuzzleError(f"Invalid puzzle grid: {summarise(issues)}", issues)
    return [[int(value) for value in row] for row in candidate]


def validate_settings(settings: Mapping[str, Any]) -> None:
    """Raise :class:`SettingsError` when ``settings`` violates the schema."""

    issues = _schema_issues(SETTINGS_SCHEMA, dict(settings), "settings.schema")
    if issues:
        raise SettingsError(f"Invalid solver settings: {summarise(issues)}", issues)


__all__ = ["ensure_grid", "validate_grid", "validate_settings"]
