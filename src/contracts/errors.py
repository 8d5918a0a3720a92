"""Error taxonomy shared by the solver core, the port and the CLI."""

from __future__ import annotations


from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

SEVERITY_ERROR = "ERROR"


@dataclass(frozen=True)
class ValidationIssue:
    """Single finding produced by a schema or puzzle check."""

    code: str
    msg: str
    path: str
    severity: str


def make_error(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct an error-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_ERROR)


class SolverError(RuntimeError):
    """Base class for failures surfaced by the solver stack."""

    code = "solver.error"

    def __init__(self, message: str, issues: Iterable[ValidationIssue] = ()) -> None:
        super().__init__(message)
        self.issues: Tuple[ValidationIssue, ...] = tuple(issues)


class InvalidPuzzleError(SolverError, ValueError):
    """The input grid is malformed (shape, types or value range)."""

    code = "puzzle.invalid"


class UnsatisfiableError(SolverError):
    """The puzzle contradicts itself; no completion can exist."""

    code = "puzzle.unsatisfiable"


class RowConstructionError(UnsatisfiableError):
    """No permutation of the row's domains fits the row's fixed values."""

    code = "puzzle.row_construction"

    def __init__(self, row: int, attempts: int) -> None:
        super().__init__(f"row {row} could not be completed after {attempts} attempt(s)")
        self.row = row
        self.attempts = attempts


class SettingsError(SolverError, ValueError):
    """Solver configuration failed validation."""

    code = "settings.invalid"


def summarise(issues: Sequence[ValidationIssue], limit: int = 5) -> str:
    """Render the first ``limit`` issues as ``code@path`` pairs."""

    parts = [f"{issue.code}@{issue.path}" for issue in issues[:limit]]
    if len(issues) > limit:
        parts.append("…")
    return ", ".join(parts)


__all__ = [
    "SEVERITY_ERROR",
    "InvalidPuzzleError",
    "RowConstructionError",
    "SettingsError",
    "SolverError",
    "UnsatisfiableError",
    "ValidationIssue",
    "make_error",
    "summarise",
]
