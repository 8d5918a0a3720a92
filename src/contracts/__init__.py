"""Shared contracts: error taxonomy, input validation and canonical digests."""

from __future__ import annotations

from .canonical import canonical_dump, canonical_sha256
from .errors import (
    InvalidPuzzleError,
    RowConstructionError,
    SettingsError,
    SolverError,
    UnsatisfiableError,
    ValidationIssue,
)
from .validator import ensure_grid, validate_grid, validate_settings

__all__ = [
    "InvalidPuzzleError",
    "RowConstructionError",
    "SettingsError",
    "SolverError",
    "UnsatisfiableError",
    "ValidationIssue",
    "canonical_dump",
    "canonical_sha256",
    "ensure_grid",
    "validate_grid",
    "validate_settings",
]
