"""Per-puzzle context shared by the builder, the operators and the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .domains import Domains, Grid, apply_singletons, compute_domains, size_ordering


@dataclass(frozen=True)
class PuzzleContext:
    """Immutable per-puzzle tables computed once before the search.

    ``fixed`` holds the givens plus every propagated single, ``domains`` the
    filtered candidate values and ``ordering`` the free columns of each row
    sorted by domain size.  Nothing in the search mutates the context, so it
    can be handed to every operator explicitly instead of living in
    module-level state.
    """

    fixed: Tuple[Tuple[int, ...], ...]
    domains: Domains
    ordering: Tuple[Tuple[int, ...], ...]

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[int]]) -> "PuzzleContext":
        """Validate ``grid``, propagate domains and derive the row orderings."""

        domains = compute_domains(grid)
        fixed = apply_singletons(grid, domains)
        return cls(
            fixed=tuple(tuple(row) for row in fixed),
            domains=domains,
            ordering=size_ordering(domains),
        )

    def fixed_grid(self) -> Grid:
        """Return a mutable copy of the fixed grid."""

        return [list(row) for row in self.fixed]

    def free_cells(self) -> int:
        return sum(len(row) for row in self.ordering)

    def is_fully_fixed(self) -> bool:
        return self.free_cells() == 0


__all__ = ["PuzzleContext"]
