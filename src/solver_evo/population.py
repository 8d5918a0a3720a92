"""Candidate grids and the cost-ordered population that holds them."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Callable, Iterator, List, Tuple

from .domains import Grid
from .fitness import grid_cost


@dataclass(eq=False)
class Candidate:
    """One candidate grid with its cached conflict count.

    ``processed`` is only meaningful during a single generation sweep.
    """

    grid: Grid
    cost: int = field(init=False)
    processed: bool = False

    def __post_init__(self) -> None:
        self.cost = grid_cost(self.grid)

    def refresh_cost(self) -> int:
        self.cost = grid_cost(self.grid)
        return self.cost

    def clone(self) -> "Candidate":
        return Candidate([list(row) for row in self.grid])


_BY_COST = attrgetter("cost")


class Population:
    """Ordered collection of candidates with a fixed target size.

    The list is re-sorted (stable, ascending cost) whenever a caller needs
    to read the elite; rank 0 is always the best member after :meth:`sort`.
    """

    def __init__(self, target_size: int) -> None:
        if target_size < 2:
            raise ValueError("population needs at least two members")
        self.target_size = target_size
        self.members: List[Candidate] = []

    def __len__(self) -> int:
        return len(self.members)

    def __getitem__(self, index: int) -> Candidate:
        return self.members[index]

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self.members)

    def sort(self) -> None:
        self.members.sort(key=_BY_COST)

    def best(self) -> Candidate:
        return self.members[0]

    def fill(self, factory: Callable[[], Grid]) -> int:
        """Top the population up to ``target_size`` with fresh grids and sort."""

        added = 0
        while len(self.members) < self.target_size:
            self.members.append(Candidate(factory()))
            added += 1
        self.sort()
        return added

    def trim(self) -> int:
        """Drop the worst members beyond ``target_size``."""

        self.sort()
        surplus = len(self.members) - self.target_size
        if surplus <= 0:
            return 0
        del self.members[self.target_size:]
        return surplus

    def propagate_elite(self, first: int, second: int) -> bool:
        """Insert a copy of ``first`` at ``second`` if it is at least as good."""

        if self.members[first].cost <= self.members[second].cost:
            self.members.insert(second, self.members[first].clone())
            return True
        return False

    def abandon_worst(self, rng: random.Random, probability: float) -> int:
        """Remove members worse than the best, each with ``probability``.

        Scans from the last index down to 1; rank 0 and members tied with
        it always survive.
        """

        self.sort()
        min_cost = self.members[0].cost
        removed = 0
        for index in range(len(self.members) - 1, 0, -1):
            if self.members[index].cost > min_cost and rng.random() < probability:
                del self.members[index]
                removed += 1
        return removed

    def reset_processed(self) -> None:
        for candidate in self.members:
            candidate.processed = False

    def snapshot(self) -> List[Tuple[int, Grid]]:
        """Ordered ``(cost, grid)`` pairs, detached from the live members."""

        return [(candidate.cost, [list(row) for row in candidate.grid]) for candidate in self.members]


__all__ = ["Candidate", "Population"]
