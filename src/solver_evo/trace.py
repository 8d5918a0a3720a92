"""Per-generation trace of the evolutionary search."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from contracts.canonical import canonical_sha256

from .population import Population

TRACE_LEVELS = ("none", "summary", "full")


class EngineState(str, Enum):
    """Lifecycle states of a single solve."""

    INIT = "INIT"
    GENERATE_INITIAL = "GENERATE_INITIAL"
    GENERATION_SWEEP = "GENERATION_SWEEP"
    SOLVED = "SOLVED"
    NOT_FOUND = "NOT_FOUND"
    UNSATISFIABLE = "UNSATISFIABLE"


@dataclass(frozen=True)
class GenerationRecord:
    """Snapshot of the population after one engine step."""

    generation: int
    state: EngineState
    best_cost: Optional[int]
    size: int
    inserted: bool = False
    culled: int = 0
    regenerated: int = 0
    digest: Optional[str] = None

    def to_payload(self) -> dict:
        payload = {
            "generation": self.generation,
            "state": self.state.value,
            "best_cost": self.best_cost,
            "size": self.size,
            "inserted": self.inserted,
            "culled": self.culled,
            "regenerated": self.regenerated,
        }
        if self.digest is not None:
            payload["digest"] = self.digest
        return payload


def population_digest(population: Population) -> str:
    """Canonical digest of the ordered ``(cost, grid)`` pairs."""

    return canonical_sha256(population.snapshot())


@dataclass
class GenerationTrace:
    """In-memory trace accumulator honouring ``trace_level``.

    ``none`` records nothing, ``summary`` records counters and ``full`` adds
    a population digest per entry so runs can be compared for determinism.
    """

    trace_level: str = "none"
    entries: List[GenerationRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.trace_level not in TRACE_LEVELS:
            raise ValueError(f"Unsupported trace level: {self.trace_level!r}")

    @property
    def enabled(self) -> bool:
        return self.trace_level != "none"

    def record(
        self,
        generation: int,
        state: EngineState,
        population: Population | None,
        *,
        inserted: bool = False,
        culled: int = 0,
        regenerated: int = 0,
    ) -> None:
        if not self.enabled:
            return
        if population is not None and len(population):
            best_cost: Optional[int] = population.best().cost
            size = len(population)
        else:
            best_cost, size = None, 0
        digest = None
        if self.trace_level == "full" and population is not None:
            digest = population_digest(population)
        self.entries.append(
            GenerationRecord(
                generation=generation,
                state=state,
                best_cost=best_cost,
                size=size,
                inserted=inserted,
                culled=culled,
                regenerated=regenerated,
                digest=digest,
            )
        )

    def snapshot(self) -> Tuple[GenerationRecord, ...]:
        return tuple(self.entries)

    def reset(self) -> None:
        self.entries.clear()

    def to_json(self, *, indent: int | None = None) -> str:
        payload = [entry.to_payload() for entry in self.entries]
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), indent=indent)


__all__ = [
    "EngineState",
    "GenerationRecord",
    "GenerationTrace",
    "TRACE_LEVELS",
    "population_digest",
]
