"""Port facades exposing the solver to front ends."""

from __future__ import annotations

from .solver_port import solve_puzzle

__all__ = ["solve_puzzle"]
