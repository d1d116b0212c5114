"""
Random Consistent solver.

Strategy:
  - Choose uniformly at random from the CURRENT candidate set.
  - If the candidate set is empty (contradictory history), fall back to the
    allowed list so the harness can still score a move.

A baseline for benchmark runs; deterministic for a given seed.
"""

from __future__ import annotations

from typing import List
from .base import BaseSolver, register


@register
class RandomConsistentSolver(BaseSolver):
    id = "random_consistent"
    name = "Random Consistent"
    version = "1.0.0"

    def next_guess(self, state: dict) -> str:
        candidates: List[str] = state["candidates"]
        pool = candidates or list(state["corpus"].allowed)
        return pool[self.rng.randrange(len(pool))]
