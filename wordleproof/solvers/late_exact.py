"""
Late-exact solver: plays the recommendation of suggest_moves each turn.

The opening position is identical for every game on the same corpus, so its
result is computed once per solver instance and reused.
"""

from __future__ import annotations

from typing import Dict

from wordleproof.datasets.corpus import WordCorpus
from .base import BaseSolver, register
from .coverage import CoverageIndex
from .suggest import SolverConfig, SolverResult, suggest_moves


@register
class LateExactSolver(BaseSolver):
    id = "late_exact"
    name = "Expected Remaining + Late Forced-Win Proofs"
    version = "1.0.0"

    def __init__(self, config: SolverConfig | None = None):
        super().__init__()
        self.config = config or SolverConfig()
        self.last_result: SolverResult | None = None
        self._coverage: CoverageIndex | None = None
        self._openings: Dict[int, SolverResult] = {}

    def reset(self, *, corpus: WordCorpus, seed: int | None = None) -> None:
        if corpus is not self.corpus:
            self._coverage = CoverageIndex(corpus.allowed)
            self._openings.clear()
        super().reset(corpus=corpus, seed=seed)

    def next_guess(self, state: dict) -> str:
        turns_left: int = state["turns_left"]
        opening = not state["history"]

        result = self._openings.get(turns_left) if opening else None
        if result is None:
            result = suggest_moves(
                state["candidates"], turns_left,
                corpus=self.corpus, cache=state.get("cache"),
                coverage=self._coverage, config=self.config,
            )
            if opening:
                self._openings[turns_left] = result
        self.last_result = result

        if result.recommended is not None:
            return result.recommended.word
        # Contradictory history: nothing left to rank
        return self.corpus.allowed[0]
