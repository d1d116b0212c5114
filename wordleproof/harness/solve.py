"""
The one-call entry point shared by the HTTP endpoint, the background worker
and the CLI: constraints in, candidate count + solver result out.

The turn budget is derived from the history length. With no turns left the
orchestrator is never invoked and an empty heuristic result is returned.
"""

from __future__ import annotations

from typing import Dict, Sequence

from wordleproof.datasets.corpus import WordCorpus
from wordleproof.engine.constraints import Constraint, filter_answers
from wordleproof.engine.feedback import FeedbackCache
from wordleproof.solvers.coverage import CoverageIndex
from wordleproof.solvers.suggest import SolverConfig, SolverResult, suggest_moves
from .core import WORDLE_MAX_TURNS


def turns_left_for(constraints: Sequence[Constraint], max_turns: int = WORDLE_MAX_TURNS) -> int:
    return max(0, max_turns - len(constraints))


def solve_constraints(constraints: Sequence[Constraint], *, corpus: WordCorpus,
                      cache: FeedbackCache | None = None,
                      coverage: CoverageIndex | None = None,
                      config: SolverConfig | None = None,
                      turns_left: int | None = None,
                      max_turns: int = WORDLE_MAX_TURNS) -> Dict:
    """
    Filter the answers by `constraints` and rank the next move.

    `turns_left` defaults to max_turns - len(constraints), floored at 0.

    Returns:
      {"candidateCount": int, "solver": SolverResult.to_dict()}
    """
    config = config or SolverConfig()
    if cache is None:
        cache = FeedbackCache(corpus, max_rows=config.feedback_cache_rows)
    if turns_left is None:
        turns_left = turns_left_for(constraints, max_turns)

    candidates = filter_answers(constraints, corpus=corpus, cache=cache)
    if turns_left > 0:
        result = suggest_moves(candidates, turns_left, corpus=corpus, cache=cache,
                               coverage=coverage, config=config)
    else:
        result = SolverResult()

    return {
        "candidateCount": len(candidates),
        "solver": result.to_dict(),
    }
