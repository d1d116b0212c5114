"""
Forced-win prover.

Question: from this candidate set, is there a way to guess so that EVERY
possible secret is pinned down within `turns_left` turns, whatever feedback
comes back? This is a minimax search against adversarial feedback.

  can_force_win(C, t):
    |C| <= 1                 -> True
    t <= 1                   -> False (one guess can't split 2+ candidates
                                and still land on the secret)
    otherwise                -> True iff some guess g from proof_options(C, t)
                                splits C into buckets that are all
                                can_force_win(bucket, t - 1)

The first winning guess ends the search; we need a proof, not the best one.
Results are memoized on (t, sorted candidates) in a caller-owned dict.

Every call costs one node from a ProofContext. Once the budget is spent all
further calls answer False, so the result is conservative: True is always a
real proof, False only means "not proven within budget".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from wordleproof.engine.feedback import FeedbackCache
from .coverage import CoverageIndex, proof_options
from .evaluator import partition

logger = logging.getLogger(__name__)

Memo = Dict[Tuple[int, Tuple[str, ...]], bool]


@dataclass
class ProofContext:
    """Node budget for one proof attempt."""
    max_nodes: int = 25_000
    nodes: int = 0

    def spend(self) -> bool:
        """Count one node; False once the budget is exceeded."""
        self.nodes += 1
        if self.nodes > self.max_nodes:
            if self.nodes == self.max_nodes + 1:
                logger.debug("proof node budget of %d exhausted", self.max_nodes)
            return False
        return True

    @property
    def exhausted(self) -> bool:
        return self.nodes > self.max_nodes


def can_force_win(candidates: Sequence[str], turns_left: int, *, memo: Memo,
                  context: ProofContext, cache: FeedbackCache, coverage: CoverageIndex,
                  config) -> bool:
    if not context.spend():
        return False
    if len(candidates) <= 1:
        return True
    if turns_left <= 1:
        return False

    key = (turns_left, tuple(sorted(candidates)))
    cached = memo.get(key)
    if cached is not None:
        return cached

    idx = cache.indices(candidates)
    for guess in proof_options(candidates, turns_left, coverage, config):
        buckets = partition(candidates, guess, cache, idx)
        if all(can_force_win(bucket, turns_left - 1, memo=memo, context=context,
                             cache=cache, coverage=coverage, config=config)
               for bucket in buckets.values()):
            memo[key] = True
            return True

    memo[key] = False
    return False


def is_safe_move(candidates: Sequence[str], guess: str, turns_left: int, *, memo: Memo,
                 cache: FeedbackCache, coverage: CoverageIndex, config) -> bool:
    """
    True if playing `guess` now provably leads to a forced win.

    With one turn left the move is safe only if it is the sole candidate.
    Each call gets a fresh node budget (config.node_budget); the memo may be
    shared between calls on the same candidate set.
    """
    if turns_left <= 0:
        return False
    if turns_left == 1:
        return len(candidates) == 1 and candidates[0] == guess

    context = ProofContext(max_nodes=config.node_budget)
    for bucket in partition(candidates, guess, cache).values():
        if not can_force_win(bucket, turns_left - 1, memo=memo, context=context,
                             cache=cache, coverage=coverage, config=config):
            return False
    return True
