"""
Candidate filtering given game history.

Given:
  - the corpus answers (the only possible secrets)
  - a sequence of Constraint(guess, pattern) moves, at most one per turn

Return:
  - answers that would have produced exactly the recorded pattern for every
    constraint, in corpus order.

The result is recomputed from scratch on every call; nothing is narrowed
incrementally. An empty result means the history is contradictory, which is
a valid end state rather than an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

import numpy as np

from wordleproof.datasets.corpus import WordCorpus
from .feedback import FeedbackCache, Pattern, encode_pattern


@dataclass(frozen=True)
class Constraint:
    """One historical move: the guess played and the feedback it received."""
    guess: str
    pattern: Pattern

    @property
    def code(self) -> int:
        return encode_pattern(self.pattern)

    def to_dict(self) -> dict:
        return {"guess": self.guess, "pattern": list(self.pattern)}


def filter_answers(constraints: Iterable[Constraint], *, corpus: WordCorpus,
                   cache: FeedbackCache | None = None) -> List[str]:
    """
    Keep only the answers consistent with ALL constraints.

    Args:
      constraints : (guess, pattern) moves seen so far
      corpus      : word corpus supplying the answers pool
      cache       : feedback cache to reuse; a throwaway one is built if None

    Returns:
      List[str] of consistent answers (order preserved as in corpus.answers).
      With no constraints this is the full answers list.
    """
    if cache is None:
        cache = FeedbackCache(corpus, max_rows=0)

    keep = np.ones(len(corpus.answers), dtype=bool)
    for c in constraints:
        # Each constraint masks out answers whose code for that guess differs
        keep &= cache.row(c.guess) == c.code
    return [w for w, ok in zip(corpus.answers, keep) if ok]


def narrow(candidates: Sequence[str], constraint: Constraint, *,
           cache: FeedbackCache) -> List[str]:
    """Apply a single new constraint to an existing candidate list."""
    code = constraint.code
    codes = cache.codes(candidates, constraint.guess)
    return [w for w, c in zip(candidates, codes) if c == code]
