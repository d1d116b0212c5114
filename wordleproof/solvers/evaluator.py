"""
Guess evaluation against a fixed candidate set.

For guess g, the CURRENT candidates partition into feedback buckets of sizes
{c_i}. With the secret uniform over n candidates, the expected leftover after
seeing the pattern is:
    E[left | g] = sum_i (c_i / n) * c_i = (1/n) * sum_i c_i^2
Lower is better. The worst bucket max_i c_i breaks ties.

Ranking order for scored guesses (rank_key):
  1) expected remaining, ascending
  2) worst bucket, ascending
  3) current candidates first
  4) answer-pool words first
  5) word, alphabetical
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from wordleproof.engine.feedback import PATTERN_SPACE, FeedbackCache


def partition(candidates: Sequence[str], guess: str, cache: FeedbackCache,
              idx: Optional[np.ndarray] = None) -> Dict[int, List[str]]:
    """Group candidates by feedback code; buckets keep candidate order."""
    buckets: Dict[int, List[str]] = defaultdict(list)
    for word, code in zip(candidates, cache.codes(candidates, guess, idx).tolist()):
        buckets[code].append(word)
    return buckets


def bucket_counts(candidates: Sequence[str], guess: str, cache: FeedbackCache,
                  idx: Optional[np.ndarray] = None) -> np.ndarray:
    """Dense histogram of candidate counts per pattern code."""
    return np.bincount(cache.codes(candidates, guess, idx), minlength=PATTERN_SPACE)


def _stats(counts: np.ndarray, n: int) -> Tuple[float, int]:
    sum_c2 = int(np.dot(counts, counts))
    worst = int(counts.max()) if n else 0
    return sum_c2 / max(1, n), worst


def expected_remaining(candidates: Sequence[str], guess: str, cache: FeedbackCache,
                       idx: Optional[np.ndarray] = None) -> float:
    return _stats(bucket_counts(candidates, guess, cache, idx), len(candidates))[0]


def worst_bucket(candidates: Sequence[str], guess: str, cache: FeedbackCache,
                 idx: Optional[np.ndarray] = None) -> int:
    return _stats(bucket_counts(candidates, guess, cache, idx), len(candidates))[1]


def evaluate_guess(guess: str, candidates: Sequence[str], cache: FeedbackCache,
                   idx: Optional[np.ndarray] = None) -> Tuple[float, int]:
    """Both metrics from one partitioning pass: (expected_remaining, worst_bucket)."""
    return _stats(bucket_counts(candidates, guess, cache, idx), len(candidates))


def rank_key(s) -> tuple:
    """Sort key for scored suggestions (see module docstring)."""
    return (s.expected_remaining, s.worst_bucket, not s.in_candidates, not s.in_answers, s.word)
