"""
Coverage pools: a reduced set of guesses worth scoring.

Scoring every allowed word against every candidate is too slow while the
candidate set is large, so we prefilter:
  - letter score  = number of DISTINCT candidates containing the letter
                    (a word counts each of its letters once)
  - word score    = sum of the letter scores of its distinct letters
  - pool          = candidates + the top-`pool_size` allowed words by score,
                    deduplicated, candidates first

Candidates are always in the pool, whatever their own score.
"""

from __future__ import annotations

from collections import Counter
from typing import List, Sequence

import numpy as np

_ALPHABET = 26
_A = ord("a")


def letter_coverage(candidates: Sequence[str]) -> Counter:
    counts: Counter = Counter()
    for w in candidates:
        counts.update(set(w))
    return counts


def coverage_score(word: str, counts: Counter) -> int:
    """Sum of per-letter counts with duplicates in the word counted once."""
    return sum(counts[ch] for ch in set(word))


def _letter_matrix(words: Sequence[str]) -> np.ndarray:
    """(len(words), 26) membership matrix: row r has True for each letter of words[r]."""
    n = len(words)
    member = np.zeros((n, _ALPHABET), dtype=np.int64)
    if n:
        letters = np.frombuffer("".join(words).encode("ascii"), dtype=np.uint8)
        letters = letters.reshape(n, -1).astype(np.intp) - _A
        member[np.arange(n)[:, None], letters] = 1
    return member


def _merge(candidates: Sequence[str], ranked: Sequence[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for w in list(candidates) + list(ranked):
        if w not in seen:
            seen.add(w)
            out.append(w)
    return out


class CoverageIndex:
    """
    Letter-membership matrix of the allowed list, built once so pools can be
    ranked with one matrix product per request.
    """

    def __init__(self, allowed: Sequence[str]):
        self.allowed = list(allowed)
        self._member = _letter_matrix(self.allowed)

    def ranked(self, candidates: Sequence[str], pool_size: int) -> List[str]:
        """Top `pool_size` allowed words by coverage of `candidates`; ties keep list order."""
        letter_scores = _letter_matrix(candidates).sum(axis=0)
        scores = self._member @ letter_scores
        order = np.argsort(-scores, kind="stable")[: max(0, pool_size)]
        return [self.allowed[i] for i in order]

    def pool(self, candidates: Sequence[str], pool_size: int) -> List[str]:
        return _merge(candidates, self.ranked(candidates, pool_size))


def build_coverage_pool(candidates: Sequence[str], allowed: Sequence[str],
                        pool_size: int) -> List[str]:
    """One-off pool without a prebuilt index (plain Python scoring)."""
    counts = letter_coverage(candidates)
    ranked = sorted(allowed, key=lambda w: coverage_score(w, counts), reverse=True)
    return _merge(candidates, ranked[: max(0, pool_size)])


def proof_options(candidates: Sequence[str], turns_left: int, coverage: CoverageIndex,
                  config) -> List[str]:
    """
    Guesses the forced-win search tries at one node:
      - few turns left: only the candidates themselves (precision over breadth)
      - small candidate sets: a generous coverage pool
      - otherwise: a tighter coverage pool
    """
    if turns_left <= config.proof_candidates_only_turns:
        return list(candidates)
    if len(candidates) <= config.proof_small_candidates:
        return coverage.pool(candidates, config.proof_small_pool_size)
    return coverage.pool(candidates, config.proof_large_pool_size)
