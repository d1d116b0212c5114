"""
Wordle feedback for a (secret, guess) pair, as patterns and pattern codes.

Conventions:
  - 2 : exact   = correct letter in the correct position
  - 1 : present = letter occurs elsewhere in the secret
  - 0 : absent  = letter not present (or present fewer times than guessed)

A pattern is a tuple of those values, one per position. Its code is the
base-3 number read left to right (Horner form), so for 5 letters the codes
cover 0..242 and (2, 2, 2, 2, 2) is 242.

Algorithm (two-pass, canonical for Wordle):
  1) Mark every exact match and consume that secret position.
  2) For each remaining guess position, left to right, consume the first
     unused secret position (ascending index) holding the same letter and
     mark the guess position present.
Each secret letter instance satisfies at most one guess position, which
gives the usual duplicate-letter behaviour: guessing "abyss" against
"sassy" can report at most the three s's the secret actually has.

FeedbackCache keeps dense per-guess rows of codes over the answer list so
the solver can bucket thousands of candidates with one numpy gather.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from wordleproof.datasets.corpus import WORD_LENGTH, WordCorpus

ABSENT, PRESENT, EXACT = 0, 1, 2
PATTERN_SPACE = 3 ** WORD_LENGTH
WIN_CODE = PATTERN_SPACE - 1

Pattern = Tuple[int, ...]


def feedback_pattern(secret: str, guess: str) -> Pattern:
    """
    Compute the feedback pattern for `guess` against `secret`.

    Examples:
      feedback_pattern("crane", "arose") -> (1, 2, 0, 0, 2)
      feedback_pattern("level", "belle") -> (0, 2, 1, 1, 1)
    """
    n = len(guess)
    if len(secret) != n:
        raise ValueError(f"secret and guess must be the same length: {secret!r} vs {guess!r}")

    result = [ABSENT] * n
    used = [False] * n

    # Pass 1: exact matches
    for i in range(n):
        if secret[i] == guess[i]:
            result[i] = EXACT
            used[i] = True

    # Pass 2: present elsewhere, consuming secret positions in ascending order
    for i in range(n):
        if result[i] == EXACT:
            continue
        letter = guess[i]
        for j in range(n):
            if used[j] or secret[j] != letter:
                continue
            result[i] = PRESENT
            used[j] = True
            break

    return tuple(result)


def encode_pattern(pattern: Sequence[int]) -> int:
    """Pattern -> base-3 code. Raises ValueError on values outside {0, 1, 2}."""
    code = 0
    for v in pattern:
        if v not in (ABSENT, PRESENT, EXACT):
            raise ValueError(f"pattern values must be 0, 1 or 2; got {list(pattern)}")
        code = code * 3 + v
    return code


def decode_pattern(code: int, length: int = WORD_LENGTH) -> Pattern:
    """Inverse of encode_pattern for a fixed pattern length."""
    if not 0 <= code < 3 ** length:
        raise ValueError(f"pattern code out of range for length {length}: {code}")
    digits = [0] * length
    for i in range(length - 1, -1, -1):
        code, digits[i] = divmod(code, 3)
    return tuple(digits)


def pattern_codes(letters: np.ndarray, guess: str) -> np.ndarray:
    """
    Vectorized feedback codes of `guess` against every row of `letters`
    (an (n, L) uint8 array of secret letters). Same two-pass rules as
    feedback_pattern, applied to all secrets at once.
    """
    n, length = letters.shape
    if len(guess) != length:
        raise ValueError(f"guess must have {length} letters: {guess!r}")
    g = np.frombuffer(guess.encode("ascii"), dtype=np.uint8)

    exact = letters == g
    used = exact.copy()
    present = np.zeros((n, length), dtype=bool)
    for i in range(length):
        pending = ~exact[:, i]
        for j in range(length):
            hit = pending & ~used[:, j] & (letters[:, j] == g[i])
            present[:, i] |= hit
            used[:, j] |= hit
            pending &= ~hit

    digits = exact.astype(np.int64) * EXACT + present
    weights = 3 ** np.arange(length - 1, -1, -1, dtype=np.int64)
    return (digits @ weights).astype(np.uint8)


class FeedbackCache:
    """
    Per-guess rows of feedback codes over corpus.answers.

    A row is computed in full the first time its guess is asked for and is
    read-only afterwards. At most `max_rows` rows are retained; the oldest
    inserted row is evicted first. Codes never go stale since feedback is a
    pure function of the corpus.

    Not safe for concurrent mutation: give each thread or worker its own
    instance.
    """

    def __init__(self, corpus: WordCorpus, max_rows: int = 1200):
        if max_rows < 0:
            raise ValueError(f"max_rows must be >= 0; got {max_rows}")
        self.corpus = corpus
        self.max_rows = int(max_rows)
        self._letters = np.frombuffer(
            "".join(corpus.answers).encode("ascii"), dtype=np.uint8
        ).reshape(len(corpus.answers), WORD_LENGTH)
        self._rows: Dict[str, np.ndarray] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, guess: str) -> bool:
        return guess in self._rows

    def row(self, guess: str) -> np.ndarray:
        cached = self._rows.get(guess)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        row = pattern_codes(self._letters, guess)
        row.flags.writeable = False
        self._rows[guess] = row
        if len(self._rows) > self.max_rows:
            del self._rows[next(iter(self._rows))]
        return row

    def code(self, secret: str, guess: str) -> int:
        idx = self.corpus.answer_index.get(secret)
        if idx is None:
            return encode_pattern(feedback_pattern(secret, guess))
        return int(self.row(guess)[idx])

    def indices(self, candidates: Sequence[str]) -> Optional[np.ndarray]:
        """Answer indices for `candidates`, or None if any is not an answer."""
        index = self.corpus.answer_index
        out = np.empty(len(candidates), dtype=np.intp)
        for k, w in enumerate(candidates):
            i = index.get(w)
            if i is None:
                return None
            out[k] = i
        return out

    def codes(self, candidates: Sequence[str], guess: str,
              idx: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Codes of `guess` against each candidate, in candidate order.
        Pass `idx` (from indices()) when scoring many guesses against the
        same candidate list.
        """
        if idx is None:
            idx = self.indices(candidates)
        if idx is not None:
            return self.row(guess)[idx]
        return np.fromiter((self.code(s, guess) for s in candidates),
                           dtype=np.uint8, count=len(candidates))

    def clear(self) -> None:
        self._rows.clear()
        self.hits = self.misses = 0


def feedback_code(secret: str, guess: str, cache: FeedbackCache | None = None) -> int:
    """Pattern code for (secret, guess); served from `cache` when given."""
    if cache is not None:
        return cache.code(secret, guess)
    return encode_pattern(feedback_pattern(secret, guess))
