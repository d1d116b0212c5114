"""
Input validation at the edges (HTTP body, worker messages, CLI arguments).

The engine itself assumes clean input. Everything that arrives from outside
passes through here first:
  - parse_constraints: untrusted JSON rows -> List[Constraint]; bad rows are
    skipped, never raised on, and at most MAX_CONSTRAINTS rows are kept
  - parse_pattern:     "20110" or "GY--G" -> pattern tuple (raises ValueError)
  - validate_guess:    is this word a legal guess in the corpus?
"""

from __future__ import annotations

import re
from typing import Any, List

from wordleproof.datasets.corpus import WORD_LENGTH, WordCorpus
from .constraints import Constraint
from .feedback import Pattern

MAX_CONSTRAINTS = 6

GUESS_RE = re.compile(r"[a-z]{%d}" % WORD_LENGTH)

# Letter aliases accepted by parse_pattern (case-insensitive)
_PATTERN_LETTERS = {"g": 2, "y": 1, "-": 0, "b": 0, ".": 0, "x": 0}


def _is_pattern_value(v: Any) -> bool:
    # bool is an int subclass; True must not pass as 1
    return type(v) is int and v in (0, 1, 2)


def parse_constraints(raw: Any, max_constraints: int = MAX_CONSTRAINTS) -> List[Constraint]:
    """
    Turn a decoded JSON value into constraints.

    Accepts a list of {"guess": str, "pattern": [int x5]} mappings. Rows with
    a guess that isn't five letters a-z (after lowercasing) or a pattern that
    isn't exactly five values from {0, 1, 2} are dropped. Anything that isn't
    a list yields [].
    """
    if not isinstance(raw, list):
        return []

    out: List[Constraint] = []
    for row in raw:
        if len(out) >= max_constraints:
            break
        if not isinstance(row, dict):
            continue

        guess = row.get("guess")
        guess = guess.lower() if isinstance(guess, str) else ""
        if not GUESS_RE.fullmatch(guess):
            continue

        pattern = row.get("pattern")
        if not isinstance(pattern, (list, tuple)) or len(pattern) != WORD_LENGTH:
            continue
        if not all(_is_pattern_value(v) for v in pattern):
            continue

        out.append(Constraint(guess, tuple(pattern)))

    return out


def parse_pattern(text: str) -> Pattern:
    """
    Parse a typed pattern.

    Examples:
      parse_pattern("20110") -> (2, 0, 1, 1, 0)
      parse_pattern("GY--G") -> (2, 1, 0, 0, 2)
    """
    s = text.strip().lower()
    if len(s) != WORD_LENGTH:
        raise ValueError(f"pattern must have {WORD_LENGTH} symbols: {text!r}")
    out = []
    for ch in s:
        if ch in "012":
            out.append(int(ch))
        elif ch in _PATTERN_LETTERS:
            out.append(_PATTERN_LETTERS[ch])
        else:
            raise ValueError(f"bad pattern symbol {ch!r} in {text!r}")
    return tuple(out)


def validate_guess(word: Any, corpus: WordCorpus) -> bool:
    """
    True if `word` is a string of five letters a-z (any case) that the corpus
    allows as a guess.
    """
    if not isinstance(word, str):
        return False
    w = word.strip().lower()
    if not GUESS_RE.fullmatch(w):
        return False
    return corpus.is_allowed(w)
