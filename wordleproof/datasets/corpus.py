"""
Immutable word corpus: the answers pool and the allowed-guess universe.

Loading rules:
  - entries are stripped and lowercased
  - anything that is not exactly WORD_LENGTH letters a-z is dropped silently
  - duplicates are removed, first occurrence wins (order preserved)
  - every answer missing from the allowed list is appended to it, so
    answers ⊆ allowed always holds

The corpus is a plain value. Build one per process (or per test) and pass it
to the engine and solvers; nothing here is a module-level singleton.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Tuple

from .io import read_lines

WORD_LENGTH = 5
DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_ANSWERS = DATA_DIR / "answers_5.txt"
DEFAULT_ALLOWED = DATA_DIR / "allowed_5.txt"

_WORD_RE = re.compile(r"[a-z]{%d}" % WORD_LENGTH)


def normalize_words(raw: Iterable[str]) -> List[str]:
    """Lowercase, drop malformed entries, dedupe preserving order."""
    seen = set()
    out: List[str] = []
    for w in raw:
        w = w.strip().lower()
        if not _WORD_RE.fullmatch(w) or w in seen:
            continue
        seen.add(w)
        out.append(w)
    return out


@dataclass(frozen=True)
class WordCorpus:
    answers: Tuple[str, ...]
    allowed: Tuple[str, ...]
    answer_set: FrozenSet[str] = field(repr=False)
    allowed_set: FrozenSet[str] = field(repr=False)
    answer_index: Dict[str, int] = field(repr=False, compare=False)

    @classmethod
    def from_lists(cls, answers: Iterable[str], allowed: Iterable[str]) -> "WordCorpus":
        ans = normalize_words(answers)
        allw = normalize_words(allowed)
        if not ans:
            raise ValueError("corpus has no valid answers")

        # Union: an answer is always a legal guess
        allowed_seen = set(allw)
        for w in ans:
            if w not in allowed_seen:
                allw.append(w)
                allowed_seen.add(w)

        return cls(
            answers=tuple(ans),
            allowed=tuple(allw),
            answer_set=frozenset(ans),
            allowed_set=frozenset(allowed_seen),
            answer_index={w: i for i, w in enumerate(ans)},
        )

    def is_answer(self, word: str) -> bool:
        return word.lower() in self.answer_set

    def is_allowed(self, word: str) -> bool:
        return word.lower() in self.allowed_set

    def index_of(self, answer: str) -> int | None:
        return self.answer_index.get(answer)

    def __len__(self) -> int:
        return len(self.answers)


def load_corpus(answers_path: Path | str | None = None,
                allowed_path: Path | str | None = None) -> WordCorpus:
    """
    Read the two word lists (bundled files by default) into a WordCorpus.
    Raises FileNotFoundError if a path doesn't exist.
    """
    answers = read_lines(answers_path or DEFAULT_ANSWERS)
    allowed = read_lines(allowed_path or DEFAULT_ALLOWED)
    return WordCorpus.from_lists(answers, allowed)
