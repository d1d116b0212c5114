"""
Suggestion orchestrator: rank guesses and pick a recommendation.

suggest_moves(candidates, turns_left):
  - 0 candidates  -> empty result, mode "heuristic"
  - 1 candidate   -> play it; safe by definition, mode "late-exact"
  - otherwise     -> score a guess pool (every allowed word while candidates
                     are few, a coverage pool otherwise), rank, keep the top
                     `top_k`. Late in the game (few candidates AND few turns)
                     run the forced-win prover on the best `proof_top_k` and
                     flag the proven ones as safe.

Recommendation precedence over the ranked list:
  safe candidate > safe word > candidate > top ranked > None
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, field, fields
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from wordleproof.datasets.corpus import WordCorpus
from wordleproof.engine.feedback import FeedbackCache
from .coverage import CoverageIndex
from .evaluator import evaluate_guess, rank_key
from .proof import Memo, is_safe_move

logger = logging.getLogger(__name__)

MODE_HEURISTIC = "heuristic"
MODE_LATE_EXACT = "late-exact"


@dataclass(frozen=True)
class SolverConfig:
    """Tunable thresholds. Defaults are empirical, not derived."""
    # evaluation pool
    full_pool_max_candidates: int = 30     # score every allowed word at or below this
    eval_pool_size: int = 380              # coverage pool size above it
    top_k: int = 40                        # suggestions kept
    # exact mode
    exact_max_candidates: int = 60
    exact_max_turns: int = 4
    proof_top_k: int = 16
    node_budget: int = 25_000
    # prover guess pools
    proof_candidates_only_turns: int = 2
    proof_small_candidates: int = 12
    proof_small_pool_size: int = 400
    proof_large_pool_size: int = 180
    # feedback cache
    feedback_cache_rows: int = 1200

    @classmethod
    def from_mapping(cls, data: Dict) -> "SolverConfig":
        if not isinstance(data, dict):
            raise ValueError(f"solver config must be a mapping; got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown solver config key(s): {unknown}. Available: {sorted(known)}")
        return cls(**{k: int(v) for k, v in data.items()})

    @classmethod
    def load(cls, path: str | Path | None = None, **overrides) -> "SolverConfig":
        """Optional JSON file, then non-None keyword overrides on top."""
        data: Dict = {}
        if path:
            data.update(json.loads(Path(path).read_text(encoding="utf-8")))
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_mapping(data)

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class Suggestion:
    word: str
    expected_remaining: float
    worst_bucket: int
    safe: bool = False
    in_answers: bool = False
    in_candidates: bool = False

    def to_dict(self) -> Dict:
        return {
            "word": self.word,
            "expectedRemaining": self.expected_remaining,
            "worstBucket": self.worst_bucket,
            "safe": self.safe,
            "inAnswers": self.in_answers,
            "inCandidates": self.in_candidates,
        }


@dataclass
class SolverResult:
    suggestions: List[Suggestion] = field(default_factory=list)
    recommended: Optional[Suggestion] = None
    mode: str = MODE_HEURISTIC

    def to_dict(self) -> Dict:
        return {
            "suggestions": [s.to_dict() for s in self.suggestions],
            "recommended": self.recommended.to_dict() if self.recommended else None,
            "mode": self.mode,
        }


def _recommend(top: Sequence[Suggestion]) -> Optional[Suggestion]:
    for pick in (
        lambda s: s.safe and s.in_candidates,
        lambda s: s.safe,
        lambda s: s.in_candidates,
    ):
        for s in top:
            if pick(s):
                return s
    return top[0] if top else None


def suggest_moves(candidates: Sequence[str], turns_left: int, *, corpus: WordCorpus,
                  cache: FeedbackCache | None = None,
                  coverage: CoverageIndex | None = None,
                  config: SolverConfig | None = None) -> SolverResult:
    """
    Rank guesses for the current candidate set.

    Args:
      candidates : answers still consistent with the history
      turns_left : guesses remaining (including the next one)
      corpus     : word corpus (allowed list + answer membership)
      cache      : feedback cache to reuse across calls; fresh one if None
      coverage   : prebuilt CoverageIndex over corpus.allowed; built if None
      config     : thresholds; SolverConfig() defaults if None
    """
    config = config or SolverConfig()
    candidates = list(candidates)

    if not candidates:
        return SolverResult()

    if len(candidates) == 1:
        only = Suggestion(candidates[0], 1.0, 1, safe=True, in_answers=True, in_candidates=True)
        return SolverResult([only], only, MODE_LATE_EXACT)

    if cache is None:
        cache = FeedbackCache(corpus, max_rows=config.feedback_cache_rows)
    if coverage is None:
        coverage = CoverageIndex(corpus.allowed)

    candidate_set = set(candidates)
    if len(candidates) <= config.full_pool_max_candidates:
        pool = list(corpus.allowed)
    else:
        pool = coverage.pool(candidates, config.eval_pool_size)

    idx = cache.indices(candidates)
    evaluated: List[Suggestion] = []
    for word in pool:
        expected, worst = evaluate_guess(word, candidates, cache, idx)
        evaluated.append(Suggestion(
            word=word,
            expected_remaining=expected,
            worst_bucket=worst,
            in_answers=corpus.is_answer(word),
            in_candidates=word in candidate_set,
        ))
    evaluated.sort(key=rank_key)
    top = evaluated[: config.top_k]

    exact = len(candidates) <= config.exact_max_candidates and turns_left <= config.exact_max_turns
    logger.debug("suggest: %d candidates, %d turns left, pool=%d, exact=%s",
                 len(candidates), turns_left, len(pool), exact)

    if exact:
        memo: Memo = {}
        for s in top[: config.proof_top_k]:
            s.safe = is_safe_move(candidates, s.word, turns_left, memo=memo, cache=cache,
                                  coverage=coverage, config=config)

    return SolverResult(top, _recommend(top), MODE_LATE_EXACT if exact else MODE_HEURISTIC)
