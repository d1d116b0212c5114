"""
Game simulation primitives for benchmarking solvers.

- run_case:  play one game (one hidden answer) with a registered solver.
- run_batch: play many games in sequence (optionally a sample prefix).
- Enforces Wordle's 6-turn limit at the harness layer.

Patterns are int tuples (0 absent, 1 present, 2 exact). The harness owns one
FeedbackCache per batch and hands it to the solver through the state dict.
"""

from __future__ import annotations
import time
from typing import Dict, List

from wordleproof.datasets.corpus import WordCorpus
from wordleproof.engine.constraints import Constraint, narrow
from wordleproof.engine.feedback import FeedbackCache, feedback_pattern, EXACT

# Single source of truth for Wordle turn budget.
WORDLE_MAX_TURNS = 6


def _assert_wordle_turns(max_turns: int) -> None:
    """Guardrail: the solver thresholds are tuned for a 6-turn game."""
    if max_turns != WORDLE_MAX_TURNS:
        raise ValueError(f"max_turns must be {WORDLE_MAX_TURNS} for Wordle-like rules; got {max_turns}")


def run_case(
        solver,
        answer: str,
        *,
        corpus: WordCorpus,
        cache: FeedbackCache | None = None,
        max_turns: int = WORDLE_MAX_TURNS,
        seed: int | None = None,
) -> Dict:
    """
    Execute one game until the solver wins or the turn budget is exhausted.

    Returns:
        dict with keys:
            success (bool), guesses (int), time_ms (float),
            history (list[Constraint]), answer (str)
    """
    _assert_wordle_turns(max_turns)
    if cache is None:
        cache = FeedbackCache(corpus)

    solver.reset(corpus=corpus, seed=seed)

    history: List[Constraint] = []
    candidates = list(corpus.answers)
    win = (EXACT,) * len(answer)

    t0 = time.perf_counter()
    for turn in range(1, max_turns + 1):
        state = {
            "turn": turn,
            "turns_left": max_turns - turn + 1,
            "history": list(history),
            "candidates": candidates,
            "corpus": corpus,
            "cache": cache,
        }
        guess = solver.next_guess(state).lower()

        move = Constraint(guess, feedback_pattern(answer, guess))
        history.append(move)

        if move.pattern == win:
            return {
                "success": True, "guesses": turn,
                "time_ms": (time.perf_counter() - t0) * 1000.0,
                "history": history, "answer": answer,
            }

        candidates = narrow(candidates, move, cache=cache)

    return {
        "success": False, "guesses": max_turns,
        "time_ms": (time.perf_counter() - t0) * 1000.0,
        "history": history, "answer": answer,
    }


def run_batch(
        solver,
        *,
        corpus: WordCorpus,
        answers: List[str] | None = None,
        max_turns: int = WORDLE_MAX_TURNS,
        seed: int | None = None,
        sample: int | None = None,
        progress=None,
) -> List[Dict]:
    """
    Run many cases back-to-back over `answers` (default: the whole answer
    pool). If 'sample' is provided, only the first K answers are played.

    Each case's seed is derived from the base seed (seed + index) so runs are
    reproducible but not identical across cases. `progress`, if given, wraps
    the case iterable (e.g. a tqdm factory).
    """
    _assert_wordle_turns(max_turns)

    pool = list(answers if answers is not None else corpus.answers)
    if sample is not None:
        pool = pool[:sample]

    cache = FeedbackCache(corpus)
    cases = progress(pool) if progress is not None else pool

    out: List[Dict] = []
    for idx, ans in enumerate(cases, start=1):
        case_seed = None if seed is None else (seed + idx)
        r = run_case(solver, ans, corpus=corpus, cache=cache, max_turns=max_turns, seed=case_seed)
        r["solver_id"] = solver.id
        out.append(r)
    return out
