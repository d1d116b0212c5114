# apps/cli/suggest.py
"""
Interactive helper: type the guesses you played and the feedback you got,
get the candidate count, the ranked next moves and a recommendation.

Examples:
    python -m apps.cli.suggest                         # opening move
    python -m apps.cli.suggest roate:00102 lined:GY--G
    python -m apps.cli.suggest roate:00102 --json

Feedback accepts digits (2 exact, 1 present, 0 absent) or letters
(G exact, Y present, - / B / . absent).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List

from wordleproof.datasets import load_corpus
from wordleproof.engine import Constraint, FeedbackCache, filter_answers, parse_pattern, validate_guess
from wordleproof.harness.solve import turns_left_for
from wordleproof.solvers import SolverConfig, suggest_moves, MODE_LATE_EXACT

SHOW_CANDIDATES = 12


def parse_move(text: str, corpus) -> Constraint:
    guess, sep, patt = text.partition(":")
    if not sep:
        raise ValueError(f"expected WORD:PATTERN, got {text!r}")
    guess = guess.strip().lower()
    if not validate_guess(guess, corpus):
        raise ValueError(f"not an allowed guess: {guess!r}")
    return Constraint(guess, parse_pattern(patt))


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="wordleproof: suggest the next guess")
    ap.add_argument("moves", nargs="*", help="played moves as WORD:PATTERN, oldest first")
    ap.add_argument("--answers", help="answers list (default: bundled)")
    ap.add_argument("--allowed", help="allowed guesses (default: bundled)")
    ap.add_argument("--config", help="JSON file with SolverConfig overrides")
    ap.add_argument("--node-budget", type=int, help="forced-win proof node budget")
    ap.add_argument("--top", type=int, default=10, help="suggestions to print")
    ap.add_argument("--json", action="store_true", help="print the raw result as JSON")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    corpus = load_corpus(args.answers, args.allowed)
    try:
        constraints = [parse_move(m, corpus) for m in args.moves]
        config = SolverConfig.load(args.config, node_budget=args.node_budget)
    except ValueError as e:
        ap.error(str(e))

    cache = FeedbackCache(corpus, max_rows=config.feedback_cache_rows)
    candidates = filter_answers(constraints, corpus=corpus, cache=cache)
    turns_left = turns_left_for(constraints)
    result = suggest_moves(candidates, turns_left, corpus=corpus, cache=cache, config=config) \
        if turns_left > 0 else None

    if args.json:
        solver = result.to_dict() if result else {"suggestions": [], "recommended": None,
                                                   "mode": "heuristic"}
        json.dump({"candidateCount": len(candidates), "turnsLeft": turns_left, "solver": solver},
                  sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 0

    print(f"{len(candidates)} candidate(s), {turns_left} turn(s) left")
    if not candidates:
        print("No answer matches this feedback; check the patterns.")
        return 1
    if len(candidates) <= SHOW_CANDIDATES:
        print("  " + " ".join(candidates))
    if result is None:
        return 0

    mode = "late-game exact" if result.mode == MODE_LATE_EXACT else "heuristic"
    print(f"mode: {mode}")
    print(f"{'#':>3}  {'word':5}  {'E[left]':>8}  {'worst':>5}  flags")
    for i, s in enumerate(result.suggestions[: args.top], 1):
        flags = " ".join(f for f, on in (("safe", s.safe), ("candidate", s.in_candidates),
                                         ("answer", s.in_answers)) if on)
        print(f"{i:>3}  {s.word:5}  {s.expected_remaining:8.3f}  {s.worst_bucket:>5}  {flags}")
    if result.recommended:
        r = result.recommended
        print(f"recommended: {r.word}" + (" (proven win)" if r.safe else ""))
    return 0


if __name__ == "__main__":
    sys.exit(main())
