# apps/cli/run.py
"""
CLI entry point for benchmarking solvers over the answer pool.

This script:
  1) Validates the word lists (prints counts + SHA, answers missing from allowed).
  2) Loads the corpus and instantiates the requested solver.
  3) Plays a batch of games with a tqdm progress bar and writes:
       - CSV:  per-game results + guess/pattern history columns
       - JSON: manifest with config, solver thresholds, wordlist hashes, summary
"""

from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path

from tqdm import tqdm

from wordleproof.datasets import load_corpus, validate_wordlists, pretty_summary
from wordleproof.datasets.corpus import DEFAULT_ANSWERS, DEFAULT_ALLOWED
from wordleproof.harness import run_batch, summarize, WORDLE_MAX_TURNS
from wordleproof.harness.io import write_csv, write_manifest, timestamp_id, git_commit_or_unknown
from wordleproof.solvers import SolverConfig, create_solver, get_solver_ids


def main():
    ap = argparse.ArgumentParser(description="wordleproof: benchmark a solver")
    ap.add_argument("--solver", default="late_exact",
                    help=f"solver id (one of: {', '.join(get_solver_ids())})")
    ap.add_argument("--answers", default=str(DEFAULT_ANSWERS), help="answers list")
    ap.add_argument("--allowed", default=str(DEFAULT_ALLOWED), help="allowed guesses")
    ap.add_argument("--sample", type=int, help="play only K answers (deterministic by seed)")
    ap.add_argument("--seed", type=int, default=123, help="base RNG seed")
    ap.add_argument("--config", help="JSON file with SolverConfig overrides")
    ap.add_argument("--node-budget", type=int, help="forced-win proof node budget")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument("--no-progress", action="store_true", help="hide the progress bar")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # 1) Validate wordlists and print a one-liner summary
    rep = validate_wordlists(args.answers, args.allowed)
    print(pretty_summary(rep))

    # 2) Corpus + solver
    corpus = load_corpus(args.answers, args.allowed)
    config = SolverConfig.load(args.config, node_budget=args.node_budget)
    solver = create_solver(args.solver)
    if hasattr(solver, "config"):
        solver.config = config

    # 3) Deterministic sample of answers
    cases = list(corpus.answers)
    if args.sample and args.sample < len(cases):
        random.Random(args.seed).shuffle(cases)
        cases = cases[: args.sample]

    progress = None
    if not args.no_progress:
        progress = lambda it: tqdm(it, ncols=80, desc="Running", unit="game")  # noqa: E731

    results = run_batch(solver, corpus=corpus, answers=cases, seed=args.seed, progress=progress)
    summary = summarize(results)

    # 4) Outputs
    run_id = timestamp_id()
    outdir = Path(args.outdir)
    csv_path = outdir / f"run_{run_id}.csv"
    manifest_path = outdir / f"run_{run_id}_manifest.json"

    write_csv(results, str(csv_path), max_turns=WORDLE_MAX_TURNS)
    write_manifest({
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": vars(args),
        "solver_config": config.to_dict(),
        "wordlists": rep,
        "num_cases": len(results),
        "solver_id": solver.id,
        "summary": summary,
    }, str(manifest_path))

    mean = summary["mean_guesses"]
    print(f"{solver.id}: {summary['wins']}/{summary['games']} solved"
          + (f", mean {mean:.3f} guesses" if mean is not None else ""))
    print(f"Wrote: {csv_path}")
    print(f"Wrote: {manifest_path}")


if __name__ == "__main__":
    main()
