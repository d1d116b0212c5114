"""
I/O utilities for benchmark runs.

Responsibilities:
- write_csv:      flatten per-game results into a tidy CSV (one row per game).
- write_manifest: dump a JSON manifest with config, hashes, and metadata.
- timestamp_id:   stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.

Notes:
- Patterns are written as digit strings ("20110") prefixed with an apostrophe
  so spreadsheet apps keep them as text instead of dropping leading zeros.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence
import csv
import json
import subprocess
import datetime as dt


def pattern_text(pattern: Sequence[int]) -> str:
    return "".join(str(v) for v in pattern)


def _excel_safe(text: str) -> str:
    return "'" + text if text else text


def write_csv(results: List[Dict], path: str, max_turns: int) -> str:
    """
    Serialize a batch of game results to CSV.

    Columns:
      solver, answer, success, guesses, time_ms,
      guess_1, patt_1, ..., guess_<max_turns>, patt_<max_turns>

    Returns the path written.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fields = ["solver", "answer", "success", "guesses", "time_ms"]
    for i in range(1, max_turns + 1):
        fields += [f"guess_{i}", f"patt_{i}"]

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()

        for r in results:
            row = {
                "solver": r.get("solver_id", "?"),
                "answer": r["answer"],
                "success": r["success"],
                "guesses": r["guesses"],
                "time_ms": round(float(r["time_ms"]), 3),
            }
            hist = r.get("history", [])
            for i in range(1, max_turns + 1):
                if i <= len(hist):
                    move = hist[i - 1]
                    row[f"guess_{i}"] = move.guess
                    row[f"patt_{i}"] = _excel_safe(pattern_text(move.pattern))
                else:
                    row[f"guess_{i}"] = ""
                    row[f"patt_{i}"] = ""
            w.writerow(row)

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """JSON manifest next to the CSV: run_id, git_commit, args, solver_config, wordlists, summary."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(manifest, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return str(p)


def summarize(results: List[Dict]) -> Dict:
    """Win rate, mean guesses over wins, and the guess-count histogram."""
    n = len(results)
    wins = [r for r in results if r["success"]]
    hist: Dict[str, int] = {}
    for r in results:
        key = str(r["guesses"]) if r["success"] else "fail"
        hist[key] = hist.get(key, 0) + 1
    return {
        "games": n,
        "wins": len(wins),
        "win_rate": (len(wins) / n) if n else 0.0,
        "mean_guesses": (sum(r["guesses"] for r in wins) / len(wins)) if wins else None,
        "histogram": hist,
    }


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """Short hash of HEAD, or 'unknown' outside a git checkout."""
    try:
        out = subprocess.run(["git", "rev-parse", "--short", "HEAD"], capture_output=True,
                             text=True, check=True)
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
    return out.stdout.strip() or "unknown"
