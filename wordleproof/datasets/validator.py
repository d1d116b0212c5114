"""
Word-list validator for wordleproof.

What this module does:
- Check a pair of word lists: answers_5.txt (secret pool) and allowed_5.txt
  (guess universe) before they are turned into a WordCorpus.
- Count lines the corpus loader would silently drop (wrong length, non a-z,
  blank) and duplicates it would collapse; hash the raw files (SHA-256).
- Report which answers are missing from allowed. The loader repairs this by
  union, so it is a warning rather than a failure.
- Return a machine-readable dict (for run manifests) and a one-line summary.

Typical use:
    from wordleproof.datasets import validate_wordlists, pretty_summary
    rep = validate_wordlists("wordleproof/datasets/data/answers_5.txt",
                             "wordleproof/datasets/data/allowed_5.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Dict, List, Tuple

from .corpus import WORD_LENGTH
from .io import file_sha256, read_lines


# -----------------------------
# Dataclasses for structured reports
# -----------------------------

@dataclass
class ListReport:
    """Per-file diagnostics."""
    path: str
    exists: bool
    count: int           # valid entries, duplicates included
    unique_count: int    # valid entries after dedupe
    invalid_lines: int   # entries the loader would drop
    sha256: str          # raw bytes hash ("" if missing)


@dataclass
class CorpusReport:
    """Validation result for an (answers, allowed) pair."""
    N: int
    answers: ListReport
    allowed: ListReport
    answers_missing_from_allowed: int
    passed: bool
    issues: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


# -----------------------------
# Helpers
# -----------------------------

def _scan(path: Path, N: int) -> Tuple[List[str], int]:
    """
    Split a list file into (valid_words, invalid_count).

    Valid means: already lowercase, a-z only, exact length N. Comment lines
    ('#') are ignored entirely; blank lines count as invalid.
    """
    valid: List[str] = []
    invalid = 0
    for raw in read_lines(path):
        w = raw.strip()
        if w and w.isascii() and w.isalpha() and w.islower() and len(w) == N:
            valid.append(w)
        else:
            invalid += 1
    return valid, invalid


def _missing_report(path: str, exists: bool) -> ListReport:
    return ListReport(path, exists, 0, 0, 0, "")


# -----------------------------
# Public API
# -----------------------------

def validate_wordlists(answers_path: str, allowed_path: str, N: int = WORD_LENGTH) -> Dict:
    """
    Validate the answers/allowed lists.

    Returns a JSON-serializable dict (CorpusReport schema). `passed` requires
    both files to exist, be non-empty, and contain no invalid lines.
    Duplicates and answers missing from allowed are warnings: the corpus
    loader fixes both.
    """
    ans_p = Path(answers_path)
    all_p = Path(allowed_path)
    issues: List[str] = []
    warnings: List[str] = []

    if not ans_p.exists() or not all_p.exists():
        for p in (ans_p, all_p):
            if not p.exists():
                issues.append(f"file not found: {p}")
        rep = CorpusReport(
            N=N,
            answers=_missing_report(answers_path, ans_p.exists()),
            allowed=_missing_report(allowed_path, all_p.exists()),
            answers_missing_from_allowed=0,
            passed=False,
            issues=issues,
        )
        return asdict(rep)

    answers, ans_invalid = _scan(ans_p, N)
    allowed, all_invalid = _scan(all_p, N)
    answers_set = set(answers)
    allowed_set = set(allowed)

    ans_report = ListReport(str(ans_p), True, len(answers), len(answers_set), ans_invalid,
                            file_sha256(ans_p))
    all_report = ListReport(str(all_p), True, len(allowed), len(allowed_set), all_invalid,
                            file_sha256(all_p))

    missing = sorted(answers_set - allowed_set)
    if missing:
        warnings.append(f"{len(missing)} answer(s) not in allowed, will be merged (e.g., {missing[:5]})")

    if ans_report.count == 0:
        issues.append("answers list contains 0 valid words")
    if all_report.count == 0:
        issues.append("allowed list contains 0 valid words")
    if ans_invalid:
        issues.append(f"answers has {ans_invalid} invalid line(s)")
    if all_invalid:
        issues.append(f"allowed has {all_invalid} invalid line(s)")

    if ans_report.count != ans_report.unique_count:
        warnings.append("answers contains duplicate lines")
    if all_report.count != all_report.unique_count:
        warnings.append("allowed contains duplicate lines")

    rep = CorpusReport(
        N=N,
        answers=ans_report,
        allowed=all_report,
        answers_missing_from_allowed=len(missing),
        passed=not issues,
        issues=issues,
        warnings=warnings,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    One-liner for console output, e.g.
        N=5 | answers=2309 (uniq=2309, sha=abc123...) | allowed=2569 (...) | missing=0 | OK
    """
    a = report["answers"]
    b = report["allowed"]
    status = "OK" if report["passed"] else "FAIL"
    return (
        f"N={report['N']} | answers={a['count']} (uniq={a['unique_count']}, sha={a['sha256'][:12]}) "
        f"| allowed={b['count']} (uniq={b['unique_count']}, sha={b['sha256'][:12]}) "
        f"| missing={report['answers_missing_from_allowed']} | {status}"
    )
