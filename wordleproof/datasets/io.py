"""
Plain-text word-list files: one entry per line, '#' starts a comment line.
"""

from __future__ import annotations
from pathlib import Path
from typing import Iterable, List
import hashlib


def read_lines(p: Path | str) -> List[str]:
    """
    Entries of a word-list file, comment lines removed.

    A leading BOM is ignored. Blank lines are kept so the validator can
    count them as invalid. Raises FileNotFoundError if the path doesn't exist.
    """
    p = Path(p)
    if not p.is_file():
        raise FileNotFoundError(p)
    with p.open("r", encoding="utf-8-sig") as f:
        return [ln.rstrip("\r\n") for ln in f if not ln.startswith("#")]


def write_lines(lines: Iterable[str], p: Path | str) -> str:
    p = Path(p)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8", newline="\n") as f:
        for ln in lines:
            f.write(f"{ln}\n")
    return str(p)


def file_sha256(p: Path | str) -> str:
    """Hex digest of the raw bytes; identifies the exact list a run used."""
    h = hashlib.sha256()
    with Path(p).open("rb") as f:
        for chunk in iter(lambda: f.read(1 << 16), b""):
            h.update(chunk)
    return h.hexdigest()
