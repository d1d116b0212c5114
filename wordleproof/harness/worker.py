"""
Background solve worker.

Solving can take seconds late in the game, so interactive callers push the
work to a background thread and keep their own loop responsive. The protocol
is message based:

  request  {"type": "solve", "id": int, "constraints": [...], "turnsLeft": int}
  response {"type": "solve", "id": int, "candidateCount": int, "solver": {...}}

Ids increase monotonically per worker. A caller that has submitted a newer
request must drop any response whose id is not the latest (is_current).

The worker owns its FeedbackCache and CoverageIndex; only the read-only
corpus is shared with the rest of the process.
"""

from __future__ import annotations

import itertools
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, Optional, Sequence, Tuple

from wordleproof.datasets.corpus import WordCorpus
from wordleproof.engine.constraints import Constraint
from wordleproof.engine.feedback import FeedbackCache
from wordleproof.engine.validation import parse_constraints
from wordleproof.solvers.coverage import CoverageIndex
from wordleproof.solvers.suggest import SolverConfig
from .solve import solve_constraints

logger = logging.getLogger(__name__)


def handle_message(message: Dict, *, corpus: WordCorpus, cache: FeedbackCache,
                   coverage: CoverageIndex | None = None,
                   config: SolverConfig | None = None) -> Optional[Dict]:
    """Answer one protocol message; anything but a solve request yields None."""
    if not isinstance(message, dict) or message.get("type") != "solve":
        return None

    constraints = parse_constraints(message.get("constraints"))
    turns_left = message.get("turnsLeft")
    if not isinstance(turns_left, int) or isinstance(turns_left, bool):
        turns_left = None

    out = solve_constraints(constraints, corpus=corpus, cache=cache, coverage=coverage,
                            config=config, turns_left=turns_left)
    return {"type": "solve", "id": message.get("id"), **out}


class SolveWorker:
    """
    Single-thread executor running solve requests off the caller's thread.

    Usage:
        worker = SolveWorker(corpus)
        req_id, fut = worker.submit(constraints, turns_left=4)
        resp = fut.result()
        if worker.is_current(resp):
            show(resp)
        worker.close()
    """

    def __init__(self, corpus: WordCorpus, config: SolverConfig | None = None):
        self.corpus = corpus
        self.config = config or SolverConfig()
        self.cache = FeedbackCache(corpus, max_rows=self.config.feedback_cache_rows)
        self.coverage = CoverageIndex(corpus.allowed)
        self._ids = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()
        self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="wordleproof-solve")

    @property
    def latest_id(self) -> int:
        return self._latest

    def submit(self, constraints: Sequence[Constraint],
               turns_left: int | None = None) -> Tuple[int, Future]:
        with self._lock:
            req_id = next(self._ids)
            self._latest = req_id
        message = {
            "type": "solve",
            "id": req_id,
            "constraints": [c.to_dict() for c in constraints],
            "turnsLeft": turns_left,
        }
        logger.debug("submit solve #%d (%d constraints)", req_id, len(constraints))
        return req_id, self._pool.submit(self._run, message)

    def _run(self, message: Dict) -> Dict:
        return handle_message(message, corpus=self.corpus, cache=self.cache,
                              coverage=self.coverage, config=self.config)

    def is_current(self, response: Dict | None) -> bool:
        return response is not None and response.get("id") == self._latest

    def close(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)

    def __enter__(self) -> "SolveWorker":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
