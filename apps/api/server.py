# apps/api/server.py
"""
HTTP endpoint for the solver.

POST /api/next  {"constraints": [{"guess": "crane", "pattern": [0,1,0,0,2]}, ...]}
  -> {"candidateCount": int, "solver": {...}, "mode": "api"}

Request validation lives here, not in the engine: bad rows are skipped by
parse_constraints, bodies over 8 KiB are rejected, at most 6 constraints are
used, and turnsLeft = max(0, 6 - len(constraints)).

The development server starts a thread per request, so FeedbackCaches are
kept in a shared pool: a request borrows an idle cache (or builds one) and
hands it back when done. The corpus and coverage index are read-only and
shared.

CORS: an allowed Origin is echoed back, anything else gets the first
allowed origin. Set WORDLEPROOF_ALLOWED_ORIGINS (a JSON list) or pass
--allow-origin to replace the defaults.

Run locally:
    python -m apps.api.server --port 8787
"""

from __future__ import annotations

import argparse
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Tuple

from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest, RequestEntityTooLarge

from wordleproof.datasets import WordCorpus, load_corpus
from wordleproof.engine.feedback import FeedbackCache
from wordleproof.engine.validation import MAX_CONSTRAINTS, parse_constraints
from wordleproof.harness.solve import solve_constraints
from wordleproof.solvers.coverage import CoverageIndex
from wordleproof.solvers.suggest import SolverConfig

MAX_REQUEST_BODY_BYTES = 8 * 1024

# Production site first: it is the fallback for unknown origins
DEFAULT_ALLOWED_ORIGINS = (
    "https://roseu.net",
    "https://www.roseu.net",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)

ENV_PREFIX = "WORDLEPROOF"


class CachePool:
    """FeedbackCaches reused across requests; each is held by one request at a time."""

    def __init__(self, corpus: WordCorpus, max_rows: int):
        self.corpus = corpus
        self.max_rows = max_rows
        self._idle: List[FeedbackCache] = []
        self._lock = threading.Lock()

    @contextmanager
    def acquire(self) -> Iterator[FeedbackCache]:
        with self._lock:
            cache = self._idle.pop() if self._idle else None
        if cache is None:
            cache = FeedbackCache(self.corpus, max_rows=self.max_rows)
        try:
            yield cache
        finally:
            with self._lock:
                self._idle.append(cache)

    @property
    def idle(self) -> Tuple[FeedbackCache, ...]:
        with self._lock:
            return tuple(self._idle)


def _error(code: str, message: str, status: int):
    return jsonify({"error": {"code": code, "message": message}}), status


def create_app(corpus=None, config: SolverConfig | None = None, **overrides) -> Flask:
    """
    Application factory.

    Config keys (defaults, then WORDLEPROOF_* environment variables, then
    keyword args):
      ALLOWED_ORIGINS     origins echoed back in CORS headers; first is the fallback
      MAX_CONTENT_LENGTH  request body cap in bytes
      MAX_CONSTRAINTS     constraints used per request
    """
    app = Flask(__name__)
    app.config.update(
        ALLOWED_ORIGINS=list(DEFAULT_ALLOWED_ORIGINS),
        MAX_CONTENT_LENGTH=MAX_REQUEST_BODY_BYTES,
        MAX_CONSTRAINTS=MAX_CONSTRAINTS,
        SOLVER_CONFIG=config or SolverConfig(),
    )
    app.config.from_prefixed_env(ENV_PREFIX)
    app.config.update(overrides)

    if corpus is None:
        corpus = load_corpus()
    coverage = CoverageIndex(corpus.allowed)
    caches = CachePool(corpus, app.config["SOLVER_CONFIG"].feedback_cache_rows)
    app.extensions["wordleproof.caches"] = caches

    @app.after_request
    def add_cors_headers(response):
        allowed = app.config["ALLOWED_ORIGINS"]
        origin = request.headers.get("Origin")
        response.headers["Access-Control-Allow-Origin"] = (
            origin if origin in allowed else (allowed[0] if allowed else "null"))
        response.headers["Access-Control-Allow-Methods"] = "POST, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Vary"] = "Origin"
        return response

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(_e):
        return _error("payload_too_large", "Request body is too large.", 413)

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return _error("method_not_allowed", "Use POST /api/next", 405)

    @app.route("/api/next", methods=["POST", "OPTIONS"])
    def next_move():
        if request.method == "OPTIONS":
            return "", 204

        try:
            body = request.get_json(force=True)
        except BadRequest:
            return _error("invalid_json", "Invalid JSON request body.", 400)

        raw = body.get("constraints") if isinstance(body, dict) else None
        constraints = parse_constraints(raw, app.config["MAX_CONSTRAINTS"])
        with caches.acquire() as cache:
            out = solve_constraints(constraints, corpus=corpus, cache=cache,
                                    coverage=coverage, config=app.config["SOLVER_CONFIG"])
        return jsonify({**out, "mode": "api"})

    return app


def main():
    ap = argparse.ArgumentParser(description="wordleproof: solver HTTP endpoint")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8787)
    ap.add_argument("--answers", help="answers list (default: bundled)")
    ap.add_argument("--allowed", help="allowed guesses (default: bundled)")
    ap.add_argument("--allow-origin", action="append", dest="origins",
                    help="CORS origin; repeat for several, the first is the fallback")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    overrides = {"ALLOWED_ORIGINS": args.origins} if args.origins else {}
    app = create_app(load_corpus(args.answers, args.allowed), **overrides)
    app.run(host=args.host, port=args.port, threaded=True)


if __name__ == "__main__":
    main()
