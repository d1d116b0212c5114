from __future__ import annotations
import random
from typing import Dict, Type

from wordleproof.datasets.corpus import WordCorpus

# ---- Global solver registry (classes only; instances hold no shared state) ----
REGISTRY: Dict[str, Type["BaseSolver"]] = {}


def register(cls: Type["BaseSolver"]) -> Type["BaseSolver"]:
    """
    Decorator: @register on a solver class adds it to REGISTRY by its `id`.
    """
    sid = getattr(cls, "id", None)
    if not sid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if sid in REGISTRY and REGISTRY[sid] is not cls:
        raise ValueError(f"Duplicate solver id: {sid}")
    REGISTRY[sid] = cls
    return cls


# ---- Base class for game-playing solvers used by the harness ----
class BaseSolver:
    id = "base"
    name = "Base"
    version = "0.0.0"

    def __init__(self):
        self.corpus: WordCorpus | None = None
        self.rng = random.Random()

    def reset(self, *, corpus: WordCorpus, seed: int | None = None) -> None:
        """Called by the harness before every game."""
        self.corpus = corpus
        if seed is not None:
            self.rng.seed(seed)

    def next_guess(self, state: dict) -> str:
        """
        Return the next guess. `state` carries:
          turn, turns_left, history (list of Constraint), candidates,
          corpus, cache (FeedbackCache shared with the harness)
        """
        raise NotImplementedError("Override in subclass")
