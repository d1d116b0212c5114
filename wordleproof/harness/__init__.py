from .core import run_case, run_batch, WORDLE_MAX_TURNS
from .io import write_csv, write_manifest, summarize
from .solve import solve_constraints, turns_left_for
from .worker import SolveWorker, handle_message

__all__ = ["run_case", "run_batch", "WORDLE_MAX_TURNS", "write_csv", "write_manifest",
           "summarize", "solve_constraints", "turns_left_for", "SolveWorker", "handle_message"]
