from .feedback import (
    FeedbackCache,
    feedback_pattern,
    feedback_code,
    encode_pattern,
    decode_pattern,
    WIN_CODE,
)
from .constraints import Constraint, filter_answers, narrow
from .validation import parse_constraints, parse_pattern, validate_guess

__all__ = [
    "FeedbackCache", "feedback_pattern", "feedback_code", "encode_pattern", "decode_pattern",
    "WIN_CODE", "Constraint", "filter_answers", "narrow",
    "parse_constraints", "parse_pattern", "validate_guess",
]
