import pytest
import numpy as np
from wordleproof.engine import (
    Constraint, FeedbackCache, feedback_pattern, feedback_code, encode_pattern, decode_pattern,
    filter_answers, narrow, parse_constraints, parse_pattern, validate_guess, WIN_CODE,
)
from wordleproof.engine.feedback import pattern_codes

# --- golden table, hand-computed (secret, guess) -> pattern ---
GOLDEN = [
    ("crane", "arose", (1, 2, 0, 0, 2)),
    ("crane", "crane", (2, 2, 2, 2, 2)),
    ("crane", "raise", (1, 1, 0, 0, 2)),
    ("crane", "stare", (0, 0, 2, 1, 2)),
    ("level", "belle", (0, 2, 1, 1, 1)),
    ("level", "lemon", (2, 2, 0, 0, 0)),
    ("scoop", "cools", (1, 1, 2, 0, 1)),
    ("sassy", "abyss", (1, 0, 1, 2, 1)),   # doubled letter in the secret
    ("abyss", "sassy", (1, 1, 0, 2, 1)),   # third 's' finds nothing left to consume
    ("abide", "speed", (0, 0, 1, 0, 1)),   # doubled letter in the guess
    ("hello", "lolly", (0, 1, 2, 2, 0)),   # exact l's consume both secret l's
]


@pytest.mark.parametrize("secret,guess,expected", GOLDEN)
def test_feedback_pattern_golden(secret, guess, expected):
    assert feedback_pattern(secret, guess) == expected


@pytest.mark.parametrize("secret,guess,expected", GOLDEN)
def test_vectorized_codes_match_pattern(secret, guess, expected):
    letters = np.frombuffer(secret.encode("ascii"), dtype=np.uint8).reshape(1, 5)
    assert int(pattern_codes(letters, guess)[0]) == encode_pattern(expected)


@pytest.mark.parametrize("secret,guess", [(s, g) for s, g, _ in GOLDEN])
def test_exact_count_matches_position_matches(secret, guess):
    patt = feedback_pattern(secret, guess)
    assert patt.count(2) == sum(a == b for a, b in zip(secret, guess))
    # never more marks for a letter than the secret has copies
    for letter in set(guess):
        marked = sum(1 for g, p in zip(guess, patt) if g == letter and p)
        assert marked <= secret.count(letter)


def test_feedback_length_mismatch():
    with pytest.raises(ValueError):
        feedback_pattern("crane", "cranes")


def test_encode_decode_whole_space():
    seen = set()
    for code in range(243):
        patt = decode_pattern(code)
        assert encode_pattern(patt) == code
        seen.add(patt)
    assert len(seen) == 243
    assert encode_pattern((2, 2, 2, 2, 2)) == WIN_CODE == 242
    assert encode_pattern((1, 0, 0, 0, 0)) == 81


def test_encode_decode_reject_bad_input():
    with pytest.raises(ValueError):
        encode_pattern((0, 1, 3, 0, 0))
    with pytest.raises(ValueError):
        decode_pattern(243)
    with pytest.raises(ValueError):
        decode_pattern(-1)


def test_feedback_cache_rows_and_eviction(small_corpus):
    cache = FeedbackCache(small_corpus, max_rows=2)
    assert cache.code("crane", "arose") == encode_pattern((1, 2, 0, 0, 2))
    assert cache.code("crane", "arose") == feedback_code("crane", "arose")
    assert cache.hits == 1 and cache.misses == 1

    cache.row("slate")
    cache.row("roate")
    assert len(cache) == 2
    assert "arose" not in cache  # oldest row went first
    assert "slate" in cache and "roate" in cache

    cache.clear()
    assert len(cache) == 0 and (cache.hits, cache.misses) == (0, 0)
    assert cache.code("crane", "crane") == WIN_CODE
    assert cache.misses == 1


def test_feedback_cache_non_answer_secret(small_corpus):
    cache = FeedbackCache(small_corpus)
    # 'level' is not an answer: computed directly, no row needed for it
    assert cache.code("level", "belle") == encode_pattern((0, 2, 1, 1, 1))
    assert cache.indices(["crane", "level"]) is None
    codes = cache.codes(["crane", "level"], "belle")
    assert codes.tolist() == [feedback_code("crane", "belle"), feedback_code("level", "belle")]


def test_filter_answers_no_constraints_is_full_pool(full_corpus):
    assert filter_answers([], corpus=full_corpus) == list(full_corpus.answers)


def test_filter_answers_history(small_corpus):
    history = [Constraint("raise", (1, 1, 0, 0, 2))]
    cand = filter_answers(history, corpus=small_corpus)
    assert "crane" in cand and "stare" not in cand and "raise" not in cand
    assert all(feedback_pattern(w, "raise") == (1, 1, 0, 0, 2) for w in cand)


def test_filter_answers_narrows_monotonically(full_corpus):
    secret = "crane"
    cache = FeedbackCache(full_corpus)
    history = []
    sizes = [len(filter_answers(history, corpus=full_corpus, cache=cache))]
    for guess in ["salet", "pudgy", "crank", "crane"]:
        history.append(Constraint(guess, feedback_pattern(secret, guess)))
        cand = filter_answers(history, corpus=full_corpus, cache=cache)
        assert secret in cand
        sizes.append(len(cand))
    assert sizes == sorted(sizes, reverse=True)
    assert sizes[-1] == 1


def test_filter_answers_contradiction_is_empty(small_corpus):
    history = [Constraint("crane", (2, 2, 2, 2, 2)), Constraint("stare", (2, 2, 2, 2, 2))]
    assert filter_answers(history, corpus=small_corpus) == []


def test_narrow_matches_filter(small_corpus):
    cache = FeedbackCache(small_corpus)
    move = Constraint("slate", feedback_pattern("trace", "slate"))
    assert narrow(list(small_corpus.answers), move, cache=cache) == \
        filter_answers([move], corpus=small_corpus, cache=cache)


def test_parse_constraints_skips_bad_rows():
    raw = [
        {"guess": "CRANE", "pattern": [0, 1, 0, 0, 2]},
        {"guess": "cran", "pattern": [0, 0, 0, 0, 0]},
        {"guess": "crane", "pattern": [0, 1, 3, 0, 2]},
        {"guess": "crane", "pattern": [0, 1, 0, 0]},
        {"guess": "crane", "pattern": [True, 0, 0, 0, 0]},
        {"guess": 12345, "pattern": [0, 0, 0, 0, 0]},
        "crane",
        {"guess": "slate", "pattern": [2, 2, 2, 2, 2]},
    ]
    out = parse_constraints(raw)
    assert out == [Constraint("crane", (0, 1, 0, 0, 2)), Constraint("slate", (2, 2, 2, 2, 2))]
    assert parse_constraints({"guess": "crane"}) == []
    assert parse_constraints(None) == []


def test_parse_constraints_caps_rows():
    raw = [{"guess": "crane", "pattern": [0, 0, 0, 0, 0]}] * 9
    assert len(parse_constraints(raw)) == 6
    assert len(parse_constraints(raw, max_constraints=2)) == 2


@pytest.mark.parametrize("text,expected", [
    ("20110", (2, 0, 1, 1, 0)),
    ("GY--G", (2, 1, 0, 0, 2)),
    ("gybbg", (2, 1, 0, 0, 2)),
])
def test_parse_pattern(text, expected):
    assert parse_pattern(text) == expected


@pytest.mark.parametrize("text", ["2011", "20113", "GYZ-G"])
def test_parse_pattern_rejects(text):
    with pytest.raises(ValueError):
        parse_pattern(text)


def test_validate_guess(small_corpus):
    assert validate_guess("CRANE", small_corpus) is True
    assert validate_guess("salet", small_corpus) is True
    assert validate_guess("cranes", small_corpus) is False
    assert validate_guess("zzzzz", small_corpus) is False
    assert validate_guess(None, small_corpus) is False
