import pytest
from wordleproof.engine import FeedbackCache
from wordleproof.solvers import (
    SolverConfig, Suggestion, suggest_moves, create_solver, get_solver_ids,
    MODE_HEURISTIC, MODE_LATE_EXACT,
)
from wordleproof.solvers.coverage import (
    CoverageIndex, build_coverage_pool, coverage_score, letter_coverage, proof_options,
)
from wordleproof.solvers.evaluator import (
    evaluate_guess, expected_remaining, partition, rank_key, worst_bucket,
)
from wordleproof.solvers.proof import ProofContext, can_force_win, is_safe_move

from conftest import ILLS


# ---------------- evaluator ----------------

def test_metrics_on_ills(ills_corpus):
    cache = FeedbackCache(ills_corpus)
    # a candidate splits off itself only: buckets {1, 4}
    assert expected_remaining(ILLS, "bills", cache) == pytest.approx((1 + 16) / 5)
    assert worst_bucket(ILLS, "bills", cache) == 4
    # the probe word separates all five
    assert evaluate_guess("fhmpz", ILLS, cache) == (1.0, 1)
    buckets = partition(ILLS, "bills", cache)
    assert sorted(len(b) for b in buckets.values()) == [1, 4]
    assert buckets[242] == ["bills"]


def test_metrics_empty_candidates(ills_corpus):
    cache = FeedbackCache(ills_corpus)
    assert evaluate_guess("bills", [], cache) == (0.0, 0)


def test_rank_key_order():
    rows = [
        Suggestion("zzzzz", 1.0, 2, in_answers=True, in_candidates=True),
        Suggestion("bbbbb", 1.0, 1),
        Suggestion("ccccc", 1.0, 1, in_answers=True),
        Suggestion("ddddd", 1.0, 1, in_answers=True, in_candidates=True),
        Suggestion("aaaaa", 0.5, 9),
        Suggestion("eeeee", 1.0, 1, in_answers=True, in_candidates=True),
    ]
    assert [s.word for s in sorted(rows, key=rank_key)] == \
        ["aaaaa", "ddddd", "eeeee", "ccccc", "bbbbb", "zzzzz"]


# ---------------- coverage ----------------

def test_letter_coverage_counts_words_not_letters():
    counts = letter_coverage(["sassy", "essay"])
    assert counts["s"] == 2 and counts["a"] == 2 and counts["e"] == 1
    assert coverage_score("seats", counts) == 2 + 1 + 2  # s, e, a; t unseen


def test_coverage_pool_keeps_candidates_first():
    allowed = ["fhmpz", "qqqqq", "bills", "lists"]
    cands = ["pills", "mills"]
    pool = build_coverage_pool(cands, allowed, pool_size=2)
    assert pool[:2] == cands
    # 'bills' covers i, l, s (2 each); 'lists' covers l, i, s too
    assert pool[2:] == ["bills", "lists"]
    assert CoverageIndex(allowed).pool(cands, 2) == pool


def test_coverage_index_matches_plain_ranking(full_corpus):
    cands = list(full_corpus.answers[:300])
    index = CoverageIndex(full_corpus.allowed)
    assert index.pool(cands, 180) == build_coverage_pool(cands, full_corpus.allowed, 180)


def test_proof_options_by_context(ills_corpus):
    cfg = SolverConfig()
    cov = CoverageIndex(ills_corpus.allowed)
    assert proof_options(ILLS, 2, cov, cfg) == ILLS
    assert set(proof_options(ILLS, 3, cov, cfg)) == set(ILLS) | {"fhmpz"}
    tight = SolverConfig(proof_small_candidates=2, proof_large_pool_size=0)
    assert proof_options(ILLS, 3, cov, tight) == ILLS


# ---------------- forced-win prover ----------------

def test_can_force_win_base_cases(ills_corpus, tools):
    cache, cov = tools(ills_corpus)
    cfg = SolverConfig()
    kw = dict(memo={}, cache=cache, coverage=cov, config=cfg)
    assert can_force_win(["bills"], 1, context=ProofContext(), **kw) is True
    assert can_force_win([], 0, context=ProofContext(), **kw) is True
    assert can_force_win(ILLS[:2], 1, context=ProofContext(), **kw) is False
    assert can_force_win(ILLS[:2], 2, context=ProofContext(), **kw) is True
    # three lookalikes, candidates-only options at two turns: no split exists
    assert can_force_win(ILLS[:3], 2, context=ProofContext(), **kw) is False


def test_can_force_win_needs_probe_word(ills_corpus, ills_only_corpus, tools):
    cfg = SolverConfig()
    cache, cov = tools(ills_corpus)
    memo = {}
    assert can_force_win(ILLS, 3, memo=memo, context=ProofContext(), cache=cache,
                         coverage=cov, config=cfg) is True
    assert memo[(3, tuple(sorted(ILLS)))] is True

    cache, cov = tools(ills_only_corpus)
    assert can_force_win(ILLS, 3, memo={}, context=ProofContext(), cache=cache,
                         coverage=cov, config=cfg) is False


def test_node_budget_is_hard_cutoff(ills_corpus, tools):
    cache, cov = tools(ills_corpus)
    ctx = ProofContext(max_nodes=0)
    assert can_force_win(["bills"], 3, memo={}, context=ctx, cache=cache,
                         coverage=cov, config=SolverConfig()) is False
    assert ctx.exhausted

    # five singleton buckets need five nodes
    kw = dict(cache=cache, coverage=cov)
    assert is_safe_move(ILLS, "fhmpz", 2, memo={}, config=SolverConfig(), **kw) is True
    assert is_safe_move(ILLS, "fhmpz", 2, memo={}, config=SolverConfig(node_budget=4), **kw) is False
    assert is_safe_move(ILLS, "fhmpz", 2, memo={}, config=SolverConfig(node_budget=5), **kw) is True


def test_is_safe_move_turn_edges(ills_corpus, tools):
    cache, cov = tools(ills_corpus)
    kw = dict(memo={}, cache=cache, coverage=cov, config=SolverConfig())
    assert is_safe_move(["bills"], "bills", 1, **kw) is True
    assert is_safe_move(["bills"], "fills", 1, **kw) is False
    assert is_safe_move(ILLS[:2], "bills", 1, **kw) is False
    assert is_safe_move(ILLS, "fhmpz", 0, **kw) is False
    assert is_safe_move(ILLS[:2], "bills", 2, **kw) is True
    assert is_safe_move(ILLS, "bills", 2, **kw) is False
    # four lookalikes left with two turns: candidates can't split them
    assert is_safe_move(ILLS, "bills", 3, **kw) is False
    assert is_safe_move(ILLS, "bills", 4, **kw) is True


# ---------------- orchestrator ----------------

def test_suggest_no_candidates(ills_corpus):
    res = suggest_moves([], 3, corpus=ills_corpus)
    assert res.suggestions == [] and res.recommended is None and res.mode == MODE_HEURISTIC


def test_suggest_single_candidate(ills_corpus):
    res = suggest_moves(["mills"], 5, corpus=ills_corpus)
    assert res.mode == MODE_LATE_EXACT
    assert res.recommended.word == "mills" and res.recommended.safe is True
    assert res.suggestions == [res.recommended]
    assert res.to_dict()["recommended"]["expectedRemaining"] == 1.0


def test_suggest_prefers_safe_probe(ills_corpus):
    res = suggest_moves(ILLS, 2, corpus=ills_corpus)
    assert res.mode == MODE_LATE_EXACT
    top = res.suggestions[0]
    assert (top.word, top.expected_remaining, top.worst_bucket, top.safe) == ("fhmpz", 1.0, 1, True)
    assert not any(s.safe for s in res.suggestions if s.in_candidates)
    assert res.recommended is top
    # remaining order: all candidates tie, alphabetical
    assert [s.word for s in res.suggestions[1:]] == ILLS


def test_suggest_prefers_safe_candidate(small_corpus):
    res = suggest_moves(["crane", "trace"], 2, corpus=small_corpus)
    assert res.mode == MODE_LATE_EXACT
    assert res.recommended.word == "crane"
    assert res.recommended.safe and res.recommended.in_candidates


def test_suggest_heuristic_mode_recommends_candidate(ills_corpus):
    res = suggest_moves(ILLS, 5, corpus=ills_corpus)
    assert res.mode == MODE_HEURISTIC
    assert not any(s.safe for s in res.suggestions)
    assert res.suggestions[0].word == "fhmpz"
    assert res.recommended.word == "bills"


def test_suggest_limits_and_config(ills_corpus):
    cfg = SolverConfig(top_k=3, exact_max_turns=1)
    res = suggest_moves(ILLS, 2, corpus=ills_corpus, config=cfg)
    assert len(res.suggestions) == 3
    assert res.mode == MODE_HEURISTIC


def test_suggest_full_corpus_opening_terminates(full_corpus):
    res = suggest_moves(full_corpus.answers, 6, corpus=full_corpus)
    assert res.mode == MODE_HEURISTIC
    assert len(res.suggestions) == 40
    assert res.recommended is not None
    assert res.recommended.in_candidates
    exp = [s.expected_remaining for s in res.suggestions]
    assert exp == sorted(exp)


def test_solver_config_from_mapping():
    cfg = SolverConfig.from_mapping({"node_budget": "500", "top_k": 10})
    assert cfg.node_budget == 500 and cfg.top_k == 10 and cfg.eval_pool_size == 380
    with pytest.raises(ValueError):
        SolverConfig.from_mapping({"nodes": 1})
    with pytest.raises(ValueError):
        SolverConfig.from_mapping([1, 2])


def test_solver_config_load(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text('{"proof_top_k": 4}', encoding="utf-8")
    cfg = SolverConfig.load(p, node_budget=100, top_k=None)
    assert (cfg.proof_top_k, cfg.node_budget, cfg.top_k) == (4, 100, 40)


def test_registry():
    assert {"late_exact", "random_consistent"} <= set(get_solver_ids())
    with pytest.raises(ValueError):
        create_solver("nope")


# ---------------- threshold boundaries ----------------

@pytest.mark.parametrize("overrides, mode", [
    (dict(exact_max_candidates=5, exact_max_turns=2), MODE_LATE_EXACT),
    (dict(exact_max_candidates=4, exact_max_turns=2), MODE_HEURISTIC),
    (dict(exact_max_candidates=5, exact_max_turns=1), MODE_HEURISTIC),
])
def test_exact_mode_limits_are_inclusive(ills_corpus, overrides, mode):
    res = suggest_moves(ILLS, 2, corpus=ills_corpus, config=SolverConfig(**overrides))
    assert res.mode == mode
    assert any(s.safe for s in res.suggestions) is (mode == MODE_LATE_EXACT)


def test_full_pool_limit_is_inclusive(ills_corpus):
    # coverage pool of size 0 leaves only the candidates themselves
    at_limit = SolverConfig(full_pool_max_candidates=5, eval_pool_size=0)
    words = {s.word for s in suggest_moves(ILLS, 5, corpus=ills_corpus, config=at_limit).suggestions}
    assert words == set(ills_corpus.allowed)

    past_limit = SolverConfig(full_pool_max_candidates=4, eval_pool_size=0)
    words = {s.word for s in suggest_moves(ILLS, 5, corpus=ills_corpus, config=past_limit).suggestions}
    assert words == set(ILLS)


def test_proof_pool_size_switch_is_inclusive(ills_corpus):
    cov = CoverageIndex(ills_corpus.allowed)
    at_limit = SolverConfig(proof_small_candidates=5, proof_small_pool_size=10,
                            proof_large_pool_size=0)
    assert "fhmpz" in proof_options(ILLS, 3, cov, at_limit)
    past_limit = SolverConfig(proof_small_candidates=4, proof_small_pool_size=10,
                              proof_large_pool_size=0)
    assert proof_options(ILLS, 3, cov, past_limit) == ILLS


def test_proofs_only_run_on_top_k(ills_corpus):
    # at four turns every candidate is safe as well as the probe word
    everything = suggest_moves(ILLS, 4, corpus=ills_corpus)
    assert [s.safe for s in everything.suggestions] == [True] * 6
    assert everything.recommended.word == "bills"

    res = suggest_moves(ILLS, 4, corpus=ills_corpus, config=SolverConfig(proof_top_k=1))
    assert res.suggestions[0].word == "fhmpz" and res.suggestions[0].safe
    assert not any(s.safe for s in res.suggestions[1:])
    assert res.recommended.word == "fhmpz"
