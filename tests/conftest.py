import pytest
from wordleproof.datasets import WordCorpus, load_corpus
from wordleproof.engine import FeedbackCache
from wordleproof.solvers.coverage import CoverageIndex

ILLS = ["bills", "fills", "hills", "mills", "pills"]


@pytest.fixture
def small_corpus():
    answers = ["crane", "raise", "stare", "trace", "cared", "adieu", "alone"]
    return WordCorpus.from_lists(answers, answers + ["slate", "salet", "roate"])


@pytest.fixture
def ills_corpus():
    # Five candidates that only differ in the first letter; "fhmpz" tells them
    # apart in one guess, no candidate can.
    return WordCorpus.from_lists(ILLS, ["fhmpz"])


@pytest.fixture
def ills_only_corpus():
    return WordCorpus.from_lists(ILLS, [])


@pytest.fixture(scope="session")
def full_corpus():
    return load_corpus()


@pytest.fixture
def tools():
    """(cache, coverage) factory for a corpus."""
    def make(corpus):
        return FeedbackCache(corpus), CoverageIndex(corpus.allowed)
    return make
