from .corpus import WordCorpus, load_corpus, normalize_words, WORD_LENGTH
from .validator import validate_wordlists, pretty_summary
from .io import read_lines, write_lines, file_sha256

__all__ = ["WordCorpus", "load_corpus", "normalize_words", "WORD_LENGTH",
           "validate_wordlists", "pretty_summary", "read_lines", "write_lines", "file_sha256"]
