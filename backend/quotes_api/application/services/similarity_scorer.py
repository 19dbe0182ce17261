"""Text similarity scoring between two quotes.

Score = author match + tag overlap + shared significant words, weighted so
the maximum is 1.0. Pure functions; no I/O.
"""

import re

from quotes_api.domain.entities import Quote

AUTHOR_MATCH_WEIGHT = 0.3
TAG_SIMILARITY_WEIGHT = 0.2
WORD_SIMILARITY_WEIGHT = 0.5

MIN_WORD_LENGTH = 2

_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def extract_significant_words(text: str) -> list[str]:
    """Lowercase, strip punctuation, split on whitespace, drop tokens of length <= 2."""
    cleaned = _NON_WORD_RE.sub(" ", text.lower())
    return [word for word in _WHITESPACE_RE.split(cleaned) if len(word) > MIN_WORD_LENGTH]


def _overlap_ratio(left: list[str], right: list[str]) -> float:
    """Share of ``left`` entries found in ``right``, over the larger list size."""
    right_set = set(right)
    common = sum(1 for item in left if item in right_set)
    return common / max(len(left), len(right), 1)


def author_score(a: Quote, b: Quote) -> float:
    return AUTHOR_MATCH_WEIGHT if a.author.lower() == b.author.lower() else 0.0


def tag_score(a: Quote, b: Quote) -> float:
    tags_a = [tag.lower() for tag in a.tags]
    tags_b = [tag.lower() for tag in b.tags]
    return _overlap_ratio(tags_a, tags_b) * TAG_SIMILARITY_WEIGHT


def word_score(a: Quote, b: Quote) -> float:
    words_a = extract_significant_words(a.content)
    words_b = extract_significant_words(b.content)
    return _overlap_ratio(words_a, words_b) * WORD_SIMILARITY_WEIGHT


def similarity(a: Quote, b: Quote) -> float:
    """Similarity of two quotes in [0, 1]."""
    return author_score(a, b) + tag_score(a, b) + word_score(a, b)


def similarity_label(score: float) -> str:
    """Coarse High / Medium / Low bucket used in comparison reports."""
    if score > 0.7:
        return "High"
    if score > 0.4:
        return "Medium"
    return "Low"
