"""Unit tests for the quote similarity scorer."""

import pytest

from quotes_api.application.services.similarity_scorer import (
    extract_significant_words,
    similarity,
    similarity_label,
    tag_score,
    word_score,
)
from conftest import make_quote


def test_extract_significant_words_drops_punctuation_and_short_tokens():
    words = extract_significant_words("To be, or NOT to be: that is the question!")
    assert words == ["not", "that", "the", "question"]


def test_identical_quotes_score_one():
    quote = make_quote("q1", "Stay hungry, stay foolish", "Steve Jobs", ["life"])
    assert similarity(quote, quote) == pytest.approx(1.0)


def test_unrelated_quotes_score_zero():
    a = make_quote("a", "Imagination is everything", "Einstein", ["wisdom"])
    b = make_quote("b", "Brevity wit soul", "Shakespeare", ["humor"])
    assert similarity(a, b) == 0.0


def test_author_match_is_case_insensitive():
    a = make_quote("a", "alpha beta", "Mark Twain")
    b = make_quote("b", "gamma delta", "mark twain")
    assert similarity(a, b) == pytest.approx(0.3)


def test_tag_overlap_uses_larger_tag_list_as_denominator():
    a = make_quote("a", tags=["life", "love"])
    b = make_quote("b", tags=["LIFE", "wisdom", "truth", "hope"])
    assert tag_score(a, b) == pytest.approx(1 / 4 * 0.2)


def test_quotes_without_tags_get_no_tag_score():
    assert tag_score(make_quote("a"), make_quote("b")) == 0.0


def test_word_overlap_is_weighted_by_half():
    a = make_quote("a", "courage makes heroes")
    b = make_quote("b", "courage builds character")
    assert word_score(a, b) == pytest.approx(1 / 3 * 0.5)


@pytest.mark.parametrize(
    "score, label",
    [(0.71, "High"), (0.7, "Medium"), (0.41, "Medium"), (0.4, "Low"), (0.0, "Low")],
)
def test_similarity_label_thresholds(score: float, label: str):
    assert similarity_label(score) == label
