"""Tests for near-duplicate detection."""

import pytest

from gencards.modules.flashcards.duplicates import (
    KOREAN_STEM_SIMILARITY,
    calculate_similarity,
    filter_duplicates,
    is_duplicate,
    korean_stem,
    levenshtein_distance,
    normalize_text,
)
from gencards.modules.flashcards.models.flashcards import Card


def card(front: str, back: str = "x") -> Card:
    return Card(front=front, back=back)


def test_normalize_text() -> None:
    assert normalize_text("  Hello,   World!\n") == "hello world"
    assert normalize_text("What's 2+2?") == "whats 22"
    assert normalize_text("먹었어요!") == "먹었어요"


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [("kitten", "sitting", 3), ("", "abc", 3), ("same", "same", 0), ("flaw", "lawn", 2)],
)
def test_levenshtein_distance(a: str, b: str, expected: int) -> None:
    assert levenshtein_distance(a, b) == expected


def test_exact_match_ignores_case_and_punctuation() -> None:
    existing = card("hello world", "y")
    verdict = is_duplicate(card("Hello World!"), [existing])

    assert verdict.is_duplicate is True
    assert verdict.similarity == 1.0
    assert verdict.similar_card == existing


def test_short_candidate_is_never_duplicate() -> None:
    verdict = is_duplicate(card("a"), [card("a", "y")])

    assert verdict.is_duplicate is False
    assert verdict.similar_card is None
    assert verdict.similarity is None


def test_short_existing_cards_are_skipped() -> None:
    assert is_duplicate(card("ab"), [card("?!"), card("b")]).is_duplicate is False


def test_near_miss_above_threshold() -> None:
    verdict = is_duplicate(card("The quick brown fox"), [card("The quick brown fix", "y")])

    assert verdict.is_duplicate is True
    assert 0.9 < verdict.similarity < 1.0


def test_below_threshold_is_not_duplicate() -> None:
    assert is_duplicate(card("capital of France"), [card("capital of Spain")]).is_duplicate is False


def test_length_ratio_prefilter() -> None:
    long_front = "abc" + "d" * 17
    assert len(long_front) == 20

    assert is_duplicate(card("abc"), [card(long_front)]).is_duplicate is False
    assert calculate_similarity("abc", long_front) == 0.0


def test_korean_stem_match() -> None:
    existing = card("만들었어", "made")
    verdict = is_duplicate(card("만들었어요"), [existing])

    # plain similarity is 0.8, below the threshold
    assert calculate_similarity("만들었어요", "만들었어") == pytest.approx(0.8)
    assert verdict.is_duplicate is True
    assert verdict.similarity == KOREAN_STEM_SIMILARITY
    assert verdict.similar_card == existing


def test_korean_single_syllable_stem_is_ignored() -> None:
    """먹었어요 strips to 먹, which is too short to compare."""
    assert korean_stem("먹었어요") == "먹"
    assert is_duplicate(card("먹었어요"), [card("먹다")]).is_duplicate is False


@pytest.mark.parametrize(
    ("word", "stem"),
    [
        ("공부를", "공부"),
        ("만들기", "만들"),
        ("만들었어", "만들"),
        ("갔겠어요", "갔"),
        ("학생이", "학생"),
        ("간다", "간다"),
    ],
)
def test_korean_stem(word: str, stem: str) -> None:
    assert korean_stem(word) == stem


def test_first_match_wins() -> None:
    first = card("hello world", "first")
    second = card("hello world", "second")

    assert is_duplicate(card("Hello world"), [first, second]).similar_card == first


def test_empty_corpus() -> None:
    assert is_duplicate(card("anything"), []).is_duplicate is False


def test_is_duplicate_is_deterministic() -> None:
    corpus = [card("The quick brown fix")]
    assert is_duplicate(card("The quick brown fox"), corpus) == is_duplicate(
        card("The quick brown fox"), corpus
    )


def test_filter_duplicates_checks_within_batch() -> None:
    existing = [card("What is the capital of France?")]
    candidates = [
        card("what is the capital of france"),
        card("Largest planet in the solar system"),
        card("Largest planet in the solar system!"),
        card("Chemical symbol for gold"),
    ]

    accepted, rejected = filter_duplicates(candidates, existing)

    assert [c.front for c in accepted] == [
        "Largest planet in the solar system",
        "Chemical symbol for gold",
    ]
    assert [r.card.front for r in rejected] == [
        "what is the capital of france",
        "Largest planet in the solar system!",
    ]
    assert rejected[1].verdict.similar_card == candidates[1]
    assert len(existing) == 1


def test_similarity_exactly_at_threshold_is_not_duplicate() -> None:
    """The cutoff is strict: 0.9 itself does not count."""
    assert calculate_similarity("abcdefghij", "abcdefghix") == 0.9
    assert is_duplicate(card("abcdefghij"), [card("abcdefghix")]).is_duplicate is False


def test_stem_check_needs_hangul_on_both_sides() -> None:
    assert is_duplicate(card("공부를"), [card("gongbu")]).is_duplicate is False
    assert is_duplicate(card("gongbu"), [card("공부를")]).is_duplicate is False


def test_korean_suffix_anchors_at_true_end() -> None:
    """A trailing newline keeps the ending in place."""
    assert korean_stem("공부를\n") == "공부를\n"
    assert is_duplicate(card("공부를\n"), [card("공부가\n")]).is_duplicate is False
    assert is_duplicate(card("공부를"), [card("공부가")]).similarity == KOREAN_STEM_SIMILARITY
