"""Tests for subject classification and templates."""

import pytest

from gencards.modules.flashcards.subjects import (
    SUBJECT_KEYWORDS,
    SUBJECT_TEMPLATES,
    SubjectCategory,
    detect_subject_type,
    get_subject_template,
)


@pytest.mark.parametrize(
    ("topic", "expected"),
    [
        ("Korean verbs", SubjectCategory.LANGUAGE),
        ("ORGANIC CHEMISTRY", SubjectCategory.SCIENCE),
        ("Linear Algebra", SubjectCategory.MATHEMATICS),
        ("Roman Empire", SubjectCategory.HISTORY),
        ("Dog breeds", SubjectCategory.GENERAL),
        ("일상 말하기", SubjectCategory.LANGUAGE),
        ("日本語の単語", SubjectCategory.LANGUAGE),
    ],
)
def test_detect_subject_type(topic: str, expected: SubjectCategory) -> None:
    assert detect_subject_type(topic) is expected


def test_language_wins_over_science() -> None:
    """Categories are checked in declaration order."""
    assert detect_subject_type("Korean chemistry") is SubjectCategory.LANGUAGE
    assert detect_subject_type("chemistry equation") is SubjectCategory.SCIENCE
    assert detect_subject_type("number of the century") is SubjectCategory.MATHEMATICS


def test_substring_matching_not_word_based() -> None:
    """'software' contains 'war' and lands in history."""
    assert detect_subject_type("software") is SubjectCategory.HISTORY


@pytest.mark.parametrize("topic", ["", "   ", "🙂", "Ελληνικά", "x" * 1000])
def test_detect_subject_type_is_total(topic: str) -> None:
    result = detect_subject_type(topic)
    assert result in set(SubjectCategory)
    assert detect_subject_type(topic) is result


def test_every_category_has_template() -> None:
    assert set(SUBJECT_TEMPLATES) == set(SubjectCategory)
    assert SubjectCategory.GENERAL not in SUBJECT_KEYWORDS
    assert list(SUBJECT_KEYWORDS) == [
        SubjectCategory.LANGUAGE,
        SubjectCategory.SCIENCE,
        SubjectCategory.MATHEMATICS,
        SubjectCategory.HISTORY,
    ]


def test_templates_are_read_only() -> None:
    with pytest.raises(TypeError):
        SUBJECT_TEMPLATES[SubjectCategory.GENERAL] = None  # type: ignore[index]
    template = get_subject_template("physics")
    assert template.avoid == "NO general definitions"
    with pytest.raises(AttributeError):
        template.avoid = "anything"  # type: ignore[misc]
