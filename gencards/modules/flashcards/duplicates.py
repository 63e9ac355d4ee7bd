"""Near-duplicate detection for generated flashcards.

A candidate card is compared by its front against every card already in the
deck. The checks run cheapest first:

1. exact match of the normalized fronts (similarity 1.0);
2. Levenshtein similarity above ``SIMILARITY_THRESHOLD``, skipped when one
   front is more than twice as long as the other;
3. for Korean fronts, equality of the stems left after stripping common
   verb endings and particles (similarity ``KOREAN_STEM_SIMILARITY``).

The Korean suffix list is a heuristic tuned on vocabulary decks, not a
morphological analyzer, and it misfires on words outside that set.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from gencards.core.logging import get_logger
from gencards.modules.flashcards.models.flashcards import (
    Card,
    DuplicateVerdict,
    RejectedCard,
)

logger = get_logger(__name__)

SIMILARITY_THRESHOLD = 0.9
KOREAN_STEM_SIMILARITY = 0.95
MIN_COMPARABLE_LENGTH = 2

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")
HANGUL_RE = re.compile(r"[가-힣]")
KOREAN_SUFFIX_RE = re.compile(r"(?:[았었겠]어요?|[ㄴ는]다|기|[을를이가])\Z")


def normalize_text(text: str) -> str:
    """Lower-case, drop punctuation and collapse whitespace."""
    text = _PUNCTUATION_RE.sub("", text.lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def contains_hangul(text: str) -> bool:
    return HANGUL_RE.search(text) is not None


def korean_stem(text: str) -> str:
    return KOREAN_SUFFIX_RE.sub("", text)


def _length_ratio_exceeded(len1: int, len2: int) -> bool:
    return max(len1, len2) > 2 * min(len1, len2)


def levenshtein_distance(s1: str, s2: str) -> int:
    m, n = len(s1), len(s2)
    d = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        d[i][0] = i
    for j in range(n + 1):
        d[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            d[i][j] = min(
                d[i - 1][j] + 1,
                d[i][j - 1] + 1,
                d[i - 1][j - 1] + cost,
            )
    return d[m][n]


def calculate_similarity(str1: str, str2: str) -> float:
    """Similarity in [0, 1] between two fronts; 0 for very different lengths."""
    s1 = normalize_text(str1)
    s2 = normalize_text(str2)
    longest = max(len(s1), len(s2))
    if longest == 0:
        return 1.0
    if _length_ratio_exceeded(len(s1), len(s2)):
        return 0.0
    return 1 - levenshtein_distance(s1, s2) / longest


def _korean_stem_match(new_front: str, existing_front: str) -> bool:
    if not (contains_hangul(new_front) and contains_hangul(existing_front)):
        return False
    new_stem = korean_stem(new_front)
    existing_stem = korean_stem(existing_front)
    return len(new_stem) > 1 and len(existing_stem) > 1 and new_stem == existing_stem


def is_duplicate(new_card: Card, existing_cards: Iterable[Card]) -> DuplicateVerdict:
    """Check ``new_card`` against ``existing_cards``; the first match wins."""
    normalized_new = normalize_text(new_card.front)
    if len(normalized_new) < MIN_COMPARABLE_LENGTH:
        return DuplicateVerdict(is_duplicate=False)

    for existing in existing_cards:
        normalized_existing = normalize_text(existing.front)
        if len(normalized_existing) < MIN_COMPARABLE_LENGTH:
            continue

        if normalized_new == normalized_existing:
            return DuplicateVerdict(
                is_duplicate=True, similar_card=existing, similarity=1.0
            )

        if _length_ratio_exceeded(len(normalized_new), len(normalized_existing)):
            continue

        similarity = calculate_similarity(normalized_new, normalized_existing)
        if similarity > SIMILARITY_THRESHOLD:
            return DuplicateVerdict(
                is_duplicate=True, similar_card=existing, similarity=similarity
            )

        if _korean_stem_match(new_card.front, existing.front):
            return DuplicateVerdict(
                is_duplicate=True,
                similar_card=existing,
                similarity=KOREAN_STEM_SIMILARITY,
            )

    return DuplicateVerdict(is_duplicate=False)


def filter_duplicates(
    candidates: Iterable[Card], existing_cards: Sequence[Card]
) -> tuple[list[Card], list[RejectedCard]]:
    """Split a generated batch into accepted cards and rejected duplicates.

    Candidates are also compared with the ones accepted earlier in the same
    batch.
    """
    known = list(existing_cards)
    accepted: list[Card] = []
    rejected: list[RejectedCard] = []
    for card in candidates:
        verdict = is_duplicate(card, known)
        if verdict.is_duplicate:
            logger.debug(
                "Rejected duplicate %r (similar to %r, similarity=%.2f)",
                card.front,
                verdict.similar_card.front if verdict.similar_card else None,
                verdict.similarity or 0.0,
            )
            rejected.append(RejectedCard(card=card, verdict=verdict))
            continue
        accepted.append(card)
        known.append(card)
    return accepted, rejected
