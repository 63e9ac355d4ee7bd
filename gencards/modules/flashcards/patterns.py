"""Summaries of a deck's existing cards for the "generate unique content" block."""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, Sequence

from gencards.modules.flashcards.duplicates import HANGUL_RE, KOREAN_SUFFIX_RE
from gencards.modules.flashcards.models.flashcards import Card

HANGUL_WORD_RE = re.compile(r"[가-힣]+")
WORD_RE = re.compile(r"\b\w+\b")

FULL_EXAMPLES_LIMIT = 3
SMALL_DECK_SIZE = 5
PATTERN_LIMIT = 5
# Threshold quoted to the model; stricter checks happen in duplicates.py
PROMPT_SIMILARITY_PERCENT = 80


def extract_common_patterns(strings: Iterable[str], regex: re.Pattern[str]) -> list[str]:
    """Unique regex matches across ``strings`` in first-seen order."""
    seen: dict[str, None] = {}
    for s in strings:
        for m in regex.finditer(s):
            seen.setdefault(m.group(0), None)
    return list(seen)


def analyze_card_patterns(cards: Sequence[Card]) -> str:
    if len(cards) <= SMALL_DECK_SIZE:
        return "\n".join(f"• Similar to: {card.front}" for card in cards)

    fronts = [card.front for card in cards]
    if any(HANGUL_RE.search(f) for f in fronts):
        endings = extract_common_patterns(fronts, KOREAN_SUFFIX_RE)
        stems = extract_common_patterns(fronts, HANGUL_WORD_RE)
        return (
            f"• Common endings: {', '.join(endings[:PATTERN_LIMIT])}\n"
            f"• Common stems: {', '.join(stems[:PATTERN_LIMIT])}\n"
            f"• Total unique patterns: {len(stems)}"
        )

    words = WORD_RE.findall(" ".join(fronts))
    counts = Counter(words)
    repeated = [w for w in dict.fromkeys(words) if counts[w] > 1][:PATTERN_LIMIT]
    return (
        f"• Common elements: {', '.join(repeated)}\n"
        f"• Total cards: {len(cards)}\n"
        "• Generate content different from these patterns"
    )


def build_existing_cards_warning(cards: Sequence[Card]) -> str:
    """Warning block listing a few cards verbatim plus the patterns to avoid."""
    if not cards:
        return ""

    full_examples = "\n".join(
        f'• "{card.front}" → "{card.back}"' for card in cards[:FULL_EXAMPLES_LIMIT]
    )
    patterns = analyze_card_patterns(cards)

    return f"""
⚠️ IMPORTANT - GENERATE UNIQUE CONTENT ({len(cards)} existing cards):

Format examples:
{full_examples}

Patterns to avoid:
{patterns}

STRICT UNIQUENESS REQUIREMENTS:
• No exact matches with existing cards
• No similar variations ({PROMPT_SIMILARITY_PERCENT}% similarity threshold)
• For language cards: No same word stems with different endings
• For math: No equivalent expressions (e.g., 2+3 vs 3+2)
• For science: No synonymous terms

Any duplicates or similar content will be rejected."""
