"""Deck hierarchy rendering for generation prompts."""

from __future__ import annotations

from typing import Sequence

from gencards.modules.flashcards.models.flashcards import DeckChainEntry

PATH_SEPARATOR = " > "


def chain_titles(entries: Sequence[DeckChainEntry]) -> list[str]:
    return [e.title for e in entries]


def chain_topics(entries: Sequence[DeckChainEntry]) -> list[str]:
    return [e.topic or e.title for e in entries]


def build_full_path(entries: Sequence[DeckChainEntry]) -> str:
    """Human readable breadcrumb, root first."""
    return PATH_SEPARATOR.join(chain_titles(entries))


def _level_label(index: int, total: int) -> tuple[str, str]:
    if index == 0:
        return "Root", "Defines overall domain"
    if index == total - 1:
        return "Current", "Specific focus"
    return f"Level {index + 1}", "Refines context"


def build_contextual_constraints(
    deck_chain: Sequence[str],
    deck_topics: Sequence[str],
    full_path: str,
) -> str:
    """Render the deck hierarchy and the rules that bind cards to it.

    Returns an empty string when there is no hierarchy, which callers treat as
    a top-level generation request.
    """
    if not deck_chain:
        return ""

    total = len(deck_chain)
    levels = []
    for i, title in enumerate(deck_chain):
        topic = deck_topics[i] if i < len(deck_topics) and deck_topics[i] else title
        prefix, role = _level_label(i, total)
        levels.append(f"{prefix}: {topic} ({title}) - {role}")

    current_context = deck_chain[-1]
    parent_context = deck_chain[-2] if total > 1 else None

    rules = [f"• Every card MUST contain content specifically for: {current_context}"]
    if parent_context:
        rules.append(f"• Content must be valid within parent category: {parent_context}")
    rules.extend(
        [
            f"• Follow complete hierarchy: {full_path}",
            "• NO content from outside this hierarchy",
            "• NO generic content - everything must be specific to this context",
            "• Each card must demonstrate clear relationship to ALL parent categories",
        ]
    )

    return (
        "Context Hierarchy:\n"
        + "\n".join(levels)
        + "\n\nStrict Context Rules:\n"
        + "\n".join(rules)
    )
