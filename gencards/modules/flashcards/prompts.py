"""System prompt composition for deck-aware flashcard generation.

The prompt is assembled from fixed sections, in this order: header, deck
hierarchy, category requirements, existing-card warning, subject template,
critical requirements, response shape. Empty sections are left blank rather
than removed so the layout stays stable for the model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from gencards.core.logging import get_logger
from gencards.modules.flashcards.context import build_contextual_constraints
from gencards.modules.flashcards.models.flashcards import SystemPromptParams
from gencards.modules.flashcards.patterns import build_existing_cards_warning
from gencards.modules.flashcards.subjects import SUBJECT_TEMPLATES, detect_subject_type

logger = get_logger(__name__)

RESPONSE_FORMAT = '{"flashcards":[{"front":"","back":""}]}'


@dataclass(frozen=True)
class ConstraintRule:
    """Bullets added when ``applies`` holds; rules stack, they never replace."""

    name: str
    applies: Callable[[SystemPromptParams], bool]
    bullets: tuple[str, ...]


def _korean(p: SystemPromptParams) -> bool:
    return "Korean" in p.deck_topics


def _korean_food(p: SystemPromptParams) -> bool:
    return _korean(p) and "Food" in p.deck_topics


CATEGORY_RULES: tuple[ConstraintRule, ...] = (
    ConstraintRule(
        name="korean",
        applies=_korean,
        bullets=(
            "All cards MUST contain Korean text",
            "Include both Hangul and romanization",
            "Focus on practical usage examples",
        ),
    ),
    ConstraintRule(
        name="korean-food",
        applies=_korean_food,
        bullets=(
            "Content MUST be about Korean food",
            "Include Korean food items, dishes, or eating-related terms",
            "NO non-food vocabulary or general Korean terms",
            "Each term must be commonly used in food/dining contexts",
        ),
    ),
    ConstraintRule(
        name="korean-food-slang",
        applies=lambda p: _korean_food(p) and "slang" in p.subtopic.lower(),
        bullets=(
            "Only include Korean food-related slang/casual expressions",
            "Terms must be used specifically in eating/dining situations",
            "Each expression must relate to food, eating, or dining",
            "Include usage context in parentheses",
            "NO general Korean slang unrelated to food",
        ),
    ),
    ConstraintRule(
        name="korean-nouns",
        applies=lambda p: _korean(p) and "Nouns" in p.deck_topics,
        bullets=(
            "All terms must be Korean nouns",
            "Include particle usage examples",
            "NO verbs, adjectives, or other parts of speech",
        ),
    ),
)


def build_category_constraints(params: SystemPromptParams) -> list[str]:
    out: list[str] = []
    applied = []
    for rule in CATEGORY_RULES:
        if rule.applies(params):
            applied.append(rule.name)
            out.extend(f"• {b}" for b in rule.bullets)
    if applied:
        logger.debug("Category rules applied: %s", ", ".join(applied))
    return out


def _category_section(constraints: list[str]) -> str:
    if not constraints:
        return ""
    return "Category-Specific Requirements:\n" + "\n".join(constraints) + "\n"


def get_system_prompt(params: SystemPromptParams) -> str:
    template = SUBJECT_TEMPLATES[detect_subject_type(params.main_topic)]
    context_constraints = build_contextual_constraints(
        params.deck_chain, params.deck_topics, params.full_path
    )
    existing_cards_warning = build_existing_cards_warning(params.existing_cards)
    category_section = _category_section(build_category_constraints(params))
    template_rules = "\n".join(f"• {rule}" for rule in template.context_rules)
    current = params.deck_chain[-1] if params.deck_chain else params.subtopic
    style = (
        "Include detailed context and usage examples"
        if params.format.is_detailed
        else "Keep responses focused and practical"
    )

    return f"""Expert {params.main_topic} Flashcard Generator
Topic: {params.subtopic}
Full Context Path: {params.full_path}

{context_constraints}

{category_section}

{existing_cards_warning}

Format Requirements:
{template.format}
Example: {template.example}
{template.avoid}
{template_rules}

Critical Requirements:
• EVERY card must follow the complete context hierarchy
• Content must be specific to {current}
• {style}
• Generate unique, context-appropriate content
• Follow ALL category-specific requirements
• NO generic or out-of-context content

Response format: {RESPONSE_FORMAT}"""
