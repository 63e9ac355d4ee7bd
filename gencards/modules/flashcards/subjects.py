"""Subject classification and per-subject card templates.

``detect_subject_type`` maps a free-text topic onto one of five fixed
categories by raw substring containment. Keywords are checked in the order of
``SUBJECT_KEYWORDS`` so a topic such as "Korean chemistry" resolves to
``language``. Containment is used instead of word tokenization because some
keywords are Korean, Japanese or Chinese tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class SubjectCategory(str, Enum):
    LANGUAGE = "language"
    SCIENCE = "science"
    MATHEMATICS = "mathematics"
    HISTORY = "history"
    GENERAL = "general"


@dataclass(frozen=True)
class SubjectTemplate:
    format: str
    example: str
    avoid: str
    context_rules: tuple[str, ...] = ()


SUBJECT_TEMPLATES: Mapping[SubjectCategory, SubjectTemplate] = MappingProxyType(
    {
        SubjectCategory.LANGUAGE: SubjectTemplate(
            format="Front: Word/phrase\nBack: Translation (pronunciation)",
            example='{"front": "먹었어", "back": "ate (meogeosseo) - past tense of 먹다 (to eat)"}',
            avoid="NO grammar explanations",
            context_rules=(
                "Must follow language-specific grammar rules",
                "Must match the specified tense/form if given",
                "Include pronunciation in parentheses",
            ),
        ),
        SubjectCategory.SCIENCE: SubjectTemplate(
            format="Front: Instance\nBack: Key properties",
            example='{"front": "Fe", "back": "Iron - Used in hemoglobin"}',
            avoid="NO general definitions",
            context_rules=(
                "Must be a specific example",
                "Include practical application",
            ),
        ),
        SubjectCategory.MATHEMATICS: SubjectTemplate(
            format="Front: Problem\nBack: Solution",
            example='{"front": "2x + 5 = 15", "back": "x = 5"}',
            avoid="NO concept explanations",
            context_rules=(
                "Must show complete solution",
                "Follow mathematical notation",
            ),
        ),
        SubjectCategory.HISTORY: SubjectTemplate(
            format="Front: Event\nBack: Significance",
            example='{"front": "Battle of Hastings 1066", "back": "Norman Conquest"}',
            avoid="NO general descriptions",
            context_rules=(
                "Include specific dates",
                "Focus on historical impact",
            ),
        ),
        SubjectCategory.GENERAL: SubjectTemplate(
            format="Front: Example\nBack: Details",
            example='{"front": "German Shepherd", "back": "Working dog breed, loyal, police work"}',
            avoid="NO category descriptions",
            context_rules=(
                "Must be specific instances",
                "Include distinguishing features",
            ),
        ),
    }
)


# Priority order: first category with a hit wins
SUBJECT_KEYWORDS: Mapping[SubjectCategory, tuple[str, ...]] = MappingProxyType(
    {
        SubjectCategory.LANGUAGE: (
            "language",
            "italian",
            "korean",
            "spanish",
            "english",
            "japanese",
            "french",
            "german",
            "vocab",
            "phrase",
            "grammar",
            "말하기",
            "単語",
            "词",
        ),
        SubjectCategory.SCIENCE: (
            "physics",
            "chemistry",
            "biology",
            "science",
            "element",
            "compound",
            "species",
            "atom",
            "molecule",
            "cell",
        ),
        SubjectCategory.MATHEMATICS: (
            "math",
            "algebra",
            "calculus",
            "geometry",
            "equation",
            "number",
            "theorem",
            "formula",
            "function",
        ),
        SubjectCategory.HISTORY: (
            "history",
            "civilization",
            "empire",
            "dynasty",
            "war",
            "period",
            "century",
            "era",
            "revolution",
            "movement",
        ),
    }
)


def detect_subject_type(topic: str) -> SubjectCategory:
    """Return the subject category for ``topic`` (``general`` if nothing matches)."""
    topic_lower = topic.lower()
    for subject, keywords in SUBJECT_KEYWORDS.items():
        if any(k in topic_lower for k in keywords):
            return subject
    return SubjectCategory.GENERAL


def get_subject_template(topic: str) -> SubjectTemplate:
    return SUBJECT_TEMPLATES[detect_subject_type(topic)]
