"""Flashcards module exports."""

from .models.flashcards import Card, DeckChainEntry, DuplicateVerdict, SystemPromptParams
from .subjects import SubjectCategory, detect_subject_type
from .context import build_contextual_constraints
from .duplicates import filter_duplicates, is_duplicate
from .prompts import get_system_prompt
from .main import DeckFlashcardsGenerator

__all__ = [
    "Card",
    "DeckChainEntry",
    "DuplicateVerdict",
    "SystemPromptParams",
    "SubjectCategory",
    "detect_subject_type",
    "build_contextual_constraints",
    "filter_duplicates",
    "is_duplicate",
    "get_system_prompt",
    "DeckFlashcardsGenerator",
]
