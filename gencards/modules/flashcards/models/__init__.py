from .flashcards import (
    Card,
    CardFormat,
    DeckChainEntry,
    DuplicateVerdict,
    FlashcardsResponse,
    GenerationResult,
    RejectedCard,
    SystemPromptParams,
)

__all__ = [
    "Card",
    "CardFormat",
    "DeckChainEntry",
    "DuplicateVerdict",
    "FlashcardsResponse",
    "GenerationResult",
    "RejectedCard",
    "SystemPromptParams",
]
