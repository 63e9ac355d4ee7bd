"""Pydantic models for flashcard prompts, generation and duplicate checks.

Cards are plain front/back pairs. They are frozen because a generated card is
a value: callers store it elsewhere and this package never edits it in place.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Card(BaseModel):
    """Single question/answer flashcard."""

    model_config = ConfigDict(frozen=True)

    front: str
    back: str


class DeckChainEntry(BaseModel):
    """One deck on the path from the root deck down to the current one."""

    title: str
    topic: str = ""

    @model_validator(mode="after")
    def _default_topic(self) -> "DeckChainEntry":
        if not self.topic.strip():
            self.topic = self.title
        return self


class CardFormat(str, Enum):
    SIMPLE = "simple"
    COMPLEX = "complex"
    BASIC = "basic"
    DETAILED = "detailed"

    @property
    def is_detailed(self) -> bool:
        return self in (CardFormat.COMPLEX, CardFormat.DETAILED)


class SystemPromptParams(BaseModel):
    """Everything the prompt composer needs for one generation request."""

    main_topic: str
    subtopic: str
    deck_chain: list[str] = Field(default_factory=list)
    deck_topics: list[str] = Field(default_factory=list)
    full_path: str = ""
    existing_cards: list[Card] = Field(default_factory=list)
    format: CardFormat = CardFormat.SIMPLE

    @classmethod
    def from_chain(
        cls,
        entries: Iterable[DeckChainEntry],
        *,
        main_topic: Optional[str] = None,
        subtopic: Optional[str] = None,
        existing_cards: Iterable[Card] = (),
        format: CardFormat = CardFormat.SIMPLE,
    ) -> "SystemPromptParams":
        """Build params from deck chain entries (root first)."""
        from gencards.modules.flashcards.context import (
            build_full_path,
            chain_titles,
            chain_topics,
        )

        entries = list(entries)
        topics = chain_topics(entries)
        return cls(
            main_topic=main_topic or (topics[0] if topics else subtopic or ""),
            subtopic=subtopic or (topics[-1] if topics else main_topic or ""),
            deck_chain=chain_titles(entries),
            deck_topics=topics,
            full_path=build_full_path(entries),
            existing_cards=list(existing_cards),
            format=format,
        )

    def with_existing_cards(self, cards: Iterable[Card]) -> "SystemPromptParams":
        return self.model_copy(update={"existing_cards": list(cards)})


class DuplicateVerdict(BaseModel):
    """Outcome of comparing one candidate card against a deck."""

    is_duplicate: bool
    similar_card: Optional[Card] = None
    similarity: Optional[float] = None


class FlashcardsResponse(BaseModel):
    """Response shape the LLM is asked to return."""

    flashcards: list[Card] = Field(default_factory=list)


class RejectedCard(BaseModel):
    card: Card
    verdict: DuplicateVerdict


class GenerationResult(BaseModel):
    """Cards accepted for a deck after duplicate filtering."""

    prompt: str
    accepted: list[Card] = Field(default_factory=list)
    rejected: list[RejectedCard] = Field(default_factory=list)
    rounds: int = 0
