"""Pytest configuration and fixtures for the test suite."""

from __future__ import annotations

import pytest

from gencards.modules.flashcards.models.flashcards import (
    Card,
    DeckChainEntry,
    SystemPromptParams,
)


class FakeGenerator:
    """Returns canned batches in order, recording each prompt it sees."""

    def __init__(self, batches: list[list[Card]]) -> None:
        self._batches = batches
        self.prompts: list[str] = []
        self.counts: list[int] = []

    async def __call__(self, prompt: str, count: int) -> list[Card]:
        self.prompts.append(prompt)
        self.counts.append(count)
        if len(self.prompts) > len(self._batches):
            return []
        return self._batches[len(self.prompts) - 1]


@pytest.fixture
def korean_chain() -> list[DeckChainEntry]:
    """Provide a Korean > Food > Slang deck chain."""
    return [
        DeckChainEntry(title="Korean", topic="Korean"),
        DeckChainEntry(title="Food", topic="Food"),
        DeckChainEntry(title="Slang", topic="Slang"),
    ]


@pytest.fixture
def existing_cards() -> list[Card]:
    """Provide two existing cards in a deck."""
    return [
        Card(front="배고파", back="I'm hungry (baegopa)"),
        Card(front="맛있다", back="delicious (masitda)"),
    ]


@pytest.fixture
def korean_params(korean_chain, existing_cards) -> SystemPromptParams:
    """Provide prompt params for the Korean food slang deck."""
    return SystemPromptParams.from_chain(
        korean_chain,
        main_topic="Korean",
        subtopic="Food slang",
        existing_cards=existing_cards,
    )


@pytest.fixture
def fake_generator_factory():
    """Build a FakeGenerator from a list of canned batches."""
    return FakeGenerator
