"""Flashcards service class.

Provides a high-level class that builds the deck-aware prompt, asks the model
for cards, drops duplicates of the deck's existing cards and asks again while
the batch is short. Usable from API handlers, background jobs or the CLI.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from gencards.core.config import settings
from gencards.core.logging import get_logger
from gencards.modules.flashcards.duplicates import filter_duplicates
from gencards.modules.flashcards.generator import generate_flashcards
from gencards.modules.flashcards.models.flashcards import (
    Card,
    GenerationResult,
    RejectedCard,
    SystemPromptParams,
)
from gencards.modules.flashcards.prompts import get_system_prompt

logger = get_logger(__name__)

GenerateFn = Callable[[str, int], Awaitable[list[Card]]]


class DeckFlashcardsGenerator:
    """Generates cards for one deck and filters them against its contents."""

    def __init__(
        self,
        *,
        count: Optional[int] = None,
        max_rounds: Optional[int] = None,
        generate_fn: Optional[GenerateFn] = None,
    ) -> None:
        self.count = int(settings.generation.count if count is None else count)
        self.max_rounds = int(
            settings.generation.max_rounds if max_rounds is None else max_rounds
        )
        if self.count < 1 or self.max_rounds < 1:
            raise ValueError("count and max_rounds must be at least 1")
        self.generate_fn: GenerateFn = generate_fn or generate_flashcards

    @staticmethod
    def build_prompt(params: SystemPromptParams) -> str:
        return get_system_prompt(params)

    async def generate(self, params: SystemPromptParams) -> GenerationResult:
        existing = list(params.existing_cards)
        log_extra = {"deck": params.full_path or params.subtopic}
        accepted: list[Card] = []
        rejected: list[RejectedCard] = []
        first_prompt = ""
        rounds = 0

        while len(accepted) < self.count and rounds < self.max_rounds:
            rounds += 1
            prompt = self.build_prompt(params.with_existing_cards(existing + accepted))
            if not first_prompt:
                first_prompt = prompt

            wanted = self.count - len(accepted)
            candidates = await self.generate_fn(prompt, wanted)
            logger.info(
                "Round %d/%d: %d candidates",
                rounds,
                self.max_rounds,
                len(candidates),
                extra=log_extra,
            )
            if not candidates:
                break

            kept, dupes = filter_duplicates(candidates, existing + accepted)
            accepted.extend(kept[:wanted])
            rejected.extend(dupes)

        logger.info(
            "Generated %d cards (%d duplicates rejected) in %d round(s)",
            len(accepted),
            len(rejected),
            rounds,
            extra=log_extra,
        )
        return GenerationResult(
            prompt=first_prompt, accepted=accepted, rejected=rejected, rounds=rounds
        )

    def generate_sync(self, params: SystemPromptParams) -> GenerationResult:
        return asyncio.run(self.generate(params))
