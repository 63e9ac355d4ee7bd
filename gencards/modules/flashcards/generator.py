"""Flashcard generator using pydantic-ai.

The deck-aware system prompt is built elsewhere (``prompts.py``); this module
only runs it against the configured model and returns validated cards.
Provider imports are lazy to avoid import-time errors when credentials are
missing.
"""

from __future__ import annotations

from pydantic import ValidationError
from pydantic_ai import Agent

from gencards.core.config import settings
from gencards.modules.flashcards.models.flashcards import Card, FlashcardsResponse


class FlashcardGenerationError(RuntimeError):
    """The model returned nothing usable as flashcards."""


def _build_google_model(model_name: str, *, thinking_budget: int | None = None):
    """Build the Google Gemini model provider (lazy import)."""
    from pydantic_ai.models.google import GoogleModel, GoogleModelSettings
    from pydantic_ai.providers.google import GoogleProvider

    if not settings.gemini_api_key:
        raise FlashcardGenerationError(
            "Gemini API key not configured. Set GEMINI_API_KEY in your environment."
        )

    provider = GoogleProvider(api_key=settings.gemini_api_key)
    settings_obj = None
    if thinking_budget is not None:
        settings_obj = GoogleModelSettings(
            google_thinking_config={"thinking_budget": thinking_budget}
        )
    return GoogleModel(model_name, provider=provider, settings=settings_obj)


def _build_openrouter_model():
    """Build OpenRouter model via OpenAI-compatible provider (lazy import)."""
    from pydantic_ai.models.openai import OpenAIChatModel
    from pydantic_ai.providers.openai import OpenAIProvider

    if not settings.openrouter_api_key:
        raise RuntimeError(
            "OpenRouter API key not configured. Set OPENROUTER_API_KEY in your environment."
        )

    provider = OpenAIProvider(
        api_key=settings.openrouter_api_key,
        base_url="https://openrouter.ai/api/v1",
    )
    return OpenAIChatModel(settings.openrouter_model, provider=provider)


def _build_model_by_settings():
    provider = (settings.model_provider or "google").lower()
    if provider == "openrouter":
        return _build_openrouter_model()
    return _build_google_model(settings.generation.llm_model, thinking_budget=0)


def build_instruction(count: int) -> str:
    return (
        f"Generate {int(count)} flashcards following the system rules. "
        "Output only the JSON object, no code fences or commentary."
    )


def _build_agent(system_prompt: str) -> Agent[None, FlashcardsResponse]:
    return Agent[None, FlashcardsResponse](
        model=_build_model_by_settings(),
        output_type=FlashcardsResponse,
        system_prompt=system_prompt,
        retries=settings.generation.retries,
    )


async def generate_flashcards(system_prompt: str, count: int) -> list[Card]:
    """Ask the model for ``count`` cards under ``system_prompt``."""
    agent = _build_agent(system_prompt)
    res = await agent.run(build_instruction(count))
    return _postprocess(res.output)


def parse_flashcards_json(text: str) -> list[Card]:
    """Validate a raw ``{"flashcards": [...]}`` completion."""
    try:
        parsed = FlashcardsResponse.model_validate_json(text)
    except ValidationError as exc:
        raise FlashcardGenerationError(f"Malformed flashcards response: {exc}") from exc
    return _postprocess(parsed)


def _postprocess(resp: FlashcardsResponse) -> list[Card]:
    """Trim whitespace and drop cards missing a side."""
    clean_cards = []
    for c in resp.flashcards or []:
        front = (c.front or "").strip()
        back = (c.back or "").strip()
        if front and back:
            clean_cards.append(Card(front=front, back=back))
    return clean_cards
