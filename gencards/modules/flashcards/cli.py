from __future__ import annotations

import argparse
from pathlib import Path

from gencards.core.config import settings
from gencards.core.logging import setup_logging
from gencards.modules.flashcards.duplicates import is_duplicate
from gencards.modules.flashcards.generator import (
    FlashcardGenerationError,
    parse_flashcards_json,
)
from gencards.modules.flashcards.main import DeckFlashcardsGenerator
from gencards.modules.flashcards.models.flashcards import (
    Card,
    CardFormat,
    DeckChainEntry,
    SystemPromptParams,
)


def parse_deck(value: str) -> DeckChainEntry:
    """Parse ``Title`` or ``Title:topic``."""
    title, _, topic = value.partition(":")
    if not title.strip():
        raise argparse.ArgumentTypeError(f"Empty deck title in {value!r}")
    return DeckChainEntry(title=title.strip(), topic=topic.strip())


def load_cards(path: str | None) -> list[Card]:
    """Read cards from a JSON list or a ``{"flashcards": [...]}`` object."""
    if not path:
        return []
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SystemExit(f"Cannot read cards from {path}: {exc}") from exc
    if not text.lstrip().startswith("{"):
        text = f'{{"flashcards": {text}}}'
    try:
        return parse_flashcards_json(text)
    except FlashcardGenerationError as exc:
        raise SystemExit(f"Invalid cards in {path}: {exc}") from exc


def _build_params(args: argparse.Namespace) -> SystemPromptParams:
    decks = args.deck or []
    if not decks and not args.topic:
        raise SystemExit("--topic or at least one --deck is required")
    return SystemPromptParams.from_chain(
        decks,
        main_topic=args.topic,
        subtopic=args.subtopic,
        existing_cards=load_cards(args.existing),
        format=CardFormat(args.format),
    )


def _add_prompt_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--topic", "-t", help="Main topic (defaults to the root deck topic)")
    p.add_argument("--subtopic", "-s", help="Subtopic (defaults to the current deck topic)")
    p.add_argument(
        "--deck",
        "-d",
        action="append",
        type=parse_deck,
        help="Deck in the chain, root first: 'Title' or 'Title:topic' (repeatable)",
    )
    p.add_argument("--existing", "-e", help="JSON file with the deck's existing cards")
    p.add_argument(
        "--format",
        choices=[f.value for f in CardFormat],
        default=CardFormat.SIMPLE.value,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog=settings.app.name, description="Deck-aware flashcard prompts and duplicate checks"
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("prompt", help="Print the system prompt for a deck")
    _add_prompt_args(p)

    c = sub.add_parser("check", help="Check one card against existing cards")
    c.add_argument("--front", "-f", required=True)
    c.add_argument("--back", "-b", default="")
    c.add_argument("--existing", "-e", required=True, help="JSON file with existing cards")

    g = sub.add_parser("generate", help="Generate cards for a deck, skipping duplicates")
    _add_prompt_args(g)
    g.add_argument("--count", "-n", type=int, default=None, help="Cards wanted")
    g.add_argument("--max-rounds", type=int, default=None, help="Re-request limit")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.cmd == "prompt":
        print(DeckFlashcardsGenerator.build_prompt(_build_params(args)))
        return 0
    if args.cmd == "check":
        verdict = is_duplicate(
            Card(front=args.front, back=args.back), load_cards(args.existing)
        )
        print(verdict.model_dump_json(indent=2))
        return 1 if verdict.is_duplicate else 0
    if args.cmd == "generate":
        try:
            svc = DeckFlashcardsGenerator(count=args.count, max_rounds=args.max_rounds)
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc
        result = svc.generate_sync(_build_params(args))
        print(result.model_dump_json(indent=2))
        return 0

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
