"""Content classification for deck ingestion.

A raw text payload is exactly one of three things:

- ``DeckContent``: JSON carrying a string title and a list of cards; accepted
  as-is after validation and normalization, no model call.
- ``WordListContent``: a JSON list of plain strings; joined one per line and
  expanded by the generator.
- ``FreeTextContent``: anything that is not JSON; treated as a line-oriented
  word list and expanded by the generator.

Every other JSON shape is a ``ClassificationError``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol, Union

from hanzimaster.core.logging import get_logger
from hanzimaster.modules.decks.errors import ClassificationError
from hanzimaster.modules.decks.models import Deck
from hanzimaster.modules.decks.validator import is_deck_shape, validate_deck

logger = get_logger(__name__)

UNRECOGNIZED_MESSAGE = (
    "Unrecognized content. Provide a saved deck file or a list of words "
    "(array of strings)."
)


@dataclass(frozen=True)
class DeckContent:
    deck: Deck


@dataclass(frozen=True)
class WordListContent:
    words: tuple[str, ...]

    @property
    def text(self) -> str:
        return "\n".join(self.words)


@dataclass(frozen=True)
class FreeTextContent:
    text: str


Content = Union[DeckContent, WordListContent, FreeTextContent]


class ContentGenerator(Protocol):
    async def generate_from_content(self, text: str) -> Deck: ...


def _is_word_list(value: Any) -> bool:
    return (
        isinstance(value, list)
        and len(value) > 0
        and all(isinstance(item, str) for item in value)
    )


def classify(text: str) -> Content:
    """Map a payload to exactly one content variant or raise."""
    # Files saved by some editors carry a byte order mark.
    text = text.lstrip("\ufeff")
    if not text or not text.strip():
        raise ClassificationError("Content is empty.")
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return FreeTextContent(text=text.strip())

    if is_deck_shape(parsed):
        return DeckContent(deck=validate_deck(parsed))
    if _is_word_list(parsed):
        words = tuple(w.strip() for w in parsed if w.strip())
        if words:
            return WordListContent(words=words)
    raise ClassificationError(UNRECOGNIZED_MESSAGE)


async def resolve(content: Content, generator: ContentGenerator) -> Deck:
    if isinstance(content, DeckContent):
        return content.deck
    if isinstance(content, (WordListContent, FreeTextContent)):
        return await generator.generate_from_content(content.text)
    raise ClassificationError(UNRECOGNIZED_MESSAGE)


async def ingest_text(text: str, generator: ContentGenerator) -> Deck:
    """Classify ``text`` and turn it into a canonical deck."""
    content = classify(text)
    logger.info("Classified payload as %s", type(content).__name__)
    return await resolve(content, generator)
