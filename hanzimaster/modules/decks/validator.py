"""Deck schema validation for untyped input (imported files, fetched bodies)."""

from __future__ import annotations

from typing import Any, List, Optional, Set

from pydantic import ValidationError

from hanzimaster.modules.decks.errors import ClassificationError
from hanzimaster.modules.decks.models import Deck, RawDeck
from hanzimaster.modules.decks.normalizer import IMPORTED_PREFIX, normalize_cards


def is_deck_shape(value: Any) -> bool:
    """True for an object carrying a string title and a list of cards."""
    return (
        isinstance(value, dict)
        and isinstance(value.get("title"), str)
        and isinstance(value.get("cards"), list)
    )


def validate_deck(
    value: Any, *, prefix: str = IMPORTED_PREFIX, stamp: Optional[int] = None
) -> Deck:
    """Validate ``value`` as a deck and normalize every card.

    Raises ``ClassificationError`` carrying the validation errors when the
    value is not a deck or holds no cards.
    """
    try:
        raw = RawDeck.model_validate(value)
    except ValidationError as e:
        raise ClassificationError(
            "Content is not a valid deck.",
            details=e.errors(include_url=False, include_context=False),
        ) from e
    if not raw.cards:
        raise ClassificationError("Deck has no cards.")
    return Deck(
        title=raw.title,
        cards=normalize_cards(raw.cards, prefix=prefix, stamp=stamp),
    )


def duplicate_card_ids(deck: Deck) -> List[str]:
    """Ids that appear on more than one card, in first-seen order."""
    seen: Set[str] = set()
    dupes: List[str] = []
    for card in deck.cards:
        if card.id in seen and card.id not in dupes:
            dupes.append(card.id)
        seen.add(card.id)
    return dupes
