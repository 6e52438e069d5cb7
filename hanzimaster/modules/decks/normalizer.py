"""Card normalization.

Turns card-like records (validated imports, model output, legacy exports)
into canonical ``Card`` objects. Only structure is repaired here: ids are
assigned when absent and example text is moved into both script slots. No
pinyin or definitions are ever made up.
"""

from __future__ import annotations

import time
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel

from hanzimaster.core.logging import get_logger
from hanzimaster.modules.decks.models import Card, Example, RawCard, RawExample

logger = get_logger(__name__)

GENERATED_PREFIX = "card"
IMPORTED_PREFIX = "imported"


def _now_ms() -> int:
    return int(time.time() * 1000)


def mint_id(prefix: str, stamp: int, index: int) -> str:
    return f"{prefix}-{stamp}-{index}"


def _first(*values: Optional[str]) -> str:
    for v in values:
        if v:
            return v
    return ""


def normalize_example(raw: RawExample) -> Example:
    legacy = raw.chinese
    return Example(
        simplified=_first(raw.simplified, legacy, raw.traditional),
        traditional=_first(raw.traditional, legacy, raw.simplified),
        pinyin=raw.pinyin,
        english=raw.english or "",
    )


def normalize_card(raw: RawCard, fallback_id: str) -> Card:
    """Build a canonical card, using ``fallback_id`` when ``raw`` has none."""
    return Card(
        id=raw.id or fallback_id,
        simplified=_first(raw.simplified, raw.traditional),
        traditional=_first(raw.traditional, raw.simplified),
        pinyin=raw.pinyin or "",
        english=raw.english or "",
        examples=[normalize_example(ex) for ex in raw.examples],
    )


def _as_raw(item: RawCard | BaseModel | Mapping[str, Any]) -> RawCard:
    if isinstance(item, RawCard):
        return item
    if isinstance(item, BaseModel):
        return RawCard.model_validate(item.model_dump())
    return RawCard.model_validate(item)


def normalize_cards(
    items: Iterable[RawCard | BaseModel | Mapping[str, Any]],
    *,
    prefix: str = IMPORTED_PREFIX,
    stamp: Optional[int] = None,
) -> list[Card]:
    """Normalize a batch of cards; ids are unique within the returned list.

    Existing ids are kept. A repeated id keeps its first occurrence and later
    ones get a freshly minted id.
    """
    stamp = _now_ms() if stamp is None else stamp
    raws = [_as_raw(item) for item in items]
    taken = {r.id for r in raws if r.id}
    seen: set[str] = set()
    cards: list[Card] = []
    for index, raw in enumerate(raws):
        card_id = raw.id
        if card_id and card_id in seen:
            logger.warning("Duplicate card id %r at position %d; reassigning", card_id, index)
            card_id = None
        if not card_id:
            card_id = mint_id(prefix, stamp, index)
            suffix = 0
            while card_id in taken or card_id in seen:
                suffix += 1
                card_id = f"{mint_id(prefix, stamp, index)}-{suffix}"
        seen.add(card_id)
        if raw.id != card_id:
            raw = raw.model_copy(update={"id": card_id})
        cards.append(normalize_card(raw, card_id))
    return cards
