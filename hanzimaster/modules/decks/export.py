"""Deck export: the persisted format, also accepted back on import."""

from __future__ import annotations

import re
from pathlib import Path

from hanzimaster.modules.decks.models import Deck

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def export_filename(title: str) -> str:
    stem = _NON_ALNUM_RE.sub("_", title).lower()
    if not stem.strip("_"):
        stem = "deck"
    return f"{stem}.json"


def dump_deck(deck: Deck) -> str:
    return deck.model_dump_json(indent=2)


def write_deck(deck: Deck, directory: Path | str = ".") -> Path:
    path = Path(directory) / export_filename(deck.title)
    path.write_text(dump_deck(deck), encoding="utf-8")
    return path
