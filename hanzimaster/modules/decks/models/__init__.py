from .deck import (
    Card,
    Deck,
    Example,
    GeneratedCard,
    GeneratedDeck,
    GeneratedExample,
)
from .raw import RawCard, RawDeck, RawExample

__all__ = [
    "Card",
    "Deck",
    "Example",
    "GeneratedCard",
    "GeneratedDeck",
    "GeneratedExample",
    "RawCard",
    "RawDeck",
    "RawExample",
]
