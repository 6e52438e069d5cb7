"""Deck ingestion module exports."""

from .models import Card, Deck, Example
from .errors import (
    AuthorizationError,
    ClassificationError,
    DeckError,
    GenerationError,
    TransportError,
)
from .classifier import classify, ingest_text
from .generator import DeckGenerator
from .main import DeckService

__all__ = [
    "Card",
    "Deck",
    "Example",
    "AuthorizationError",
    "ClassificationError",
    "DeckError",
    "GenerationError",
    "TransportError",
    "classify",
    "ingest_text",
    "DeckGenerator",
    "DeckService",
]
