"""Failures of a single ingestion action.

Each error is terminal for the action that raised it: callers report the
message and keep whatever deck was already loaded.
"""

from __future__ import annotations

from typing import Any


class DeckError(Exception):
    """Base class for deck ingestion failures."""

    kind = "deck_error"

    def __init__(self, message: str, *, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ClassificationError(DeckError):
    """Content matches no recognized shape."""

    kind = "classification_failed"


class GenerationError(DeckError):
    """The generation service errored or returned unusable data."""

    kind = "generation_failed"


class TransportError(DeckError):
    """A file read, URL fetch or cloud download failed."""

    kind = "transport_failed"


class AuthorizationError(DeckError):
    """Cloud picker credentials are missing or were rejected."""

    kind = "authorization_failed"
