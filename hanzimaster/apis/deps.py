from __future__ import annotations

from fastapi import HTTPException, status

from hanzimaster.modules.decks.main import DeckService, deck_service
from hanzimaster.modules.review.state import ReviewSession, review_manager


def get_deck_service() -> DeckService:
    """Deck service dependency; overridden in tests."""
    return deck_service


def require_session(session_id: str) -> ReviewSession:
    session = review_manager.get_session(session_id)
    if not session:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return session
