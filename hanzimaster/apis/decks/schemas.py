from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from hanzimaster.modules.decks.models import Deck
from hanzimaster.modules.review.models import SessionState


class TopicRequest(BaseModel):
    topic: str = Field(..., min_length=1, description="Theme for the vocabulary list")
    session_id: Optional[str] = Field(
        default=None, description="Load the result into this review session"
    )


class ListRequest(BaseModel):
    content: str = Field(
        ..., min_length=1, description="Words one per line; 'word: example' allowed"
    )
    session_id: Optional[str] = None


class TextImportRequest(BaseModel):
    content: str = Field(..., description="Deck JSON, JSON list of words, or plain text")
    session_id: Optional[str] = None


class UrlImportRequest(BaseModel):
    url: str
    session_id: Optional[str] = None


class DriveImportRequest(BaseModel):
    link: Optional[str] = Field(default=None, description="Drive share link")
    file_id: Optional[str] = Field(default=None, description="File chosen in the picker")
    access_token: Optional[str] = Field(
        default=None, description="OAuth token from the picker"
    )
    session_id: Optional[str] = None


class IngestResponse(BaseModel):
    deck: Deck
    session: Optional[SessionState] = None
