from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from hanzimaster.modules.decks.models import Deck
from hanzimaster.modules.review.models import ReviewAction, ScriptMode, SessionState


class CreateSessionRequest(BaseModel):
    deck: Optional[Deck] = None
    script_mode: ScriptMode = ScriptMode.SIMPLIFIED


class LoadDeckRequest(BaseModel):
    deck: Deck


class SessionStateResponse(BaseModel):
    state: SessionState


class KeyPressRequest(BaseModel):
    key: str = Field(..., description="KeyboardEvent.key, e.g. ' ' or 'ArrowRight'")
    input_focused: bool = False


class KeyPressResponse(BaseModel):
    action: Optional[ReviewAction] = None
    state: SessionState
