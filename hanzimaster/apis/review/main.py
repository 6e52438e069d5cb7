from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response

from hanzimaster.apis.deps import require_session
from hanzimaster.core.config import settings
from hanzimaster.modules.decks.export import dump_deck, export_filename
from hanzimaster.modules.decks.validator import validate_deck
from hanzimaster.modules.review.models import ReviewAction
from hanzimaster.modules.review.presenter import action_for_key
from hanzimaster.modules.review.state import review_manager
from .schemas import (
    CreateSessionRequest,
    KeyPressRequest,
    KeyPressResponse,
    LoadDeckRequest,
    SessionStateResponse,
)


router = APIRouter()

_PREFIX = f"/{settings.app.version}/review/sessions"


@router.post(
    _PREFIX,
    response_model=SessionStateResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["review"],
)
async def create_session(req: CreateSessionRequest) -> SessionStateResponse:
    deck = validate_deck(req.deck.model_dump()) if req.deck else None
    session = review_manager.create_session(deck=deck, script_mode=req.script_mode)
    return SessionStateResponse(state=session.to_state())


@router.get(
    f"{_PREFIX}/{{session_id}}",
    response_model=SessionStateResponse,
    tags=["review"],
)
async def get_session_state(session_id: str) -> SessionStateResponse:
    return SessionStateResponse(state=require_session(session_id).to_state())


@router.delete(
    f"{_PREFIX}/{{session_id}}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["review"],
)
async def delete_session(session_id: str) -> Response:
    if not review_manager.delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    f"{_PREFIX}/{{session_id}}/deck",
    response_model=SessionStateResponse,
    tags=["review"],
)
async def load_deck(session_id: str, req: LoadDeckRequest) -> SessionStateResponse:
    session = require_session(session_id)
    session.load_deck(validate_deck(req.deck.model_dump()))
    return SessionStateResponse(state=session.to_state())


@router.delete(
    f"{_PREFIX}/{{session_id}}/deck",
    response_model=SessionStateResponse,
    tags=["review"],
)
async def clear_deck(session_id: str) -> SessionStateResponse:
    session = require_session(session_id)
    session.clear_deck()
    return SessionStateResponse(state=session.to_state())


def _transition(session_id: str, action: ReviewAction) -> SessionStateResponse:
    session = require_session(session_id)
    session.apply(action)
    return SessionStateResponse(state=session.to_state())


@router.post(
    f"{_PREFIX}/{{session_id}}/next",
    response_model=SessionStateResponse,
    tags=["review"],
)
async def next_card(session_id: str) -> SessionStateResponse:
    return _transition(session_id, ReviewAction.NEXT)


@router.post(
    f"{_PREFIX}/{{session_id}}/previous",
    response_model=SessionStateResponse,
    tags=["review"],
)
async def previous_card(session_id: str) -> SessionStateResponse:
    return _transition(session_id, ReviewAction.PREVIOUS)


@router.post(
    f"{_PREFIX}/{{session_id}}/flip",
    response_model=SessionStateResponse,
    tags=["review"],
)
async def flip_card(session_id: str) -> SessionStateResponse:
    return _transition(session_id, ReviewAction.FLIP)


@router.post(
    f"{_PREFIX}/{{session_id}}/toggle-script",
    response_model=SessionStateResponse,
    tags=["review"],
)
async def toggle_script(session_id: str) -> SessionStateResponse:
    return _transition(session_id, ReviewAction.TOGGLE_SCRIPT)


@router.post(
    f"{_PREFIX}/{{session_id}}/keys",
    response_model=KeyPressResponse,
    tags=["review"],
)
async def press_key(session_id: str, req: KeyPressRequest) -> KeyPressResponse:
    session = require_session(session_id)
    action = action_for_key(req.key, input_focused=req.input_focused)
    if action is not None:
        session.apply(action)
    return KeyPressResponse(action=action, state=session.to_state())


@router.get(
    f"{_PREFIX}/{{session_id}}/export",
    tags=["review"],
)
async def export_session_deck(session_id: str) -> Response:
    session = require_session(session_id)
    if not session.deck:
        raise HTTPException(status_code=404, detail="No deck loaded")
    return Response(
        content=dump_deck(session.deck),
        media_type="application/json",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(session.deck.title)}"'
        },
    )
