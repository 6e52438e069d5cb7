from __future__ import annotations

from typing import Awaitable, Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from hanzimaster.apis.deps import get_deck_service, require_session
from hanzimaster.core.config import settings
from hanzimaster.modules.decks.errors import ClassificationError
from hanzimaster.modules.decks.export import dump_deck, export_filename
from hanzimaster.modules.decks.main import DeckService
from hanzimaster.modules.decks.models import Deck
from hanzimaster.modules.decks.validator import duplicate_card_ids, validate_deck
from .schemas import (
    DriveImportRequest,
    IngestResponse,
    ListRequest,
    TextImportRequest,
    TopicRequest,
    UrlImportRequest,
)


router = APIRouter()


async def _ingest(
    produce: Callable[[], Awaitable[Deck]], session_id: Optional[str]
) -> IngestResponse:
    """Run one ingestion, loading the result into a session when asked.

    The session is checked before any remote work starts so a missing or busy
    session fails fast; a failed ingestion leaves its current deck untouched.
    """
    if not session_id:
        return IngestResponse(deck=await produce())
    session = require_session(session_id)
    async with session.ingestion():
        deck = await produce()
        session.load_deck(deck)
    return IngestResponse(deck=deck, session=session.to_state())


@router.post(
    f"/{settings.app.version}/decks/generate/topic",
    response_model=IngestResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["decks"],
)
async def generate_from_topic(
    req: TopicRequest, svc: DeckService = Depends(get_deck_service)
) -> IngestResponse:
    return await _ingest(lambda: svc.from_topic(req.topic), req.session_id)


@router.post(
    f"/{settings.app.version}/decks/generate/list",
    response_model=IngestResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["decks"],
)
async def generate_from_list(
    req: ListRequest, svc: DeckService = Depends(get_deck_service)
) -> IngestResponse:
    return await _ingest(lambda: svc.from_list(req.content), req.session_id)


@router.post(
    f"/{settings.app.version}/decks/import/text",
    response_model=IngestResponse,
    tags=["decks"],
)
async def import_text(
    req: TextImportRequest, svc: DeckService = Depends(get_deck_service)
) -> IngestResponse:
    return await _ingest(lambda: svc.from_text(req.content), req.session_id)


@router.post(
    f"/{settings.app.version}/decks/import/url",
    response_model=IngestResponse,
    tags=["decks"],
)
async def import_url(
    req: UrlImportRequest, svc: DeckService = Depends(get_deck_service)
) -> IngestResponse:
    return await _ingest(lambda: svc.from_url(req.url), req.session_id)


@router.post(
    f"/{settings.app.version}/decks/import/drive",
    response_model=IngestResponse,
    tags=["decks"],
)
async def import_drive(
    req: DriveImportRequest, svc: DeckService = Depends(get_deck_service)
) -> IngestResponse:
    if req.file_id:
        file_id = req.file_id
        return await _ingest(
            lambda: svc.from_drive_picker(file_id, req.access_token), req.session_id
        )
    if req.link and req.link.strip():
        link = req.link
        return await _ingest(lambda: svc.from_drive_link(link), req.session_id)
    raise HTTPException(
        status_code=422,
        detail="Provide a Drive share link or a picker file id",
    )


@router.post(
    f"/{settings.app.version}/decks/export",
    tags=["decks"],
)
async def export_deck(deck: Deck) -> Response:
    dupes = duplicate_card_ids(deck)
    if dupes:
        raise ClassificationError(
            "Deck has duplicate card ids.", details=[{"id": card_id} for card_id in dupes]
        )
    deck = validate_deck(deck.model_dump())
    return Response(
        content=dump_deck(deck),
        media_type="application/json",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(deck.title)}"'
        },
    )
