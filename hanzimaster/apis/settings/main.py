from __future__ import annotations

from fastapi import APIRouter

from hanzimaster.core.config import settings
from hanzimaster.core.credentials import credential_store, mask
from .schemas import CredentialStatus, CredentialUpdate, PickerConfig


router = APIRouter()


def _status() -> CredentialStatus:
    return CredentialStatus(
        gemini_api_key=mask(credential_store.gemini_api_key),
        google_client_id=credential_store.google_client_id,
        generation_enabled=bool(credential_store.gemini_api_key),
        picker_enabled=bool(credential_store.google_client_id),
    )


@router.get(
    f"/{settings.app.version}/settings/credentials",
    response_model=CredentialStatus,
    tags=["settings"],
)
async def get_credentials() -> CredentialStatus:
    return _status()


@router.put(
    f"/{settings.app.version}/settings/credentials",
    response_model=CredentialStatus,
    tags=["settings"],
)
async def update_credentials(req: CredentialUpdate) -> CredentialStatus:
    credential_store.update(
        gemini_api_key=req.gemini_api_key,
        google_client_id=req.google_client_id,
        clear=req.clear,
    )
    return _status()


@router.get(
    f"/{settings.app.version}/settings/picker",
    response_model=PickerConfig,
    tags=["settings"],
)
async def get_picker_config() -> PickerConfig:
    client_id = credential_store.google_client_id
    return PickerConfig(enabled=bool(client_id), client_id=client_id)
