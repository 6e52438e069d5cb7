from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class CredentialUpdate(BaseModel):
    gemini_api_key: Optional[str] = None
    google_client_id: Optional[str] = None
    clear: bool = False


class CredentialStatus(BaseModel):
    gemini_api_key: Optional[str] = None  # masked
    google_client_id: Optional[str] = None
    generation_enabled: bool
    picker_enabled: bool


class PickerConfig(BaseModel):
    enabled: bool
    client_id: Optional[str] = None
    scope: str = "https://www.googleapis.com/auth/drive.readonly"
    mime_types: list[str] = ["application/json", "text/plain"]
