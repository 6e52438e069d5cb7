"""Remembered credentials that survive restarts.

The service API key and the OAuth client id normally come from the
environment (see ``Settings``). Users may also enter them at runtime; those
values are kept in a ``CredentialStore`` which is loaded once at startup and
written back whenever the user edits it. Stored values take precedence over
the environment.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from hanzimaster.core.config import Settings, settings
from hanzimaster.core.logging import get_logger

logger = get_logger(__name__)


class StoredCredentials(BaseModel):
    gemini_api_key: Optional[str] = None
    google_client_id: Optional[str] = None


class CredentialStore:
    """Process-wide credential state with explicit load/save points."""

    def __init__(self, path: Path | str, *, defaults: Optional[Settings] = None) -> None:
        self.path = Path(path)
        self._defaults = defaults or settings
        self._stored = StoredCredentials()

    def load(self) -> StoredCredentials:
        if not self.path.exists():
            self._stored = StoredCredentials()
            return self._stored
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            self._stored = StoredCredentials.model_validate(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable credentials file %s: %s", self.path, e)
            self._stored = StoredCredentials()
        return self._stored

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            self._stored.model_dump_json(indent=2, exclude_none=True), encoding="utf-8"
        )

    def update(
        self,
        *,
        gemini_api_key: Optional[str] = None,
        google_client_id: Optional[str] = None,
        clear: bool = False,
    ) -> StoredCredentials:
        """Apply a user edit and persist it.

        Empty strings remove a stored value; ``None`` leaves it unchanged.
        """
        data = {} if clear else self._stored.model_dump()
        for key, value in (
            ("gemini_api_key", gemini_api_key),
            ("google_client_id", google_client_id),
        ):
            if value is None:
                continue
            data[key] = value.strip() or None
        self._stored = StoredCredentials.model_validate(data)
        self.save()
        return self._stored

    @property
    def gemini_api_key(self) -> Optional[str]:
        return self._stored.gemini_api_key or self._defaults.gemini_api_key

    @property
    def google_client_id(self) -> Optional[str]:
        return self._stored.google_client_id or self._defaults.google_client_id


def mask(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}...{value[-4:]}"


credential_store = CredentialStore(settings.credentials_file)
