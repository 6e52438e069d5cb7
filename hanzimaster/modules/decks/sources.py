"""Raw content sources for ingestion: local files, URLs and Google Drive.

Every source returns the payload as opaque text for the classifier and
raises ``TransportError`` (or ``AuthorizationError`` for rejected Drive
credentials) on failure.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

import httpx

from hanzimaster.core.logging import get_logger
from hanzimaster.modules.decks.errors import AuthorizationError, TransportError

logger = get_logger(__name__)

DRIVE_DOWNLOAD_URL = "https://drive.google.com/uc"
DRIVE_API_URL = "https://www.googleapis.com/drive/v3/files/{file_id}"

_DRIVE_ID_PATTERNS = (
    re.compile(r"/d/([a-zA-Z0-9_-]+)"),
    re.compile(r"[?&]id=([a-zA-Z0-9_-]+)"),
)
_BARE_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{10,}$")


def read_file(path: Path | str) -> str:
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise TransportError(f"Failed to read file: {p}") from e


def extract_drive_file_id(link: str) -> str:
    """Pull the file id out of a Drive share link (``/d/<id>`` or ``id=<id>``)."""
    link = link.strip()
    for pattern in _DRIVE_ID_PATTERNS:
        m = pattern.search(link)
        if m:
            return m.group(1)
    if _BARE_ID_RE.fullmatch(link):
        return link
    raise TransportError("Could not find a valid Google Drive file id in the link.")


class ContentFetcher:
    """Fetch remote payloads over HTTP.

    ``transport`` is forwarded to ``httpx.AsyncClient``; tests pass an
    ``httpx.MockTransport``.
    """

    def __init__(self, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, follow_redirects=True)

    async def fetch_url(self, url: str) -> str:
        url = url.strip()
        if not url.lower().startswith(("http://", "https://")):
            raise TransportError("Only http(s) URLs can be imported.")
        try:
            async with self._client() as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPError as e:
            logger.warning("URL fetch failed for %s: %s", url, e)
            raise TransportError(f"Could not download content from {url}.") from e

    async def fetch_drive_link(self, link: str) -> str:
        """Download a file shared as "Anyone with the link"."""
        file_id = extract_drive_file_id(link)
        params = {"export": "download", "id": file_id}
        try:
            async with self._client() as client:
                response = await client.get(DRIVE_DOWNLOAD_URL, params=params)
                response.raise_for_status()
                return response.text
        except httpx.HTTPError as e:
            logger.warning("Drive download failed for %s: %s", file_id, e)
            raise TransportError(
                "Could not download file. Ensure the file link is set to "
                "'Anyone with the link' can view."
            ) from e

    async def fetch_drive_file(
        self, file_id: str, *, access_token: Optional[str], client_id: Optional[str]
    ) -> str:
        """Download a file chosen in the Drive picker with the user's OAuth token."""
        if not client_id:
            raise AuthorizationError("Google Drive picker is not configured.")
        if not access_token:
            raise AuthorizationError("Missing Google Drive access token.")
        url = DRIVE_API_URL.format(file_id=file_id)
        headers = {"Authorization": f"Bearer {access_token}"}
        try:
            async with self._client() as client:
                response = await client.get(url, params={"alt": "media"}, headers=headers)
        except httpx.HTTPError as e:
            raise TransportError("Could not download file from Google Drive.") from e
        if response.status_code in (401, 403):
            raise AuthorizationError("Google Drive rejected the access token.")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError("Could not download file from Google Drive.") from e
        return response.text
