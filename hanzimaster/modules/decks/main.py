"""Deck ingestion service.

Provides one high-level class that turns every supported input (topic,
word list, raw payload, local file, URL, Google Drive) into a canonical
``Deck``. Used by the API handlers and the CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from hanzimaster.core.credentials import credential_store
from hanzimaster.core.logging import get_logger
from hanzimaster.modules.decks.classifier import ingest_text
from hanzimaster.modules.decks.generator import DeckGenerator
from hanzimaster.modules.decks.models import Deck
from hanzimaster.modules.decks.sources import ContentFetcher, read_file

logger = get_logger(__name__)


class DeckService:
    def __init__(
        self,
        *,
        generator: Optional[DeckGenerator] = None,
        fetcher: Optional[ContentFetcher] = None,
    ) -> None:
        self.generator = generator or DeckGenerator()
        self.fetcher = fetcher or ContentFetcher()

    async def from_topic(self, topic: str) -> Deck:
        logger.info("Generating deck for topic %r", topic, extra={"source": "topic"})
        return await self.generator.generate_from_topic(topic)

    async def from_list(self, text: str) -> Deck:
        logger.info("Generating deck from word list", extra={"source": "list"})
        return await self.generator.generate_from_content(text)

    async def from_text(self, payload: str, *, source: str = "text") -> Deck:
        logger.info("Ingesting %d characters", len(payload), extra={"source": source})
        return await ingest_text(payload, self.generator)

    async def from_file(self, path: Path | str) -> Deck:
        return await self.from_text(read_file(path), source="file")

    async def from_url(self, url: str) -> Deck:
        return await self.from_text(await self.fetcher.fetch_url(url), source="url")

    async def from_drive_link(self, link: str) -> Deck:
        payload = await self.fetcher.fetch_drive_link(link)
        return await self.from_text(payload, source="drive")

    async def from_drive_picker(self, file_id: str, access_token: Optional[str]) -> Deck:
        payload = await self.fetcher.fetch_drive_file(
            file_id,
            access_token=access_token,
            client_id=credential_store.google_client_id,
        )
        return await self.from_text(payload, source="drive")


deck_service = DeckService()
