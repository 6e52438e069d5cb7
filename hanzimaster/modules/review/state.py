"""In-memory review sessions.

A session holds at most one deck plus the position within it: the active
card index (circular), whether the card is flipped, and the preferred script.
Sessions are kept in-process only; the only persistence is deck export.
Idle sessions are swept by a background task started with the app.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncIterator, Dict, Optional
from uuid import uuid4

from hanzimaster.core.logging import get_logger
from hanzimaster.modules.decks.models import Card, Deck
from hanzimaster.modules.review.models import (
    Progress,
    ReviewAction,
    ScriptMode,
    SessionState,
)
from hanzimaster.modules.review.presenter import render_card

logger = get_logger(__name__)


class EmptyDeckError(ValueError):
    """A deck without cards was offered to a session."""

    kind = "empty_deck"


class SessionBusyError(RuntimeError):
    """Another ingestion for the session is still in flight."""

    kind = "session_busy"


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _iso(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


def _short_id() -> str:
    # 8-char slice from uuid4
    return uuid4().hex[:8]


@dataclass
class ReviewSession:
    id: str
    deck: Optional[Deck] = None
    active_index: int = 0
    flipped: bool = False
    script_mode: ScriptMode = ScriptMode.SIMPLIFIED
    created_at: datetime = field(default_factory=_now_utc)
    last_activity: datetime = field(default_factory=_now_utc)
    # runtime
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    # Transitions --------------------------------------------------------
    def load_deck(self, deck: Deck) -> None:
        if not deck.cards:
            raise EmptyDeckError("Deck has no cards.")
        self.deck = deck
        self.active_index = 0
        self.flipped = False
        self.touch()

    def clear_deck(self) -> None:
        self.deck = None
        self.active_index = 0
        self.flipped = False
        self.touch()

    def next(self) -> None:
        if not self.deck:
            return
        self.flipped = False
        self.active_index = (self.active_index + 1) % len(self.deck.cards)
        self.touch()

    def previous(self) -> None:
        if not self.deck:
            return
        self.flipped = False
        self.active_index = (self.active_index - 1) % len(self.deck.cards)
        self.touch()

    def flip(self) -> None:
        self.flipped = not self.flipped
        self.touch()

    def toggle_script(self) -> None:
        self.script_mode = self.script_mode.toggled()
        self.touch()

    def apply(self, action: ReviewAction) -> None:
        if action is ReviewAction.NEXT:
            self.next()
        elif action is ReviewAction.PREVIOUS:
            self.previous()
        elif action is ReviewAction.FLIP:
            self.flip()
        elif action is ReviewAction.TOGGLE_SCRIPT:
            self.toggle_script()

    # Views --------------------------------------------------------------
    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @property
    def active_card(self) -> Optional[Card]:
        if not self.deck:
            return None
        return self.deck.cards[self.active_index]

    def touch(self) -> None:
        self.last_activity = _now_utc()

    def to_state(self) -> SessionState:
        card = self.active_card
        progress = None
        if self.deck:
            total = len(self.deck.cards)
            position = self.active_index + 1
            progress = Progress(
                position=position,
                total=total,
                percent=round(position / total * 100, 2),
            )
        return SessionState(
            id=self.id,
            title=self.deck.title if self.deck else None,
            active_index=self.active_index,
            flipped=self.flipped,
            script_mode=self.script_mode,
            busy=self.busy,
            progress=progress,
            card=(
                render_card(card, flipped=self.flipped, script_mode=self.script_mode)
                if card
                else None
            ),
            created_at=_iso(self.created_at),
            last_activity=_iso(self.last_activity),
        )

    @asynccontextmanager
    async def ingestion(self) -> AsyncIterator["ReviewSession"]:
        """Hold the session for one ingestion; a concurrent one is rejected."""
        if self._lock.locked():
            raise SessionBusyError("An import is already in progress for this session.")
        try:
            async with self._lock:
                yield self
        finally:
            self.touch()


class ReviewManager:
    def __init__(self) -> None:
        self.sessions: Dict[str, ReviewSession] = {}
        self._cleanup_task: Optional[asyncio.Task] = None
        self._idle_seconds: int = 3600
        self._sweep_interval: int = 60

    # Session lifecycle --------------------------------------------------
    def create_session(
        self,
        *,
        deck: Optional[Deck] = None,
        script_mode: ScriptMode = ScriptMode.SIMPLIFIED,
    ) -> ReviewSession:
        session = ReviewSession(id=_short_id(), script_mode=script_mode)
        if deck is not None:
            session.load_deck(deck)
        self.sessions[session.id] = session
        logger.info("Created review session", extra={"session_id": session.id})
        return session

    def get_session(self, session_id: str) -> Optional[ReviewSession]:
        return self.sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        return self.sessions.pop(session_id, None) is not None

    # Cleanup loop -------------------------------------------------------
    def start(self, *, idle_seconds: int = 3600, sweep_interval: int = 60) -> None:
        self._idle_seconds = max(60, int(idle_seconds))
        self._sweep_interval = max(5, int(sweep_interval))
        if self._cleanup_task and not self._cleanup_task.done():
            return
        self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def stop(self) -> None:
        if self._cleanup_task and not self._cleanup_task.done():
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
        self._cleanup_task = None

    def sweep(self, now: Optional[datetime] = None) -> list[str]:
        now = now or _now_utc()
        expired = [
            sid
            for sid, s in self.sessions.items()
            if not s.busy
            and (now - s.last_activity).total_seconds() > self._idle_seconds
        ]
        for sid in expired:
            self.sessions.pop(sid, None)
        if expired:
            logger.info("Swept %d idle review sessions", len(expired))
        return expired

    async def _cleanup_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self._sweep_interval)
                self.sweep()
        except asyncio.CancelledError:
            return


# Singleton manager used by the API layer
review_manager = ReviewManager()
