"""
Tests for Review Sessions

Tests cover:
- Circular navigation and flip resets
- Script preference toggling
- Deck loading rules
- Session manager lifecycle and busy guard
"""

import asyncio
from datetime import timedelta

import pytest

from hanzimaster.modules.decks.models import Deck
from hanzimaster.modules.review.models import ReviewAction, ScriptMode
from hanzimaster.modules.review.state import (
    EmptyDeckError,
    ReviewManager,
    ReviewSession,
    SessionBusyError,
)


@pytest.fixture
def session(sample_deck):
    s = ReviewSession(id="test")
    s.load_deck(sample_deck)
    return s


class TestNavigation:
    """Test circular next/previous."""

    def test_next_n_times_returns_to_start(self, session):
        n = len(session.deck.cards)
        session.next()
        start = session.active_index
        for _ in range(n):
            session.next()
        assert session.active_index == start

    def test_previous_n_times_returns_to_start(self, session):
        n = len(session.deck.cards)
        for _ in range(n):
            session.previous()
        assert session.active_index == 0

    def test_previous_wraps_to_last(self, session):
        session.previous()
        assert session.active_index == len(session.deck.cards) - 1

    def test_next_wraps_to_first(self, session):
        for _ in range(len(session.deck.cards)):
            session.next()
        assert session.active_index == 0

    @pytest.mark.parametrize("move", ["next", "previous"])
    @pytest.mark.parametrize("flipped", [True, False])
    def test_navigation_resets_flip(self, session, move, flipped):
        session.flipped = flipped
        getattr(session, move)()
        assert session.flipped is False

    def test_navigation_without_deck_is_noop(self):
        s = ReviewSession(id="empty")
        s.next()
        s.previous()
        assert s.active_index == 0
        assert s.active_card is None


class TestFlipAndScript:
    def test_double_flip_restores(self, session):
        before = session.flipped
        session.flip()
        assert session.flipped is not before
        session.flip()
        assert session.flipped is before

    def test_flip_keeps_index(self, session):
        session.next()
        session.flip()
        assert session.active_index == 1

    def test_toggle_script_keeps_index(self, session):
        session.next()
        session.toggle_script()
        assert session.script_mode is ScriptMode.TRADITIONAL
        assert session.active_index == 1
        session.toggle_script()
        assert session.script_mode is ScriptMode.SIMPLIFIED

    def test_apply_dispatches(self, session):
        session.apply(ReviewAction.NEXT)
        session.apply(ReviewAction.FLIP)
        assert (session.active_index, session.flipped) == (1, True)
        session.apply(ReviewAction.PREVIOUS)
        assert (session.active_index, session.flipped) == (0, False)


class TestDeckLoading:
    def test_load_resets_position(self, session, sample_deck):
        session.next()
        session.flip()
        session.load_deck(sample_deck)
        assert session.active_index == 0
        assert session.flipped is False

    def test_load_keeps_script_preference(self, session, sample_deck):
        session.toggle_script()
        session.load_deck(sample_deck)
        assert session.script_mode is ScriptMode.TRADITIONAL

    def test_empty_deck_rejected_and_previous_deck_kept(self, session):
        with pytest.raises(EmptyDeckError):
            session.load_deck(Deck(title="Empty", cards=[]))
        assert session.deck.title == "Fruit Basics"

    def test_clear_deck(self, session):
        session.clear_deck()
        assert session.deck is None
        assert session.to_state().card is None


class TestSessionState:
    def test_progress(self, session):
        session.next()
        state = session.to_state()
        assert state.progress.position == 2
        assert state.progress.total == 3
        assert state.progress.percent == pytest.approx(66.67)

    def test_state_renders_active_card(self, session):
        session.next()
        state = session.to_state()
        assert state.card.card_id == session.deck.cards[1].id
        assert state.card.front.headword == "香蕉"


class TestIngestionGuard:
    def test_concurrent_ingestion_rejected(self, session):
        async def scenario():
            async with session.ingestion():
                assert session.busy
                with pytest.raises(SessionBusyError):
                    async with session.ingestion():
                        pass
            assert not session.busy

        asyncio.run(scenario())

    def test_failed_ingestion_releases_session(self, session):
        async def scenario():
            with pytest.raises(RuntimeError):
                async with session.ingestion():
                    raise RuntimeError("boom")
            assert not session.busy

        asyncio.run(scenario())
        assert session.deck.title == "Fruit Basics"

    def test_failed_ingestion_counts_as_activity(self, session):
        stale = session.last_activity - timedelta(hours=2)
        session.last_activity = stale

        async def scenario():
            with pytest.raises(RuntimeError):
                async with session.ingestion():
                    raise RuntimeError("fetch failed")

        asyncio.run(scenario())
        assert session.last_activity > stale


class TestReviewManager:
    def test_create_get_delete(self, sample_deck):
        manager = ReviewManager()
        s = manager.create_session(deck=sample_deck)
        assert manager.get_session(s.id) is s
        assert manager.delete_session(s.id)
        assert manager.get_session(s.id) is None
        assert not manager.delete_session(s.id)

    def test_sweep_removes_idle_sessions(self):
        manager = ReviewManager()
        idle = manager.create_session()
        fresh = manager.create_session()
        idle.last_activity -= timedelta(hours=2)
        removed = manager.sweep()
        assert removed == [idle.id]
        assert manager.get_session(fresh.id) is fresh

    def test_start_and_stop(self):
        async def scenario():
            manager = ReviewManager()
            manager.start(idle_seconds=60, sweep_interval=5)
            assert manager._cleanup_task is not None
            await manager.stop()
            assert manager._cleanup_task is None

        asyncio.run(scenario())
