"""
Tests for InMemoryConversationStore.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from support_bot.core.support.models import SHIPPING_CATEGORY, ConversationStage
from support_bot.core.support.state_store import InMemoryConversationStore


class FakeClock:
    """Manually advanced clock."""

    def __init__(self):
        self.now = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class TestInMemoryConversationStore:
    """Test conversation state storage."""

    @pytest.mark.asyncio
    async def test_get_missing_returns_initial(self, store):
        state = await store.get("nobody")

        assert state.stage == ConversationStage.INITIAL
        assert state.possible_orders == []
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_set_then_get(self, store):
        await store.set("u1", stage=ConversationStage.WAITING_FOR_NAME, intent=SHIPPING_CATEGORY)

        state = await store.get("u1")
        assert state.stage == ConversationStage.WAITING_FOR_NAME
        assert state.intent == SHIPPING_CATEGORY
        assert state.updated_at is not None

    @pytest.mark.asyncio
    async def test_set_replaces_previous_record(self, store):
        await store.set("u1", stage=ConversationStage.WAITING_FOR_NAME, intent=SHIPPING_CATEGORY)
        await store.set("u1", stage=ConversationStage.NAME_NOT_FOUND, attempted_name="山田")

        state = await store.get("u1")
        assert state.stage == ConversationStage.NAME_NOT_FOUND
        assert state.attempted_name == "山田"
        assert state.intent is None

    @pytest.mark.asyncio
    async def test_users_are_isolated(self, store):
        await store.set("u1", stage=ConversationStage.WAITING_FOR_NAME)

        assert (await store.get("u2")).stage == ConversationStage.INITIAL

    @pytest.mark.asyncio
    async def test_delete(self, store):
        await store.set("u1", stage=ConversationStage.WAITING_FOR_NAME)
        await store.delete("u1")

        assert (await store.get("u1")).stage == ConversationStage.INITIAL
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_untouched_state_expires_after_ttl(self):
        clock = FakeClock()
        store = InMemoryConversationStore(ttl=timedelta(minutes=30), clock=clock)
        await store.set("u1", stage=ConversationStage.WAITING_FOR_NAME)

        clock.advance(minutes=29)
        assert (await store.get("u1")).stage == ConversationStage.WAITING_FOR_NAME

        clock.advance(minutes=1)
        state = await store.get("u1")
        assert state.stage == ConversationStage.INITIAL
        assert state.updated_at is None
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_touch_extends_lifetime(self):
        clock = FakeClock()
        store = InMemoryConversationStore(ttl=timedelta(minutes=30), clock=clock)
        await store.set("u1", stage=ConversationStage.WAITING_FOR_NAME)

        clock.advance(minutes=20)
        await store.set("u1", stage=ConversationStage.NAME_NOT_FOUND)
        clock.advance(minutes=20)

        assert (await store.get("u1")).stage == ConversationStage.NAME_NOT_FOUND

    @pytest.mark.asyncio
    async def test_expiry_timer_removes_record(self):
        store = InMemoryConversationStore(ttl=timedelta(seconds=0.05))
        await store.set("u1", stage=ConversationStage.WAITING_FOR_NAME)

        await asyncio.sleep(0.15)

        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_old_timer_does_not_delete_newer_record(self):
        store = InMemoryConversationStore(ttl=timedelta(seconds=0.3))
        await store.set("u1", stage=ConversationStage.WAITING_FOR_NAME)

        await asyncio.sleep(0.2)
        await store.set("u1", stage=ConversationStage.WAITING_FOR_ORDER_SELECTION)
        # First record's timer would have fired by now
        await asyncio.sleep(0.2)

        assert len(store) == 1
        assert (await store.get("u1")).stage == ConversationStage.WAITING_FOR_ORDER_SELECTION

        await asyncio.sleep(0.3)
        assert len(store) == 0
