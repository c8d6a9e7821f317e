"""
Per-user conversation state storage with inactivity expiry.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from support_bot.core.support.models import ConversationState

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationStore(ABC):
    """Abstract key-value store for conversation state, keyed by user id."""

    @abstractmethod
    async def get(self, user_id: str) -> ConversationState:
        """Get state for user; a fresh `initial` state if there is none."""
        pass

    @abstractmethod
    async def set(self, user_id: str, **patch: Any) -> ConversationState:
        """Replace the user's state with a fresh record updated by `patch`."""
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """Drop the user's state."""
        pass


class InMemoryConversationStore(ConversationStore):
    """
    Process-local conversation store.

    Every `set` cancels the pending expiry of the user's previous record and
    schedules a new one, so an old timer never removes a newer record.
    Records older than the TTL are also treated as absent on `get`.
    No locking: concurrent writes for the same user are last-writer-wins.
    """

    def __init__(
        self,
        ttl: timedelta = timedelta(minutes=30),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.ttl = ttl
        self._clock = clock
        self._states: dict[str, ConversationState] = {}
        self._timers: dict[str, asyncio.TimerHandle] = {}
        self._generations: dict[str, int] = {}

    async def get(self, user_id: str) -> ConversationState:
        state = self._states.get(user_id)
        if state is None:
            return ConversationState()

        if state.updated_at is not None and self._clock() - state.updated_at >= self.ttl:
            logger.debug(f"Conversation state for {user_id} is stale, dropping")
            self._drop(user_id)
            return ConversationState()

        return state

    async def set(self, user_id: str, **patch: Any) -> ConversationState:
        state = ConversationState(**patch)
        state.updated_at = self._clock()

        self._states[user_id] = state
        generation = self._generations.get(user_id, 0) + 1
        self._generations[user_id] = generation
        self._schedule_expiry(user_id, generation)

        logger.debug(f"Conversation state for {user_id} -> {state.stage.value}")
        return state

    async def delete(self, user_id: str) -> None:
        self._drop(user_id)

    def __len__(self) -> int:
        return len(self._states)

    def _schedule_expiry(self, user_id: str, generation: int) -> None:
        previous = self._timers.pop(user_id, None)
        if previous is not None:
            previous.cancel()

        loop = asyncio.get_running_loop()
        self._timers[user_id] = loop.call_later(
            self.ttl.total_seconds(), self._expire, user_id, generation
        )

    def _expire(self, user_id: str, generation: int) -> None:
        if self._generations.get(user_id) != generation:
            return
        logger.debug(f"Conversation state for {user_id} expired")
        self._drop(user_id)

    def _drop(self, user_id: str) -> None:
        timer = self._timers.pop(user_id, None)
        if timer is not None:
            timer.cancel()
        self._states.pop(user_id, None)
        self._generations.pop(user_id, None)
