"""
Support pipeline - builds message context and runs the dialogue engine.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from support_bot.config import settings
from support_bot.core.support.context import ContextBuilder
from support_bot.core.support.dialogue import DialogueEngine
from support_bot.core.support.models import Context, ConversationStage, OrderSummary
from support_bot.core.support.resolver import OrderResolver
from support_bot.core.support.responses import SYSTEM_ERROR_MESSAGE
from support_bot.core.support.state_store import ConversationStore, InMemoryConversationStore

logger = logging.getLogger(__name__)


@dataclass
class SupportReply:
    """Reply for a message together with the context it was built from."""

    text: str
    context: Context | None


class SupportPipeline:
    """
    Entry point of the support core.

    Usage:
        pipeline = SupportPipeline(builder, engine)
        reply = await pipeline.handle("user-1", "#1001 の配送状況は？")
        print(reply.text)
    """

    def __init__(self, builder: ContextBuilder, engine: DialogueEngine):
        self.builder = builder
        self.engine = engine

    @property
    def store(self) -> ConversationStore:
        return self.engine.store

    async def handle(self, user_id: str, message: str) -> SupportReply:
        """Process a message; always returns a reply."""
        context = None
        try:
            context = await self.builder.build(user_id, message)
            text = await self.engine.respond(context, message)
        except Exception as e:
            logger.error(f"Support pipeline error for {user_id}: {e}", exc_info=True)
            return SupportReply(text=SYSTEM_ERROR_MESSAGE, context=context)

        return SupportReply(text=text, context=context)

    async def reset(self, user_id: str) -> None:
        """Forget the user's conversation stage."""
        await self.store.delete(user_id)


# Singleton instance
_pipeline: SupportPipeline | None = None


def get_support_pipeline() -> SupportPipeline:
    """Get support pipeline singleton wired to the configured backends."""
    global _pipeline
    if _pipeline is None:
        from support_bot.db.inquiries import InquiryRepository
        from support_bot.integrations.commerce import get_commerce_client

        store = InMemoryConversationStore(
            ttl=timedelta(minutes=settings.conversation_ttl_minutes)
        )
        resolver = OrderResolver(
            get_commerce_client(), max_candidates=settings.max_name_candidates
        )
        builder = ContextBuilder(resolver, store, history=InquiryRepository())
        _pipeline = SupportPipeline(builder, DialogueEngine(store))
    return _pipeline


__all__ = [
    "Context",
    "ContextBuilder",
    "ConversationStage",
    "ConversationStore",
    "DialogueEngine",
    "InMemoryConversationStore",
    "OrderResolver",
    "OrderSummary",
    "SupportPipeline",
    "SupportReply",
    "get_support_pipeline",
]
