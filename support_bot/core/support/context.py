"""
Context builder - derives per-message facts for the dialogue engine.
"""

import logging
from typing import TYPE_CHECKING, Optional

from support_bot.core.support.classifier import classify
from support_bot.core.support.escalation import should_escalate
from support_bot.core.support.extractors import extract_customer_name, extract_order_number
from support_bot.core.support.models import ConversationStage, Context, PastInquiry
from support_bot.core.support.resolver import CommerceUnavailableError, OrderResolver
from support_bot.core.support.state_store import ConversationStore

if TYPE_CHECKING:
    from support_bot.db.inquiries import InquiryRepository

logger = logging.getLogger(__name__)

# Stages in which a name in the message is looked up
NAME_LOOKUP_STAGES = (ConversationStage.WAITING_FOR_NAME, ConversationStage.NAME_NOT_FOUND)


class ContextBuilder:
    """Builds a Context for each incoming message."""

    def __init__(
        self,
        resolver: OrderResolver,
        store: ConversationStore,
        history: Optional["InquiryRepository"] = None,
    ):
        self.resolver = resolver
        self.store = store
        self.history = history

    async def build(self, user_id: str, message: str) -> Context:
        """
        Build context for a message.

        Args:
            user_id: Messaging platform user ID
            message: Message text

        Returns:
            Context with order data, category, escalation flag and history
        """
        context = Context(user_id=user_id)

        context.order_number = extract_order_number(message)
        if context.order_number:
            try:
                context.order_info = await self.resolver.find_order(context.order_number)
            except CommerceUnavailableError:
                context.order_lookup_failed = True

        context.customer_name = extract_customer_name(message)
        context.category = classify(message)
        context.requires_human_review = should_escalate(message, context)
        context.customer_history = await self._load_history(user_id)

        if context.customer_name and not context.order_number:
            state = await self.store.get(user_id)
            if state.stage in NAME_LOOKUP_STAGES:
                context.possible_orders = await self.resolver.resolve_by_customer_name(
                    context.customer_name
                )

        logger.debug(
            f"Context for {user_id}: category={context.category}, "
            f"order={context.order_number}, name={context.customer_name}, "
            f"review={context.requires_human_review}"
        )
        return context

    async def _load_history(self, user_id: str) -> list[PastInquiry]:
        if self.history is None:
            return []
        try:
            return await self.history.query_inquiry_history(user_id)
        except Exception as e:
            logger.warning(f"Could not load inquiry history for {user_id}: {e}")
            return []
