"""
Dialogue engine - multi-turn state machine for shipping inquiries
plus category based replies for everything else.
"""

import logging
import re
import unicodedata
from typing import Optional

from support_bot.config import settings
from support_bot.core.support.formatting import format_order_candidates, format_order_status
from support_bot.core.support.models import (
    SHIPPING_CATEGORY,
    ConversationStage,
    ConversationState,
    Context,
)
from support_bot.core.support.prompts import build_system_context
from support_bot.core.support.responses import (
    ASK_NAME_MESSAGE,
    CATEGORY_RESPONSES,
    CLARIFICATION_MESSAGE,
    LOYALTY_MESSAGE,
    NAME_NOT_FOUND_TEMPLATE,
    ORDER_LOOKUP_FAILED_MESSAGE,
    ORDER_NOT_FOUND_TEMPLATE,
    contains_handoff,
    escalation_notice,
    fallback_response,
)
from support_bot.core.support.state_store import ConversationStore
from support_bot.integrations.llm import BaseLLM, get_default_llm

logger = logging.getLogger(__name__)

SELECTION_PATTERN = re.compile(r"\s*([0-9]+)\s*番?\s*")


def parse_selection(message: str, count: int) -> Optional[int]:
    """Parse a 1-based choice ("2", "２番"); returns a 0-based index or None."""
    match = SELECTION_PATTERN.fullmatch(unicodedata.normalize("NFKC", message))
    if not match:
        return None
    number = int(match.group(1))
    if 1 <= number <= count:
        return number - 1
    return None


class DialogueEngine:
    """
    Produces the reply for a built Context.

    Shipping flow stages:
        initial -> waiting_for_name -> (initial | waiting_for_order_selection | name_not_found)
        waiting_for_order_selection -> initial (valid choice only)
    """

    def __init__(self, store: ConversationStore, llm: BaseLLM | None = None):
        self.store = store
        self._llm = llm

    @property
    def llm(self) -> BaseLLM:
        if self._llm is None:
            self._llm = get_default_llm()
        return self._llm

    async def respond(self, context: Context, message: str) -> str:
        """
        Generate reply for the message and advance the user's stage.

        Args:
            context: Context built for this message
            message: Original message text

        Returns:
            Reply text, never raises for collaborator failures
        """
        state = await self.store.get(context.user_id)

        body, canned = await self._respond(context, message, state)

        if canned and context.customer_history:
            body += f"\n\n{LOYALTY_MESSAGE}"
        if context.requires_human_review:
            body += f"\n\n{escalation_notice()}"
        return body

    async def _respond(
        self, context: Context, message: str, state: ConversationState
    ) -> tuple[str, bool]:
        """Returns (body, whether a canned category reply was used)."""
        if context.order_info is not None:
            if state.stage != ConversationStage.INITIAL:
                await self.store.delete(context.user_id)
            return format_order_status(context.order_info), False

        if context.order_lookup_failed:
            return ORDER_LOOKUP_FAILED_MESSAGE, False

        if context.order_number:
            return ORDER_NOT_FOUND_TEMPLATE.format(order_number=context.order_number), False

        if context.category == SHIPPING_CATEGORY or state.intent == SHIPPING_CATEGORY:
            reply = await self._advance_shipping_flow(context, message, state)
            if reply is not None:
                return reply, False

        handler = CATEGORY_RESPONSES.get(context.category)
        if handler is not None:
            return handler(context, message), True

        return await self.generate_generic(context, message), False

    async def _advance_shipping_flow(
        self, context: Context, message: str, state: ConversationState
    ) -> Optional[str]:
        user_id = context.user_id
        stage = state.stage

        if stage == ConversationStage.INITIAL:
            await self.store.set(
                user_id,
                stage=ConversationStage.WAITING_FOR_NAME,
                intent=SHIPPING_CATEGORY,
            )
            logger.info(f"User {user_id}: asking for customer name")
            return ASK_NAME_MESSAGE

        if stage in (ConversationStage.WAITING_FOR_NAME, ConversationStage.NAME_NOT_FOUND):
            if not context.customer_name:
                return None

            name = context.customer_name
            orders = context.possible_orders or []

            if len(orders) == 1:
                await self.store.delete(user_id)
                logger.info(f"User {user_id}: single order found for {name!r}")
                return format_order_status(orders[0])

            if len(orders) > 1:
                await self.store.set(
                    user_id,
                    stage=ConversationStage.WAITING_FOR_ORDER_SELECTION,
                    possible_orders=list(orders),
                    customer_name=name,
                    intent=SHIPPING_CATEGORY,
                )
                logger.info(f"User {user_id}: {len(orders)} orders found for {name!r}")
                return format_order_candidates(name, orders)

            await self.store.set(
                user_id,
                stage=ConversationStage.NAME_NOT_FOUND,
                attempted_name=name,
                intent=SHIPPING_CATEGORY,
            )
            logger.info(f"User {user_id}: no orders found for {name!r}")
            return NAME_NOT_FOUND_TEMPLATE.format(name=name)

        if stage == ConversationStage.WAITING_FOR_ORDER_SELECTION:
            index = parse_selection(message, len(state.possible_orders))
            if index is None:
                # Stage stays as is
                if context.category != SHIPPING_CATEGORY and context.category in CATEGORY_RESPONSES:
                    return None
                return await self.generate_generic(context, message)

            await self.store.delete(user_id)
            logger.info(f"User {user_id}: selected order {index + 1}")
            return format_order_status(state.possible_orders[index])

        return None

    async def generate_generic(self, context: Context, message: str) -> str:
        """Ask the LLM; category fallback text if it fails."""
        try:
            response = await self.llm.generate(
                prompt=message,
                system_prompt=build_system_context(context, message),
                temperature=settings.llm_temperature,
                max_tokens=settings.llm_max_tokens,
            )
        except Exception as e:
            logger.error(f"LLM generation error: {e}", exc_info=True)
            return fallback_response(context.category)

        text = (response.content or "").strip()
        if not text:
            return fallback_response(context.category)

        if contains_handoff(text) and not context.requires_human_review:
            return CLARIFICATION_MESSAGE
        return text
