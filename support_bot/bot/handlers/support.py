"""
Message handler - runs every text message through the support pipeline.
"""

import logging

from aiogram import Bot, F, Router
from aiogram.types import Message

from support_bot.core.support import get_support_pipeline
from support_bot.db.inquiries import InquiryRecord, InquiryRepository

router = Router(name="support")
logger = logging.getLogger(__name__)

inquiries = InquiryRepository()


async def get_display_name(bot: Bot, user_id: int) -> str:
    """Profile display name; empty if the lookup fails."""
    try:
        chat = await bot.get_chat(user_id)
    except Exception as e:
        logger.warning(f"Profile lookup failed for {user_id}: {e}")
        return ""
    return chat.full_name or chat.username or ""


@router.message(F.text)
async def handle_message(message: Message, bot: Bot) -> None:
    """
    Handle customer messages.
    Builds the reply, logs the inquiry, then sends the reply.
    """
    user_query = message.text.strip()

    if not user_query:
        return

    user_id = str(message.from_user.id)
    user_name = await get_display_name(bot, message.from_user.id)

    logger.info(f"Received from {user_id} ({user_name}): {user_query[:50]}")

    await bot.send_chat_action(chat_id=message.chat.id, action="typing")

    reply = await get_support_pipeline().handle(user_id, user_query)
    context = reply.context

    try:
        await inquiries.append_inquiry_record(
            InquiryRecord(
                user_id=user_id,
                user_name=user_name,
                user_message=user_query,
                reply=reply.text,
                order_number=context.order_number if context else None,
                category=context.category if context else None,
                requires_human_review=context.requires_human_review if context else False,
            )
        )
    except Exception as e:
        logger.error(f"Failed to save inquiry for {user_id}: {e}", exc_info=True)

    try:
        await message.answer(reply.text)
    except Exception as e:
        logger.error(f"Failed to deliver reply to {user_id}: {e}", exc_info=True)
