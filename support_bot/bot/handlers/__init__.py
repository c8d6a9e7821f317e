"""
Bot handlers registration.
"""

from aiogram import Dispatcher

from support_bot.bot.handlers.start import router as start_router
from support_bot.bot.handlers.support import router as support_router


def register_handlers(dp: Dispatcher) -> None:
    """Register all handlers to dispatcher."""
    # Commands first, the catch-all text handler last
    dp.include_router(start_router)
    dp.include_router(support_router)
