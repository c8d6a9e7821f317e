"""
Telegram bot initialization and configuration.
"""

from aiogram import Bot, Dispatcher

from support_bot.config import settings


def create_bot() -> Bot:
    """Create configured Telegram bot instance."""
    # Replies are plain text: they echo customer names and product titles
    return Bot(token=settings.telegram_bot_token)


def create_dispatcher() -> Dispatcher:
    """Create dispatcher."""
    return Dispatcher()


# Global instances
bot: Bot | None = None
dp: Dispatcher | None = None


def get_bot() -> Bot:
    """Get or create bot instance."""
    global bot
    if bot is None:
        bot = create_bot()
    return bot


def get_dispatcher() -> Dispatcher:
    """Get or create dispatcher instance."""
    global dp
    if dp is None:
        dp = create_dispatcher()
    return dp
