"""
Command handlers: /start, /help, /reset.
"""

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from support_bot.config import settings
from support_bot.core.support import get_support_pipeline

router = Router(name="start")


WELCOME_MESSAGE = """👋 こんにちは！
オンラインショップのカスタマーサポートです。

こんなことをお手伝いできます:
・配送状況の確認（例: 「#1234 の配送状況は？」）
・在庫のお問い合わせ
・キャンセル・返品のご相談
・お支払い方法のご案内

注文番号がわからない場合は、ご注文時のお名前でもお調べできます。"""


HELP_MESSAGE = f"""🤖 ご利用方法

・注文番号（#1234）を送ると、ご注文の状況をお知らせします
・「発送について教えて」と送ると、お名前からご注文をお探しします
・複数のご注文が見つかった場合は、番号（1, 2, ...）で選んでください

コマンド:
/reset — 会話をはじめからやり直す
/help — このヘルプ

営業時間: {settings.business_hours}
お問い合わせ: {settings.support_phone} / {settings.support_email}"""


@router.message(CommandStart())
async def handle_start(message: Message) -> None:
    """Handle /start command."""
    await message.answer(WELCOME_MESSAGE)


@router.message(Command("help"))
async def handle_help(message: Message) -> None:
    """Handle /help command."""
    await message.answer(HELP_MESSAGE)


@router.message(Command("reset"))
async def handle_reset(message: Message) -> None:
    """Reset conversation stage."""
    await get_support_pipeline().reset(str(message.from_user.id))
    await message.answer("🔄 会話をリセットしました。ご用件をお送りください。")
