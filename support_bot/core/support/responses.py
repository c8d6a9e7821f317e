"""
Canned replies, per-category guidance and fallback texts.
"""

from typing import Callable

from support_bot.config import settings
from support_bot.core.support.classifier import (
    CANCELLATION_CATEGORY,
    COMPLAINT_CATEGORY,
    DELIVERY_INFO_CATEGORY,
    GREETING_CATEGORY,
    INVENTORY_CATEGORY,
    ORDER_CATEGORY,
    PAYMENT_CATEGORY,
    PRODUCT_CATEGORY,
)
from support_bot.core.support.models import SHIPPING_CATEGORY, Context
from support_bot.core.support.prompts import INVENTORY_NOTIFICATION_HINT, wants_restock_notification


ASK_NAME_MESSAGE = (
    "配送状況をお調べいたします📦\n"
    "ご注文時のお名前（フルネーム）を教えていただけますか？\n"
    "注文番号がお分かりの場合は「#1234」の形式でお送りください。"
)

NAME_NOT_FOUND_TEMPLATE = (
    "申し訳ございません。「{name}」様のご注文が見つかりませんでした。\n"
    "お名前をもう一度ご確認いただくか、注文番号（例: #1234）をお知らせください。"
)

ORDER_NOT_FOUND_TEMPLATE = (
    "申し訳ございません。注文番号 #{order_number} のご注文が見つかりませんでした。\n"
    "番号に誤りがないかご確認のうえ、もう一度お送りください。"
)

ORDER_LOOKUP_FAILED_MESSAGE = (
    "申し訳ございません。ただいまご注文情報を確認できません。\n"
    "しばらくしてから、もう一度注文番号をお送りください。"
)

CLARIFICATION_MESSAGE = (
    "お問い合わせありがとうございます。\n"
    "確認のため、以下の情報を教えていただけますか？\n"
    "・注文番号（例: #1234）\n"
    "・商品名\n"
    "・ご注文のおおよその時期"
)

LOYALTY_MESSAGE = "いつもご利用いただきありがとうございます😊"

SYSTEM_ERROR_MESSAGE = (
    "申し訳ございません。システムに一時的な問題が発生しています。"
    "しばらくしてからお試しください。"
)

# Phrases in an LLM answer that hand the customer over to staff
HANDOFF_PHRASES = ["担当者", "スタッフに確認", "人間のスタッフ", "折り返しご連絡"]


def escalation_notice() -> str:
    """Notice appended when a message goes to human review."""
    return (
        "⚠️ こちらのお問い合わせは担当スタッフが確認のうえ、改めてご連絡いたします。\n"
        f"お急ぎの場合: {settings.support_phone} / {settings.support_email}"
    )


def _delivery(context: Context, message: str) -> str:
    return (
        "配送についてのご案内です🚚\n"
        "送料は全国一律500円、5,000円以上のご購入で送料無料です。\n"
        "通常、ご注文から2-3営業日で発送いたします。\n"
        "ご注文の配送状況は、注文番号（例: #1234）またはご注文時のお名前をお送りいただければお調べします。"
    )


def _inventory(context: Context, message: str) -> str:
    text = "在庫確認をご希望の商品名を教えていただけますか？確認させていただきます。"
    if wants_restock_notification(message):
        text += "\n" + INVENTORY_NOTIFICATION_HINT
    return text


def _greeting(context: Context, message: str) -> str:
    if "ありがとう" in message:
        return "こちらこそありがとうございます！他にご不明な点がございましたらお気軽にお申し付けください。"
    return (
        "こんにちは！本日はどのようなご用件でしょうか？\n"
        f"営業時間は{settings.business_hours}です。"
    )


def _cancellation(context: Context, message: str) -> str:
    text = (
        "キャンセル・返品についてのご案内です。\n"
        "商品到着後7日以内でしたら返品を承っております。\n"
        "発送前のご注文はキャンセルが可能です。"
    )
    if context.order_number is None:
        text += "\n対象のご注文番号（例: #1234）をお知らせください。"
    return text


def _payment(context: Context, message: str) -> str:
    return (
        "お支払いについてのご案内です💳\n"
        "クレジットカード、コンビニ払い、銀行振込がご利用いただけます。\n"
        "銀行振込の場合、ご入金確認後の発送となります。"
    )


def _product(context: Context, message: str) -> str:
    return (
        "商品についてのお問い合わせありがとうございます。\n"
        "お調べしますので、商品名または商品ページのURLを教えていただけますか？"
    )


CATEGORY_RESPONSES: dict[str, Callable[[Context, str], str]] = {
    SHIPPING_CATEGORY: _delivery,
    DELIVERY_INFO_CATEGORY: _delivery,
    INVENTORY_CATEGORY: _inventory,
    GREETING_CATEGORY: _greeting,
    CANCELLATION_CATEGORY: _cancellation,
    PAYMENT_CATEGORY: _payment,
    PRODUCT_CATEGORY: _product,
}

# Used when the LLM call fails
FALLBACK_RESPONSES: dict[str, str] = {
    SHIPPING_CATEGORY: "配送状況の確認には、注文番号（例: #1234）またはご注文時のお名前をお知らせください。",
    DELIVERY_INFO_CATEGORY: "送料は全国一律500円、5,000円以上のご購入で送料無料です。",
    ORDER_CATEGORY: "ご注文内容の確認には、注文番号（例: #1234）をお知らせください。",
    INVENTORY_CATEGORY: "在庫確認をご希望の商品名を教えていただけますか？",
    CANCELLATION_CATEGORY: "キャンセル・返品のご依頼は担当スタッフが確認いたします。注文番号をお知らせください。",
    PAYMENT_CATEGORY: "お支払いに関するお問い合わせは担当スタッフが確認いたします。少々お待ちください。",
    COMPLAINT_CATEGORY: "ご不便をおかけして申し訳ございません。担当スタッフが確認のうえご連絡いたします。",
}


def fallback_response(category: str) -> str:
    """Fallback text for a category, or a generic clarification request."""
    return FALLBACK_RESPONSES.get(category, CLARIFICATION_MESSAGE)


def contains_handoff(text: str) -> bool:
    return any(phrase in text for phrase in HANDOFF_PHRASES)
