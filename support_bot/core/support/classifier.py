"""
Keyword based message classification.
"""

from support_bot.core.support.models import DEFAULT_CATEGORY, SHIPPING_CATEGORY


CANCELLATION_CATEGORY = "キャンセル・返品"
DELIVERY_INFO_CATEGORY = "送料・配送方法"
INVENTORY_CATEGORY = "在庫"
PAYMENT_CATEGORY = "支払い"
ORDER_CATEGORY = "注文確認"
PRODUCT_CATEGORY = "商品"
GREETING_CATEGORY = "営業時間・挨拶"
COMPLAINT_CATEGORY = "クレーム"

# Checked top to bottom, first category with a matching trigger wins
CATEGORY_KEYWORDS: list[tuple[str, list[str]]] = [
    (CANCELLATION_CATEGORY, ["キャンセル", "返品", "返金", "取り消し", "取消", "交換"]),
    (DELIVERY_INFO_CATEGORY, ["送料", "配送料", "配送方法"]),
    (SHIPPING_CATEGORY, ["配送", "発送", "出荷", "届", "到着", "追跡", "荷物"]),
    (INVENTORY_CATEGORY, ["在庫", "入荷", "品切れ", "売り切れ", "売切"]),
    (PAYMENT_CATEGORY, ["支払", "決済", "クレジット", "カード", "振込", "請求", "領収書"]),
    (ORDER_CATEGORY, ["注文", "オーダー", "購入履歴"]),
    (COMPLAINT_CATEGORY, ["クレーム", "苦情", "不満"]),
    (PRODUCT_CATEGORY, ["商品", "サイズ", "素材", "使い方", "色違い"]),
    (GREETING_CATEGORY, ["営業時間", "こんにちは", "こんばんは", "おはよう", "ありがとう"]),
]

CATEGORIES = [category for category, _ in CATEGORY_KEYWORDS] + [DEFAULT_CATEGORY]


def classify(message: str) -> str:
    """Return the first category whose trigger occurs in the message."""
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in message for keyword in keywords):
            return category
    return DEFAULT_CATEGORY
