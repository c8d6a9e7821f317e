"""
Text formatting for order status and order candidate lists.
"""

from datetime import datetime
from typing import Optional

from support_bot.core.support.models import OrderSummary


FULFILLMENT_STATUS_LABELS = {
    "fulfilled": "発送済み",
    "partial": "一部発送済み",
    "restocked": "返品済み",
    "pending": "保留中",
    "unfulfilled": "未発送",
}
DEFAULT_STATUS_LABEL = "確認中"
DEFAULT_TRACKING_NUMBER = "準備中"


def format_date(value: Optional[datetime]) -> str:
    """Format date as 2024/1/15."""
    if value is None:
        return "不明"
    return f"{value.year}/{value.month}/{value.day}"


def status_label(status: Optional[str]) -> str:
    """Human-readable fulfillment status."""
    if status is None:
        return DEFAULT_STATUS_LABEL
    return FULFILLMENT_STATUS_LABELS.get(status, DEFAULT_STATUS_LABEL)


def format_order_status(order: OrderSummary) -> str:
    """Format the order status reply."""
    lines = [
        "📦 ご注文状況のお知らせ",
        "",
        f"注文番号: #{order.order_number}",
        f"注文日: {format_date(order.created_at)}",
    ]
    if order.customer_name:
        lines.append(f"お客様名: {order.customer_name} 様")

    if order.line_items:
        lines.append("")
        lines.append("ご注文商品:")
        for item in order.line_items:
            lines.append(f"・{item.name} × {item.quantity}")

    lines.append("")
    lines.append(f"配送状況: {status_label(order.fulfillment_status)}")

    if order.tracking:
        tracking = order.tracking[0]
        lines.append("")
        lines.append("【配送情報】")
        if tracking.carrier:
            lines.append(f"配送業者: {tracking.carrier}")
        lines.append(f"追跡番号: {tracking.number or DEFAULT_TRACKING_NUMBER}")
        if tracking.url:
            lines.append(f"追跡URL: {tracking.url}")
        if tracking.shipped_at:
            lines.append(f"発送日: {format_date(tracking.shipped_at)}")
    elif order.fulfillment_status is None:
        lines.append("")
        lines.append("現在、発送の準備を進めております。発送完了まで今しばらくお待ちください。")

    return "\n".join(lines)


def format_order_candidates(customer_name: str, orders: list[OrderSummary]) -> str:
    """Format numbered list of orders for the user to pick from."""
    lines = [
        f"{customer_name} 様のご注文が{len(orders)}件見つかりました。",
        "確認したいご注文の番号を数字で送信してください。",
        "",
    ]
    for i, order in enumerate(orders, 1):
        item = order.first_item_name or "商品情報なし"
        overflow = len(order.line_items) - 1
        if overflow > 0:
            item += f" 他{overflow}点"
        lines.append(
            f"{i}. #{order.order_number}（{format_date(order.created_at)}）{item}"
        )
    return "\n".join(lines)
