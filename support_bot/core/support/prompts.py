"""
Prompts for the generic LLM responder.
"""

from support_bot.core.support.formatting import format_date, status_label
from support_bot.core.support.models import Context, OrderSummary

SYSTEM_PROMPT = """あなたは親切なオンラインショップのカスタマーサポートAIです。
以下のルールに従って返答してください：
- 丁寧で親しみやすい言葉遣い
- 絵文字を適度に使用（1-2個程度）
- 簡潔でわかりやすい説明
- 注文情報がある場合は必ず含める
- 不明な点は素直に認め、人間のスタッフに確認することを提案

問い合わせ種別: {category}
{customer_context}{order_context}{inventory_context}"""

ORDER_CONTEXT_TEMPLATE = """
注文情報:
- 注文番号: #{order_number}
- 状態: {status}
- 注文日: {created_at}
- 商品数: {item_count}点
- 配送先: {city}
{tracking}"""

INVENTORY_NOTIFICATION_HINT = "在庫通知の設定も可能です。商品名または商品URLを教えてください。"


def format_order_context(order: OrderSummary) -> str:
    """Format order facts for the system prompt."""
    tracking = ""
    if order.tracking and order.tracking[0].number:
        tracking = f"- 追跡番号: {order.tracking[0].number}\n"

    return ORDER_CONTEXT_TEMPLATE.format(
        order_number=order.order_number,
        status=status_label(order.fulfillment_status),
        created_at=format_date(order.created_at),
        item_count=len(order.line_items),
        city=order.shipping_address.city if order.shipping_address and order.shipping_address.city else "",
        tracking=tracking,
    )


def wants_restock_notification(message: str) -> bool:
    return "在庫" in message and "通知" in message


def build_system_context(context: Context, message: str) -> str:
    """Build system prompt from the message context."""
    customer_context = ""
    if context.customer_history:
        customer_context = f"過去の問い合わせ: {len(context.customer_history)}件（リピーターのお客様）\n"

    order_context = format_order_context(context.order_info) if context.order_info else ""
    inventory_context = f"\n{INVENTORY_NOTIFICATION_HINT}" if wants_restock_notification(message) else ""

    return SYSTEM_PROMPT.format(
        category=context.category,
        customer_context=customer_context,
        order_context=order_context,
        inventory_context=inventory_context,
    )
