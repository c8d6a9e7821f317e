"""
Tests for order status and candidate list formatting.
"""

from datetime import datetime, timezone

from support_bot.core.support.formatting import (
    format_order_candidates,
    format_order_status,
    status_label,
)
from support_bot.core.support.models import LineItem, OrderSummary, TrackingInfo


def make_order(number="1001", fulfillment_status=None, tracking=(), items=("Tシャツ",), day=15):
    return OrderSummary(
        id=number,
        order_number=number,
        fulfillment_status=fulfillment_status,
        created_at=datetime(2024, 1, day, 12, 0, tzinfo=timezone.utc),
        line_items=tuple(LineItem(name=n, quantity=1, price="1000") for n in items),
        customer_name="山田 太郎",
        tracking=tuple(tracking),
    )


class TestStatusLabel:
    """Test status_label()."""

    def test_known_status(self):
        assert status_label("fulfilled") == "発送済み"
        assert status_label("partial") == "一部発送済み"

    def test_unknown_and_null(self):
        assert status_label(None) == "確認中"
        assert status_label("on_hold") == "確認中"


class TestFormatOrderStatus:
    """Test format_order_status()."""

    def test_header(self):
        text = format_order_status(make_order())

        assert "注文番号: #1001" in text
        assert "注文日: 2024/1/15" in text
        assert "お客様名: 山田 太郎 様" in text

    def test_tracking_block(self):
        tracking = TrackingInfo(
            number="1234-5678",
            carrier="佐川急便",
            url="https://track.example.com/12345678",
            shipped_at=datetime(2024, 1, 16, tzinfo=timezone.utc),
        )
        text = format_order_status(make_order(fulfillment_status="fulfilled", tracking=[tracking]))

        assert "配送状況: 発送済み" in text
        assert "配送業者: 佐川急便" in text
        assert "追跡番号: 1234-5678" in text
        assert "追跡URL: https://track.example.com/12345678" in text
        assert "発送日: 2024/1/16" in text

    def test_tracking_number_pending(self):
        text = format_order_status(
            make_order(fulfillment_status="partial", tracking=[TrackingInfo(carrier="ヤマト運輸")])
        )

        assert "追跡番号: 準備中" in text
        assert "追跡URL" not in text

    def test_not_yet_shipped(self):
        text = format_order_status(make_order())

        assert "配送状況: 確認中" in text
        assert "発送の準備を進めております" in text
        assert "追跡番号" not in text


class TestFormatOrderCandidates:
    """Test format_order_candidates()."""

    def test_numbered_list(self):
        orders = [
            make_order("1003", items=("Tシャツ", "靴下", "帽子"), day=20),
            make_order("1002", day=10),
            make_order("1001", items=(), day=5),
        ]

        lines = format_order_candidates("山田太郎", orders).splitlines()
        entries = [line for line in lines if line[:1].isdigit()]

        assert entries == [
            "1. #1003（2024/1/20）Tシャツ 他2点",
            "2. #1002（2024/1/10）Tシャツ",
            "3. #1001（2024/1/5）商品情報なし",
        ]
        assert "3件" in lines[0]
