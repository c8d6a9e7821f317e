"""
Tests for keyword classification, extraction and escalation policy.
"""

import pytest

from support_bot.core.support.classifier import (
    CANCELLATION_CATEGORY,
    CATEGORIES,
    DELIVERY_INFO_CATEGORY,
    GREETING_CATEGORY,
    INVENTORY_CATEGORY,
    PRODUCT_CATEGORY,
    classify,
)
from support_bot.core.support.escalation import should_escalate
from support_bot.core.support.extractors import (
    extract_customer_name,
    extract_order_number,
    is_plausible_name,
)
from support_bot.core.support.models import SHIPPING_CATEGORY, Context


class TestClassify:
    """Test classify()."""

    def test_shipping_question(self):
        assert classify("山田太郎です、発送について教えて") == SHIPPING_CATEGORY

    def test_first_matching_category_wins(self):
        """Cancellation is listed before shipping."""
        assert classify("返品した商品を発送し直してください") == CANCELLATION_CATEGORY

    def test_inventory(self):
        assert classify("この商品の在庫はありますか") == INVENTORY_CATEGORY

    def test_greeting(self):
        assert classify("こんにちは") == GREETING_CATEGORY

    def test_product(self):
        assert classify("サイズについて知りたい") == PRODUCT_CATEGORY

    @pytest.mark.parametrize("message", ["送料はいくらですか", "配送方法を選べますか", "配送料について"])
    def test_delivery_information(self, message):
        assert classify(message) == DELIVERY_INFO_CATEGORY

    @pytest.mark.parametrize("message", ["", "2", "山田太郎です", "hello"])
    def test_defaults_to_other(self, message):
        assert classify(message) == "other"

    @pytest.mark.parametrize(
        "message",
        ["", "#1234", "在庫と配送と返品", "ありがとう", "请问", "🙂", "キャンセルしたい"],
    )
    def test_total_and_deterministic(self, message):
        result = classify(message)
        assert result in CATEGORIES
        assert classify(message) == result


class TestExtractOrderNumber:
    """Test extract_order_number()."""

    def test_hash_number(self):
        assert extract_order_number("#1234 の状況は？") == "1234"

    def test_hash_number_wins_over_other_digit_runs(self):
        assert extract_order_number("電話 09012345678、注文は #1234 です") == "1234"
        assert extract_order_number("注文番号 5678 ではなく #1234") == "1234"

    def test_labeled_japanese(self):
        assert extract_order_number("注文番号：5678です") == "5678"

    def test_labeled_english(self):
        assert extract_order_number("My order number: 4321") == "4321"
        assert extract_order_number("Order No. 99 please") == "99"

    def test_bare_digit_run(self):
        assert extract_order_number("20240115 に注文しました") == "20240115"

    def test_full_width_input(self):
        assert extract_order_number("＃１２３の件") == "123"

    @pytest.mark.parametrize("message", ["", "3個注文したい", "123 個", "発送はまだですか"])
    def test_no_match(self, message):
        assert extract_order_number(message) is None


class TestExtractCustomerName:
    """Test extract_customer_name()."""

    def test_leading_introduction(self):
        assert extract_customer_name("山田太郎です、発送について教えて") == "山田太郎"

    def test_name_is_phrase(self):
        assert extract_customer_name("私の名前は佐藤花子です") == "佐藤花子"

    def test_moushimasu(self):
        assert extract_customer_name("鈴木一郎と申します。注文の件です") == "鈴木一郎"

    def test_name_with_space(self):
        assert extract_customer_name("山田 太郎です") == "山田 太郎"

    def test_trailing_introduction(self):
        assert extract_customer_name("よろしくお願いします。田中です") == "田中"

    @pytest.mark.parametrize("message", ["山田", "ヤマダ", " 佐藤花子 "])
    def test_short_token_fallback(self, message):
        assert extract_customer_name(message) == message.strip()

    @pytest.mark.parametrize(
        "message",
        ["はい", "山田太郎様ご注文", "ok", "配送状況を知りたいです", "商品について質問があります", ""],
    )
    def test_no_name(self, message):
        assert extract_customer_name(message) is None

    @pytest.mark.parametrize(
        "message", ["在庫確認です", "キャンセルです", "発送", "大丈夫です", "未定です", "了解です"]
    )
    def test_rejects_non_names(self, message):
        assert extract_customer_name(message) is None

    def test_is_plausible_name(self):
        assert is_plausible_name("山田太郎")
        assert not is_plausible_name("返品")
        assert not is_plausible_name("大丈夫")


class TestShouldEscalate:
    """Test should_escalate()."""

    def test_cancellation_category_always_escalates(self):
        context = Context(user_id="u1", category=CANCELLATION_CATEGORY)
        for message in ["キャンセルしたい", "よろしくお願いします", ""]:
            assert should_escalate(message, context) is True

    def test_keyword_escalates(self):
        context = Context(user_id="u1", category=PRODUCT_CATEGORY)
        assert should_escalate("届いた商品が壊れていました", context) is True

    def test_neutral_message(self):
        context = Context(user_id="u1", category=GREETING_CATEGORY)
        assert should_escalate("こんにちは", context) is False
