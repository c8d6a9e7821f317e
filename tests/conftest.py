"""
Shared pytest fixtures for all tests.
"""

import os
from typing import Any, Optional
from unittest.mock import AsyncMock

import pytest

# Required settings must exist before support_bot.config is imported
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "test-token")
os.environ.setdefault("DEBUG", "false")

from support_bot.core.support.state_store import InMemoryConversationStore  # noqa: E402
from support_bot.integrations.commerce import CommerceClient  # noqa: E402
from support_bot.integrations.llm import BaseLLM, LLMResponse  # noqa: E402


def make_raw_order(
    order_id: int,
    number: int,
    created_at: str,
    items: tuple[str, ...] = ("オーガニックコットンTシャツ",),
    fulfillment_status: Optional[str] = None,
    fulfillments: Optional[list[dict[str, Any]]] = None,
    first_name: str = "太郎",
    last_name: str = "山田",
) -> dict[str, Any]:
    """Build a raw order the way the Shopify Admin API returns it."""
    return {
        "id": order_id,
        "name": f"#{number}",
        "order_number": number,
        "email": "taro@example.com",
        "created_at": created_at,
        "financial_status": "paid",
        "fulfillment_status": fulfillment_status,
        "total_price": "5500.00",
        "currency": "JPY",
        "line_items": [
            {"name": name, "quantity": 1, "price": "2750.00"} for name in items
        ],
        "customer": {"id": 900, "first_name": first_name, "last_name": last_name},
        "shipping_address": {
            "name": f"{last_name} {first_name}",
            "zip": "150-0001",
            "province": "東京都",
            "city": "渋谷区",
            "address1": "神宮前1-1-1",
        },
        "fulfillments": fulfillments or [],
    }


@pytest.fixture
def raw_order():
    """Factory for raw commerce orders."""
    return make_raw_order


@pytest.fixture
def commerce():
    """Commerce backend mock with empty results."""
    client = AsyncMock(spec=CommerceClient)
    client.find_order_by_number.return_value = None
    client.search_customers_by_name.return_value = []
    client.list_orders_for_customer.return_value = []
    return client


@pytest.fixture
def llm():
    """LLM mock with a neutral answer."""
    mock = AsyncMock(spec=BaseLLM)
    mock.generate.return_value = LLMResponse(content="ご質問ありがとうございます😊")
    return mock


@pytest.fixture
def store():
    """In-memory conversation store."""
    return InMemoryConversationStore()
