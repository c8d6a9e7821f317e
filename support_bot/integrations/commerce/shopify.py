"""
Shopify Admin REST API client.
"""

from typing import Any, Optional

import httpx

from support_bot.config import settings
from support_bot.integrations.commerce.base import CommerceClient


class ShopifyClient(CommerceClient):
    """Read-only Shopify client for orders and customers."""

    def __init__(
        self,
        store_url: str | None = None,
        access_token: str | None = None,
        api_version: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.store_url = store_url or settings.shopify_store_url
        self.access_token = access_token or settings.shopify_access_token
        self.api_version = api_version or settings.shopify_api_version
        self.timeout = timeout or settings.commerce_timeout
        self._transport = transport

        if not self.store_url or not self.access_token:
            raise ValueError(
                "Shopify credentials not provided. "
                "Set SHOPIFY_STORE_URL and SHOPIFY_ACCESS_TOKEN in .env file."
            )

        self.base_url = f"https://{self.store_url}/admin/api/{self.api_version}"
        self.headers = {
            "X-Shopify-Access-Token": self.access_token,
            "Content-Type": "application/json",
        }

    def _get_client(self) -> httpx.AsyncClient:
        """Create HTTP client."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        async with self._get_client() as client:
            response = await client.get(path, params=params)
            response.raise_for_status()
            return response.json()

    async def find_order_by_number(self, number: str) -> Optional[dict[str, Any]]:
        """Find order by number (Shopify `name` filter)."""
        data = await self._get("/orders.json", {"name": number, "status": "any"})
        orders = data.get("orders", [])
        return orders[0] if orders else None

    async def search_customers_by_name(self, query: str) -> list[dict[str, Any]]:
        """Search customers by free-text query."""
        data = await self._get("/customers/search.json", {"query": query})
        return data.get("customers", [])

    async def list_orders_for_customer(self, customer_id: str) -> list[dict[str, Any]]:
        """List all orders of a customer, any status."""
        data = await self._get(f"/customers/{customer_id}/orders.json", {"status": "any"})
        return data.get("orders", [])

    @property
    def name(self) -> str:
        return "shopify"
