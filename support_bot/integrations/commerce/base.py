"""
Base interface for commerce backends.
Allows switching between Shopify and other shop platforms.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class CommerceClient(ABC):
    """Abstract base class for commerce API clients."""

    @abstractmethod
    async def find_order_by_number(self, number: str) -> Optional[dict[str, Any]]:
        """Find a single raw order by its shop-facing number."""
        pass

    @abstractmethod
    async def search_customers_by_name(self, query: str) -> list[dict[str, Any]]:
        """Search raw customer records by name."""
        pass

    @abstractmethod
    async def list_orders_for_customer(self, customer_id: str) -> list[dict[str, Any]]:
        """List raw orders placed by a customer."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name."""
        pass
