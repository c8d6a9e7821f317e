"""
Commerce backend factory.
"""

from functools import lru_cache

from support_bot.integrations.commerce.base import CommerceClient
from support_bot.integrations.commerce.shopify import ShopifyClient


@lru_cache(maxsize=1)
def get_commerce_client() -> CommerceClient:
    """Get cached commerce client."""
    return ShopifyClient()


__all__ = [
    "CommerceClient",
    "ShopifyClient",
    "get_commerce_client",
]
