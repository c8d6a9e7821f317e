"""
Order resolver - looks orders up in the commerce backend and normalizes them.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from support_bot.core.support.models import (
    LineItem,
    OrderSummary,
    ShippingAddress,
    TrackingInfo,
)
from support_bot.integrations.commerce import CommerceClient

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class CommerceUnavailableError(Exception):
    """Commerce backend could not be reached or answered with an error."""


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable timestamp from commerce backend: {value!r}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _customer_name(raw: dict[str, Any]) -> Optional[str]:
    customer = raw.get("customer") or {}
    # Japanese order: family name first
    parts = [customer.get("last_name"), customer.get("first_name")]
    name = " ".join(p for p in parts if p)
    if name:
        return name
    address = raw.get("shipping_address") or raw.get("billing_address") or {}
    return address.get("name") or None


def _tracking_entries(raw: dict[str, Any]) -> tuple[TrackingInfo, ...]:
    entries = []
    for fulfillment in raw.get("fulfillments") or []:
        numbers = fulfillment.get("tracking_numbers") or [fulfillment.get("tracking_number")]
        urls = fulfillment.get("tracking_urls") or [fulfillment.get("tracking_url")]
        entries.append(
            TrackingInfo(
                number=numbers[0] if numbers else None,
                carrier=fulfillment.get("tracking_company"),
                url=urls[0] if urls else None,
                status=fulfillment.get("shipment_status") or fulfillment.get("status"),
                shipped_at=parse_timestamp(fulfillment.get("created_at")),
            )
        )
    return tuple(entries)


def normalize_order(raw: dict[str, Any]) -> OrderSummary:
    """Project a raw Shopify order onto OrderSummary."""
    address = raw.get("shipping_address")
    customer = raw.get("customer") or {}

    return OrderSummary(
        id=str(raw.get("id") or raw.get("order_number")),
        order_number=str(raw.get("order_number") or raw.get("name", "")).lstrip("#"),
        financial_status=raw.get("financial_status"),
        fulfillment_status=raw.get("fulfillment_status"),
        created_at=parse_timestamp(raw.get("created_at")),
        total_price=raw.get("total_price"),
        currency=raw.get("currency"),
        line_items=tuple(
            LineItem(
                name=item.get("name") or item.get("title") or "",
                quantity=int(item.get("quantity") or 0),
                price=str(item.get("price") or ""),
            )
            for item in raw.get("line_items") or []
        ),
        customer_name=_customer_name(raw),
        customer_email=raw.get("email") or customer.get("email"),
        shipping_address=ShippingAddress(
            name=address.get("name"),
            zip=address.get("zip"),
            province=address.get("province"),
            city=address.get("city"),
            address1=address.get("address1"),
        ) if address else None,
        tracking=_tracking_entries(raw),
    )


def name_variants(name: str) -> list[str]:
    """
    Name as given, minus its first and minus its last character.
    Covers honorifics glued to the name ("山田様", "お山田").
    """
    variants = []
    for variant in (name, name[1:], name[:-1]):
        variant = variant.strip()
        if variant and variant not in variants:
            variants.append(variant)
    return variants


class OrderResolver:
    """Resolves orders by number or customer name."""

    def __init__(self, commerce: CommerceClient, max_candidates: int = 5):
        self.commerce = commerce
        self.max_candidates = max_candidates

    async def find_order(self, order_number: str) -> Optional[OrderSummary]:
        """
        Find a single order.

        Returns None if the order does not exist; raises
        CommerceUnavailableError if the backend call failed.
        """
        try:
            raw = await self.commerce.find_order_by_number(order_number)
        except Exception as e:
            logger.error(f"Order lookup failed for #{order_number}: {e}", exc_info=True)
            raise CommerceUnavailableError(str(e)) from e

        if raw is None:
            logger.info(f"Order #{order_number} not found")
            return None
        return normalize_order(raw)

    async def resolve_by_order_number(self, order_number: str) -> Optional[OrderSummary]:
        """Find a single order; None if missing or the backend failed."""
        try:
            return await self.find_order(order_number)
        except CommerceUnavailableError:
            return None

    async def resolve_by_customer_name(self, name: str) -> list[OrderSummary]:
        """
        Find recent orders for a customer name.

        Args:
            name: Customer name as typed by the user

        Returns:
            Up to `max_candidates` orders, most recent first
        """
        orders: dict[str, OrderSummary] = {}

        for query in name_variants(name):
            try:
                customers = await self.commerce.search_customers_by_name(query)
            except Exception as e:
                logger.error(f"Customer search failed for {query!r}: {e}", exc_info=True)
                continue

            for customer in customers:
                customer_id = customer.get("id")
                if customer_id is None:
                    continue
                try:
                    raw_orders = await self.commerce.list_orders_for_customer(str(customer_id))
                except Exception as e:
                    logger.error(
                        f"Order listing failed for customer {customer_id}: {e}",
                        exc_info=True,
                    )
                    continue

                for raw in raw_orders:
                    summary = normalize_order(raw)
                    orders.setdefault(summary.id, summary)

        ranked = sorted(
            orders.values(),
            key=lambda o: o.created_at or _EPOCH,
            reverse=True,
        )
        logger.info(f"Name lookup {name!r}: {len(ranked)} orders found")
        return ranked[: self.max_candidates]
