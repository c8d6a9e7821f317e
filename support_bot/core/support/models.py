"""
Data models for the support dialogue core.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


# Category label for shipping questions; drives the name disambiguation flow
SHIPPING_CATEGORY = "配送・発送"
DEFAULT_CATEGORY = "other"


class ConversationStage(Enum):
    """Stage of the per-user dialogue."""
    INITIAL = "initial"
    WAITING_FOR_NAME = "waiting_for_name"
    WAITING_FOR_ORDER_SELECTION = "waiting_for_order_selection"
    NAME_NOT_FOUND = "name_not_found"


@dataclass(frozen=True)
class LineItem:
    """Single line item of an order."""
    name: str
    quantity: int
    price: str


@dataclass(frozen=True)
class TrackingInfo:
    """Tracking entry taken from an order fulfillment."""
    number: Optional[str] = None
    carrier: Optional[str] = None
    url: Optional[str] = None
    status: Optional[str] = None
    shipped_at: Optional[datetime] = None


@dataclass(frozen=True)
class ShippingAddress:
    """Shipping address of an order."""
    name: Optional[str] = None
    zip: Optional[str] = None
    province: Optional[str] = None
    city: Optional[str] = None
    address1: Optional[str] = None


@dataclass(frozen=True)
class OrderSummary:
    """Normalized projection of a commerce order."""
    id: str                                 # commerce-side identity, used for de-duplication
    order_number: str
    financial_status: Optional[str] = None
    fulfillment_status: Optional[str] = None
    created_at: Optional[datetime] = None
    total_price: Optional[str] = None
    currency: Optional[str] = None
    line_items: tuple[LineItem, ...] = ()
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    shipping_address: Optional[ShippingAddress] = None
    tracking: tuple[TrackingInfo, ...] = ()

    @property
    def first_item_name(self) -> Optional[str]:
        """Name of the first line item, if any."""
        return self.line_items[0].name if self.line_items else None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "order_number": self.order_number,
            "financial_status": self.financial_status,
            "fulfillment_status": self.fulfillment_status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "total_price": self.total_price,
            "currency": self.currency,
            "line_items": [
                {"name": i.name, "quantity": i.quantity, "price": i.price}
                for i in self.line_items
            ],
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "tracking_numbers": [t.number for t in self.tracking if t.number],
        }


@dataclass(frozen=True)
class PastInquiry:
    """Prior support exchange with the same user."""
    user_message: str
    reply: str
    created_at: Optional[datetime] = None
    category: Optional[str] = None


@dataclass
class Context:
    """Facts derived from a single incoming message."""
    user_id: str
    order_number: Optional[str] = None
    order_info: Optional[OrderSummary] = None
    category: str = DEFAULT_CATEGORY
    requires_human_review: bool = False
    customer_history: list[PastInquiry] = field(default_factory=list)
    customer_name: Optional[str] = None
    possible_orders: Optional[list[OrderSummary]] = None
    order_lookup_failed: bool = False


@dataclass
class ConversationState:
    """Per-user dialogue state kept between messages."""
    stage: ConversationStage = ConversationStage.INITIAL
    updated_at: Optional[datetime] = None

    # Slots
    possible_orders: list[OrderSummary] = field(default_factory=list)
    customer_name: Optional[str] = None
    attempted_name: Optional[str] = None
    intent: Optional[str] = None
