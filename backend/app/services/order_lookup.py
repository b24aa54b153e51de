"""
Order Lookup

Restricted, read-only access to the order store for card key verification.
Only orders in an eligible status are considered, and only the four fields
needed for the verification answer are selected.
"""
import datetime as dt
from dataclasses import dataclass
from typing import Optional

from app.models.order import ELIGIBLE_STATUSES, Order

# Columns selected from the orders table; nothing else is read on this path
SOLD_ORDER_FIELDS = ("order_id", "product_name", "paid_at", "delivered_at")


@dataclass(frozen=True)
class SoldOrder:
    """Projection of an eligible order row."""
    order_id: str
    product_name: str
    paid_at: Optional[dt.datetime] = None
    delivered_at: Optional[dt.datetime] = None


async def find_sold_order(card_key: str) -> Optional[SoldOrder]:
    """
    Find the first paid/delivered order carrying exactly this card key.

    If several eligible orders share a key, whichever row the database
    returns first wins; no ordering is imposed.

    Args:
        card_key: Normalized card key (exact match, case-sensitive)

    Returns:
        SoldOrder or None if no eligible order matches
    """
    rows = (
        await Order.filter(card_key=card_key, status__in=list(ELIGIBLE_STATUSES))
        .limit(1)
        .values(*SOLD_ORDER_FIELDS)
    )
    if not rows:
        return None
    return SoldOrder(**rows[0])
