# app/models/order.py
"""
Database model for orders (sale records).

Rows are written by the order-fulfillment workflow. This service treats the
table as read-only and only ever looks at the card key, status, product name
and the paid/delivered timestamps.
"""
import uuid
from enum import Enum

from tortoise import fields, models


class OrderStatus(str, Enum):
    """Lifecycle states written by the fulfillment workflow."""
    PENDING = "pending"
    PAID = "paid"
    DELIVERED = "delivered"
    FAILED = "failed"
    REFUNDED = "refunded"
    CANCELLED = "cancelled"


# Statuses that count as a completed sale
ELIGIBLE_STATUSES: tuple[str, ...] = (OrderStatus.PAID.value, OrderStatus.DELIVERED.value)


class Order(models.Model):
    """
    Order database model.

    A single purchase of a product. Once payment is confirmed the order moves
    to "paid", and to "delivered" after the card key has been handed to the
    buyer. Refunded or cancelled orders keep their card key for auditing but
    no longer count as sold.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    order_id = fields.CharField(max_length=64, unique=True, index=True)  # Public order identifier
    product_id = fields.CharField(max_length=64, null=True)
    product_name = fields.CharField(max_length=255)
    amount = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    email = fields.CharField(max_length=256, null=True)  # Buyer contact, never disclosed here
    status = fields.CharField(max_length=16, default=OrderStatus.PENDING.value, index=True)
    card_key = fields.CharField(max_length=512, null=True)  # Exact string handed to the buyer
    paid_at = fields.DatetimeField(null=True)
    delivered_at = fields.DatetimeField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "orders"
        indexes = (("card_key", "status"),)
