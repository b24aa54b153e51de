"""
Unit tests for services.order_lookup against an in-memory SQLite order store.
"""
import datetime as dt

import pytest

from app.models.order import ELIGIBLE_STATUSES, OrderStatus
from app.services.order_lookup import SoldOrder, find_sold_order


pytestmark = pytest.mark.asyncio

PAID_AT = dt.datetime(2025, 2, 1, 10, 0, tzinfo=dt.timezone.utc)


async def test_eligible_statuses_are_paid_and_delivered():
    assert set(ELIGIBLE_STATUSES) == {OrderStatus.PAID.value, OrderStatus.DELIVERED.value}


async def test_returns_projection_of_eligible_order(create_order):
    order = await create_order("KEY-1", status="paid", product_name="Starter Pack", paid_at=PAID_AT)

    found = await find_sold_order("KEY-1")
    assert isinstance(found, SoldOrder)
    assert found.order_id == order.order_id
    assert found.product_name == "Starter Pack"
    assert found.paid_at is not None
    assert found.delivered_at is None


async def test_returns_none_when_nothing_matches(create_order):
    await create_order("KEY-1", paid_at=PAID_AT)
    assert await find_sold_order("KEY-2") is None


async def test_ineligible_order_is_skipped_in_favor_of_eligible_one(create_order):
    await create_order("KEY-1", status="refunded", paid_at=PAID_AT)
    delivered = await create_order("KEY-1", status="delivered", delivered_at=PAID_AT)

    found = await find_sold_order("KEY-1")
    assert found is not None
    assert found.order_id == delivered.order_id


async def test_only_ineligible_orders_gives_none(create_order):
    await create_order("KEY-1", status="pending")
    await create_order("KEY-1", status="cancelled")
    assert await find_sold_order("KEY-1") is None


async def test_orders_without_card_key_are_ignored(create_order):
    await create_order(None, status="paid", paid_at=PAID_AT)
    assert await find_sold_order("") is None
