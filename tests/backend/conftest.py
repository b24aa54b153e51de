import datetime as dt
import os
import uuid
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from app.api.v1.deps import get_card_verifier
from app.core import db as db_module
from app.main import app
from app.models.order import Order, OrderStatus
from app.services.card_verification import CardVerifier


TEST_DB_URL = "sqlite://:memory:?cache=shared"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL

TEST_API_KEY = "test-verify-secret"


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest.fixture
def api_key():
    """
    Configure the verifier with a known secret for the duration of a test.
    """
    app.dependency_overrides[get_card_verifier] = lambda: CardVerifier(api_key=TEST_API_KEY)
    yield TEST_API_KEY
    app.dependency_overrides.pop(get_card_verifier, None)


@pytest.fixture
def auth_headers(api_key):
    return {"Authorization": f"Bearer {api_key}"}


@pytest_asyncio.fixture
async def db():
    """
    Fresh in-memory order store, closed after the test.
    """
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(db, api_key):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest_asyncio.fixture
async def create_order(db):
    """
    Factory fixture to insert orders directly via ORM, as the fulfillment workflow would.
    """

    async def _create_order(
        card_key: str | None,
        status: str = OrderStatus.PAID.value,
        product_name: str = "Pro License (1 year)",
        paid_at: dt.datetime | None = None,
        delivered_at: dt.datetime | None = None,
    ) -> Order:
        return await Order.create(
            order_id=f"ORD-{uuid.uuid4().hex[:10].upper()}",
            product_id="prod_pro_1y",
            product_name=product_name,
            amount=Decimal("19.99"),
            email="buyer@example.com",
            status=status,
            card_key=card_key,
            paid_at=paid_at,
            delivered_at=delivered_at,
        )

    return _create_order
