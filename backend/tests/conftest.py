import pytest
from decimal import Decimal
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.db.database import Database
from app.models import Product


CATALOG = [
    (1, "Widget", Decimal("10.00"), 5),
    (2, "Blue Widget", Decimal("12.50"), 3),
    (3, "Gadget", Decimal("99.99"), 0),
    (4, "50% Off Sign", Decimal("2.00"), 7),
]


@pytest.fixture
async def db():
    """In-memory SQLite store with a small catalog."""
    database = Database("sqlite:///:memory:", "sqlite")
    await database.connect()
    await database.create_all()

    async with database.session() as session:
        for product_id, title, price, stock in CATALOG:
            session.add(Product(id=product_id, title=title, price=price, stock=stock))
        await session.commit()

    yield database
    await database.disconnect()


@pytest.fixture
async def client(db):
    """Async test client bound to the in-memory store.

    ASGITransport does not run the lifespan, so the store is attached directly.
    """
    app.state.db = db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
