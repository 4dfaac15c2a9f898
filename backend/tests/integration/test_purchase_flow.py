import asyncio
import os

import pytest
from decimal import Decimal
from httpx import AsyncClient, ASGITransport
from sqlalchemy import delete

from app.main import app
from app.db.database import Database
from app.models import Product, Sale
from app.errors import ErrorType
from app.exceptions import AppException
from app.services.catalog_service import CatalogService
from app.services.sales_service import SalesService

INTEGRATION_DATABASE_URL = os.getenv("INTEGRATION_DATABASE_URL")

pytestmark = pytest.mark.skipif(
    not INTEGRATION_DATABASE_URL,
    reason="INTEGRATION_DATABASE_URL not set"
)


@pytest.fixture(autouse=True)
async def setup_db():
    """Connect to a real PostgreSQL database and load the Widget product."""
    db = Database(INTEGRATION_DATABASE_URL, "postgresql")
    await db.connect()
    await db.create_all()

    async with db.session() as session:
        await session.execute(delete(Sale))
        await session.execute(delete(Product))
        session.add(Product(id=1, title="Widget", price=Decimal("10.00"), stock=5))
        await session.commit()

    app.state.db = db
    yield db
    await db.disconnect()


class TestAPIIntegration:
    """Integration tests for API with real database."""

    @pytest.mark.asyncio
    async def test_purchase_flow(self):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test"
        ) as client:
            response = await client.post("/api/sales", json={"productId": 1, "quantity": 2})
            assert response.status_code == 201
            assert response.json()["sale"]["total"] == 20.0

            response = await client.get("/api/items/1")
            assert response.json()["stock"] == 3

    @pytest.mark.asyncio
    async def test_insufficient_stock(self):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test"
        ) as client:
            response = await client.post("/api/sales", json={"productId": 1, "quantity": 10})
            assert response.status_code == 400

            response = await client.get("/api/items/1")
            assert response.json()["stock"] == 5

    @pytest.mark.asyncio
    async def test_unknown_product(self):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test"
        ) as client:
            response = await client.post("/api/sales", json={"productId": 999, "quantity": 1})
            assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_title_filter_uses_ilike(self):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test"
        ) as client:
            response = await client.get("/api/items", params={"q": "WIDG"})
            assert [p["id"] for p in response.json()] == [1]

    @pytest.mark.asyncio
    async def test_concurrent_purchases_never_oversell(self, setup_db):
        """Test two purchases that each fit, but not together, sell only once."""
        service = SalesService(setup_db)

        results = await asyncio.gather(
            service.purchase(1, 3),
            service.purchase(1, 3),
            return_exceptions=True,
        )

        sales = [r for r in results if isinstance(r, Sale)]
        errors = [r for r in results if isinstance(r, AppException)]
        assert len(sales) == 1
        assert len(errors) == 1
        assert errors[0].error_type == ErrorType.INSUFFICIENT_STOCK

        product = await CatalogService(setup_db).get_product(1)
        assert product.stock == 2

    @pytest.mark.asyncio
    async def test_out_of_range_id_is_not_found(self):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test"
        ) as client:
            response = await client.get("/api/items/99999999999")
            assert response.status_code == 404

            response = await client.post("/api/sales", json={"productId": 99999999999, "quantity": 1})
            assert response.status_code == 404
