import asyncio
import logging
from decimal import Decimal
from sqlalchemy import select
from app.db.database import Database
from app.models import Product

logger = logging.getLogger(__name__)


# Sample catalog: (id, title, price, stock)
PRODUCTS_DATA = [
    (1, "Widget", Decimal("10.00"), 5),
    (2, "iPhone 15", Decimal("999.99"), 12),
    (3, "Samsung Galaxy S24", Decimal("849.99"), 8),
    (4, "AirPods Pro", Decimal("249.99"), 30),
    (5, "Running Shoes", Decimal("89.99"), 25),
    (6, "Winter Jacket", Decimal("149.99"), 10),
    (7, "Organic Coffee", Decimal("14.99"), 100),
    (8, "Olive Oil", Decimal("19.99"), 60),
    (9, "Standing Desk", Decimal("399.99"), 4),
    (10, "Office Chair", Decimal("299.99"), 0),
]


async def seed_database(db: Database) -> int:
    """Create tables and load the sample catalog into an empty store.

    Returns the number of products inserted.
    """
    await db.create_all()

    async with db.session() as session:
        # Check if data exists
        existing = await session.scalar(select(Product).limit(1))
        if existing is not None:
            logger.info("Database already seeded")
            return 0

        for product_id, title, price, stock in PRODUCTS_DATA:
            session.add(Product(id=product_id, title=title, price=price, stock=stock))

        await session.commit()

    logger.info(f"Seeded {len(PRODUCTS_DATA)} products")
    return len(PRODUCTS_DATA)


async def main():
    db = Database()
    await db.connect()
    try:
        await seed_database(db)
    finally:
        await db.disconnect()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
