import logging
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from app.db.database import Database
from app.errors import ErrorType
from app.exceptions import AppException
from app.models import Product, Sale
from app.services.catalog_service import parse_product_id

logger = logging.getLogger(__name__)


class SalesService:
    """Sales listing and the purchase transaction."""

    def __init__(self, db: Database):
        self.db = db

    async def list_sales(self) -> list[Sale]:
        try:
            async with self.db.session() as session:
                result = await session.scalars(select(Sale))
                return list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Error fetching sales: {e}")
            raise AppException(ErrorType.STORE_FAILURE, "Error fetching sales", error=str(e))

    async def purchase(self, product_id: int, quantity: int) -> Sale:
        """Sell ``quantity`` units of a product.

        The product read, the sale insert and the stock decrement share one
        transaction. The product row is locked with SELECT ... FOR UPDATE on
        backends with row locks, and the decrement only applies while enough
        stock remains, so a purchase that lost a race against a concurrent one
        fails with INSUFFICIENT_STOCK instead of driving stock negative. Any
        failure rolls back both writes.

        Returns:
            The persisted sale, including its store-assigned id.

        Raises:
            AppException: INVALID_REQUEST, PRODUCT_NOT_FOUND,
                INSUFFICIENT_STOCK or STORE_FAILURE.
        """
        if quantity <= 0:
            raise AppException(ErrorType.INVALID_REQUEST, "Quantity must be greater than zero")
        if parse_product_id(product_id) is None:
            raise AppException(ErrorType.PRODUCT_NOT_FOUND, "Product not found")

        try:
            async with self.db.session() as session:
                async with session.begin():
                    # 1. Find product, locking its row until commit
                    product = await session.scalar(
                        select(Product).where(Product.id == product_id).with_for_update()
                    )
                    if product is None:
                        raise AppException(ErrorType.PRODUCT_NOT_FOUND, "Product not found")

                    # 2. Check stock
                    if product.stock < quantity:
                        raise AppException(ErrorType.INSUFFICIENT_STOCK, "Insufficient stock")

                    # 3. Record the sale at the current price
                    sale = Sale(
                        product_id=product_id,
                        quantity=quantity,
                        date=datetime.now(timezone.utc),
                        total=product.price * quantity,
                    )
                    session.add(sale)
                    await session.flush()

                    # 4. Decrement stock in the store, guarded against a stale read
                    result = await session.execute(
                        update(Product)
                        .where(Product.id == product_id, Product.stock >= quantity)
                        .values(stock=Product.stock - quantity)
                        .execution_options(synchronize_session=False)
                    )
                    if result.rowcount != 1:
                        raise AppException(ErrorType.INSUFFICIENT_STOCK, "Insufficient stock")
        except SQLAlchemyError as e:
            logger.error(f"Error completing purchase of product {product_id}: {e}")
            raise AppException(ErrorType.STORE_FAILURE, "Error completing purchase", error=str(e))

        logger.info(f"Sold {quantity} x product {product_id} (sale {sale.id}, total {sale.total})")
        return sale
