import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from app.db.database import Database
from app.errors import ErrorType
from app.exceptions import AppException
from app.models import Product
from app.models.product import ID_MIN, ID_MAX

logger = logging.getLogger(__name__)


def parse_product_id(raw: str | int) -> int | None:
    """Parse a product id taken from a URL.

    Returns None for non-numeric input and for integers outside the id column's
    range, neither of which can match a product.
    """
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(raw.strip())
        except (AttributeError, ValueError):
            return None
    if not ID_MIN <= value <= ID_MAX:
        return None
    return value


class CatalogService:
    """Read-only queries over the product catalog."""

    def __init__(self, db: Database):
        self.db = db

    async def list_products(self, query: str | None = None) -> list[Product]:
        """Return all products, or those whose title contains ``query`` (any case)."""
        stmt = select(Product)
        if query:
            stmt = stmt.where(Product.title.icontains(query, autoescape=True))

        try:
            async with self.db.session() as session:
                result = await session.scalars(stmt)
                return list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Error fetching products: {e}")
            raise AppException(ErrorType.STORE_FAILURE, "Error fetching products", error=str(e))

    async def get_product(self, product_id: str | int) -> Product:
        """Look up a product by its catalog id.

        Raises:
            AppException: NOT_FOUND when no product matches (including
                non-numeric ids), STORE_FAILURE on store errors.
        """
        parsed = parse_product_id(product_id)
        if parsed is None:
            raise AppException(ErrorType.NOT_FOUND, "Product not found")

        try:
            async with self.db.session() as session:
                product = await session.scalar(select(Product).where(Product.id == parsed))
        except SQLAlchemyError as e:
            logger.error(f"Error fetching product {parsed}: {e}")
            raise AppException(ErrorType.STORE_FAILURE, "Error fetching product by id", error=str(e))

        if product is None:
            raise AppException(ErrorType.NOT_FOUND, "Product not found")
        return product
