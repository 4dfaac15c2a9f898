import logging
from fastapi import APIRouter, Depends, status

from app.db.database import Database, get_db
from app.schemas.sale import SaleCreate, SaleCreated, SaleOut
from app.services.sales_service import SalesService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sales", tags=["sales"])


def get_sales_service(db: Database = Depends(get_db)) -> SalesService:
    return SalesService(db)


@router.get("", response_model=list[SaleOut])
async def list_sales(service: SalesService = Depends(get_sales_service)):
    return await service.list_sales()


@router.post("", response_model=SaleCreated, status_code=status.HTTP_201_CREATED)
async def create_sale(request: SaleCreate, service: SalesService = Depends(get_sales_service)):
    """Purchase ``quantity`` units of a product."""
    logger.info(f"Purchase request: product {request.product_id}, quantity {request.quantity}")
    sale = await service.purchase(request.product_id, request.quantity)
    return SaleCreated(message="Purchase completed", sale=SaleOut.model_validate(sale))
