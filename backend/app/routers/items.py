from fastapi import APIRouter, Depends

from app.db.database import Database, get_db
from app.schemas.product import ProductOut
from app.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/items", tags=["items"])


def get_catalog_service(db: Database = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


@router.get("", response_model=list[ProductOut])
async def list_items(q: str | None = None, service: CatalogService = Depends(get_catalog_service)):
    """List products, optionally filtered by a case-insensitive title match."""
    return await service.list_products(q)


# Path parameter stays a string: non-numeric ids are a 404, not a validation error
@router.get("/{item_id}", response_model=ProductOut)
async def get_item(item_id: str, service: CatalogService = Depends(get_catalog_service)):
    return await service.get_product(item_id)
