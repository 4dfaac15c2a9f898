import logging
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from app.db.database import Database, get_db
from app.errors import ErrorType
from app.exceptions import AppException

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/api/health")
async def health(db: Database = Depends(get_db)):
    """Health check endpoint."""
    try:
        await db.ping()
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Health check failed: {e}")
        raise AppException(ErrorType.STORE_UNAVAILABLE, "Database unavailable")
    return {"status": "ok"}
