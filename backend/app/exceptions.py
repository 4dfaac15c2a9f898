import logging
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.errors import ErrorType, ERROR_STATUS_MAP

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Custom exception that services can raise.

    ``error`` carries the underlying store detail for STORE_FAILURE responses.
    """

    def __init__(self, error_type: ErrorType, message: str, error: str | None = None):
        self.error_type = error_type
        self.message = message
        self.error = error
        super().__init__(message)


async def app_exception_handler(_request: Request, exc: AppException) -> JSONResponse:
    """Global handler for AppException - converts to proper HTTP response."""
    status_code = ERROR_STATUS_MAP.get(exc.error_type, 500)
    content = {"message": exc.message}
    if exc.error is not None:
        content["error"] = exc.error
    return JSONResponse(status_code=status_code, content=content)


async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are client errors - returns 400."""
    return JSONResponse(
        status_code=ERROR_STATUS_MAP[ErrorType.INVALID_REQUEST],
        content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())}
    )


async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes and methods keep the {message} error shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None)
    )


async def generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled exceptions - returns 500."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "error": str(exc)}
    )
