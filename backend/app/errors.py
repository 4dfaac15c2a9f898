from enum import Enum


class ErrorType(Enum):
    NOT_FOUND = "not_found"
    PRODUCT_NOT_FOUND = "product_not_found"
    INVALID_REQUEST = "invalid_request"
    INSUFFICIENT_STOCK = "insufficient_stock"
    STORE_FAILURE = "store_failure"
    STORE_UNAVAILABLE = "store_unavailable"
    INTERNAL_ERROR = "internal_error"


# Map error types to HTTP status codes
ERROR_STATUS_MAP = {
    ErrorType.NOT_FOUND: 404,
    ErrorType.PRODUCT_NOT_FOUND: 404,
    ErrorType.INVALID_REQUEST: 400,
    ErrorType.INSUFFICIENT_STOCK: 400,
    ErrorType.STORE_FAILURE: 500,
    ErrorType.STORE_UNAVAILABLE: 503,
    ErrorType.INTERNAL_ERROR: 500,
}
