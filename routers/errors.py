"""
Tradução dos erros do núcleo para respostas HTTP
"""
from fastapi import HTTPException
from services.exceptions import (
    ActionClosed,
    ActionNotFound,
    CapacityExceeded,
    ConfigurationError,
    DuplicateItem,
    InvalidTransition,
    ItemNotFound,
    LocationNotEmpty,
    LocationUnavailable,
    NoLocationAvailable,
    StorageError,
    ValidationError,
    WarehouseError,
)

STATUS_BY_ERROR = {
    ConfigurationError: 400,
    ValidationError: 400,
    ItemNotFound: 404,
    ActionNotFound: 404,
    ActionClosed: 409,
    LocationUnavailable: 409,
    LocationNotEmpty: 409,
    DuplicateItem: 409,
    InvalidTransition: 409,
    CapacityExceeded: 409,
    NoLocationAvailable: 409,
    StorageError: 503,
}


def to_http_exception(error: WarehouseError) -> HTTPException:
    status_code = STATUS_BY_ERROR.get(type(error), 500)
    return HTTPException(
        status_code=status_code,
        detail={"error": error.message, "error_code": error.code}
    )
