from .action_schemas import (
    ActionCompleteRequest,
    ActionResponse,
    ActionStartRequest,
    GoodsInActionRequest,
    PickActionRequest,
)
from .allocation_schemas import AllocationRequest, AllocationResponse
from .item_schemas import ItemCreateRequest, ItemResponse
from .location_schemas import (
    LocationResponse,
    LocationCreateRequest,
    LocationGenerateRequest,
    LocationGenerateResponse,
    LocationUpdateRequest,
)
from .movement_schemas import MovementResponse
from .product_schemas import ProductResponse, ProductSaveRequest
from .scan_schemas import ScanInRequest, ScanOutRequest, ScanResponse

__all__ = [
    "ActionCompleteRequest",
    "ActionResponse",
    "ActionStartRequest",
    "GoodsInActionRequest",
    "PickActionRequest",
    "AllocationRequest",
    "AllocationResponse",
    "ItemCreateRequest",
    "ItemResponse",
    "LocationResponse",
    "LocationCreateRequest",
    "LocationGenerateRequest",
    "LocationGenerateResponse",
    "LocationUpdateRequest",
    "MovementResponse",
    "ProductResponse",
    "ProductSaveRequest",
    "ScanInRequest",
    "ScanOutRequest",
    "ScanResponse",
]
