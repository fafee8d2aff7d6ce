from .locations import router as locations_router
from .items import router as items_router
from .allocate import router as allocate_router
from .scan import router as scan_router
from .movements import router as movements_router
from .actions import router as actions_router
from .products import router as products_router

__all__ = [
    "locations_router",
    "items_router",
    "allocate_router",
    "scan_router",
    "movements_router",
    "actions_router",
    "products_router",
]
