from .database import Base, get_db, engine
from .location import Location, StackedItem, GROUND_LEVEL
from .item import Item, ItemStatus
from .movement import Movement, MovementType
from .action import WarehouseAction, ActionType, ActionStatus
from .product import Product

__all__ = [
    "Base", "get_db", "engine",
    "Location", "StackedItem", "GROUND_LEVEL",
    "Item", "ItemStatus",
    "Movement", "MovementType",
    "WarehouseAction", "ActionType", "ActionStatus",
    "Product",
]
