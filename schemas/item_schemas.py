from pydantic import BaseModel, Field
from typing import Optional
from models.item import ItemStatus


class ItemCreateRequest(BaseModel):
    """
    Request para registrar item (goods-in).
    category/description/weight vazios são preenchidos pelo catálogo (item_code = SKU)
    """
    item_code: str
    system_code: str
    category: Optional[str] = None
    weight: Optional[float] = Field(None, gt=0)
    description: Optional[str] = None


class ItemResponse(BaseModel):
    """Response de um item"""
    id: int
    item_code: str
    system_code: str
    description: str
    category: str
    weight: float
    status: ItemStatus
    location_code: Optional[str] = None
    location_verified: bool

    class Config:
        from_attributes = True
