from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ProductSaveRequest(BaseModel):
    """Request para criar/atualizar produto do catálogo"""
    sku: str
    category: str
    description: str = ""
    weight: Optional[float] = Field(None, gt=0)
    coil_number: Optional[str] = None
    coil_length: Optional[str] = None


class ProductResponse(BaseModel):
    """Response de um produto"""
    id: int
    sku: str
    description: str
    category: str
    weight: Optional[float] = None
    usage_count: int
    last_used: datetime
    coil_number: Optional[str] = None
    coil_length: Optional[str] = None

    class Config:
        from_attributes = True
