from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from models.movement import MovementType


class MovementResponse(BaseModel):
    """Response de um movimento"""
    id: int
    item_id: int
    type: MovementType
    weight: float
    operator: str
    reference: str
    location_code: Optional[str] = None
    notes: Optional[str] = None
    ts: datetime

    class Config:
        from_attributes = True
