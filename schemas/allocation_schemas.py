from pydantic import BaseModel, Field
from typing import Optional


class AllocationRequest(BaseModel):
    """Request para sugestão de posição"""
    weight: float = Field(..., gt=0)
    ground_required: bool = False


class AllocationResponse(BaseModel):
    """Response da alocação; location_code None quando não há posição viável"""
    location_code: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
