from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class LocationResponse(BaseModel):
    """Response de uma posição"""
    id: int
    code: str
    row: str
    bay: str
    level: str
    position: str
    rack_type: str
    max_weight: Optional[float] = None  # None = sem limite (chão)
    current_weight: float
    available: bool
    verified: bool
    is_ground_full: bool
    height: float
    stacked_item_ids: List[int] = []

    class Config:
        from_attributes = True


class LocationCreateRequest(BaseModel):
    """Request para criar uma posição"""
    row: str
    bay: int = Field(..., ge=1)
    level: int = Field(..., ge=0)
    position: int = Field(1, ge=1)
    rack_type: Optional[str] = None
    height: Optional[float] = Field(None, ge=0)
    max_weight: Optional[float] = Field(None, gt=0)


class LocationGenerateRequest(BaseModel):
    """Request para geração em massa de posições"""
    row: str
    bay_start: int = Field(..., ge=1)
    bay_end: int = Field(..., ge=1)
    max_level: int = Field(4, ge=0)
    rack_type: Optional[str] = None
    heights: Optional[Dict[str, float]] = None  # nível -> altura (m)
    weight_limits: Optional[Dict[str, float]] = None  # nível -> peso máximo (kg)


class LocationGenerateResponse(BaseModel):
    created: List[str]
    skipped: List[str]


class LocationUpdateRequest(BaseModel):
    """Edição administrativa"""
    available: Optional[bool] = None
    verified: Optional[bool] = None
    is_ground_full: Optional[bool] = None
    height: Optional[float] = Field(None, ge=0)
