from pydantic import BaseModel
from typing import Optional
from .movement_schemas import MovementResponse


class ScanInRequest(BaseModel):
    """Request para scan IN (entrada de item)"""
    system_code: str
    location_code: Optional[str] = None  # Se não fornecido, aloca automaticamente
    ground_required: bool = False
    operator: Optional[str] = None
    notes: Optional[str] = None


class ScanOutRequest(BaseModel):
    """Request para scan OUT (saída de item)"""
    system_code: str
    operator: Optional[str] = None
    notes: Optional[str] = None


class ScanResponse(BaseModel):
    """Response do scan"""
    success: bool
    system_code: str
    message: str
    location_code: Optional[str] = None
    movement: Optional[MovementResponse] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
