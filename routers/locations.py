"""
Rotas para gerenciamento de posições
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from models.database import get_db
from schemas.location_schemas import (
    LocationCreateRequest,
    LocationGenerateRequest,
    LocationGenerateResponse,
    LocationResponse,
    LocationUpdateRequest,
)
from services.exceptions import WarehouseError
from services.location_service import LocationService
from routers.errors import to_http_exception

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("", response_model=List[LocationResponse])
async def list_locations(
    row: Optional[str] = Query(None),
    bay: Optional[str] = Query(None),
    level: Optional[str] = Query(None),
    rack_type: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Busca parcial pelo código"),
    db: Session = Depends(get_db)
):
    """Lista posições ordenadas por proximidade (rua, baia)"""
    try:
        return LocationService.list_locations(db, row, bay, level, rack_type, search)
    except WarehouseError as e:
        raise to_http_exception(e)


@router.get("/eligible", response_model=List[LocationResponse])
async def list_eligible_locations(
    ground: bool = Query(False, description="True = apenas chão (nível 0)"),
    db: Session = Depends(get_db)
):
    """Posições disponíveis e verificadas do tipo pedido"""
    return LocationService.list_eligible(db, require_ground=ground)


@router.get("/{code}", response_model=LocationResponse)
async def get_location(code: str, db: Session = Depends(get_db)):
    location = LocationService.get_by_code(db, code)
    if not location:
        raise HTTPException(status_code=404, detail=f"Posição {code} não encontrada")
    return location


@router.post("", response_model=LocationResponse, status_code=201)
async def create_location(request: LocationCreateRequest, db: Session = Depends(get_db)):
    """Cria uma posição (teto e altura derivados do tipo de rack)"""
    try:
        return LocationService.create_location(
            db,
            row=request.row,
            bay=request.bay,
            level=request.level,
            position=request.position,
            rack_type=request.rack_type,
            height=request.height,
            max_weight=request.max_weight,
        )
    except WarehouseError as e:
        raise to_http_exception(e)


@router.post("/generate", response_model=LocationGenerateResponse, status_code=201)
async def generate_locations(request: LocationGenerateRequest, db: Session = Depends(get_db)):
    """Gera posições em massa para uma rua e faixa de baias"""
    try:
        return LocationService.generate_locations(
            db,
            row=request.row,
            bay_start=request.bay_start,
            bay_end=request.bay_end,
            max_level=request.max_level,
            rack_type=request.rack_type,
            heights=request.heights,
            weight_limits=request.weight_limits,
        )
    except WarehouseError as e:
        raise to_http_exception(e)


@router.patch("/{code}", response_model=LocationResponse)
async def update_location(code: str, request: LocationUpdateRequest, db: Session = Depends(get_db)):
    """Altera disponibilidade, verificação, chão cheio ou altura"""
    try:
        return LocationService.update_flags(
            db,
            code,
            available=request.available,
            verified=request.verified,
            is_ground_full=request.is_ground_full,
            height=request.height,
        )
    except WarehouseError as e:
        raise to_http_exception(e)


@router.delete("/{code}", status_code=204)
async def delete_location(code: str, db: Session = Depends(get_db)):
    """Exclui posição vazia"""
    try:
        LocationService.delete_location(db, code)
    except WarehouseError as e:
        raise to_http_exception(e)
