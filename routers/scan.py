"""
Rotas para scan IN/OUT de itens
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from models.database import get_db
from schemas.movement_schemas import MovementResponse
from schemas.scan_schemas import ScanInRequest, ScanOutRequest, ScanResponse
from services.exceptions import ItemNotFound, WarehouseError
from services.item_service import ItemService
from services.placement_service import PlacementService

router = APIRouter(prefix="/scan", tags=["scan"])


def _error_response(system_code: str, error: WarehouseError) -> ScanResponse:
    return ScanResponse(
        success=False,
        system_code=system_code,
        message="",
        error=error.message,
        error_code=error.code
    )


@router.post("/in", response_model=ScanResponse)
async def scan_in(
    request: ScanInRequest,
    db: Session = Depends(get_db)
):
    """
    Scan IN: coloca item pending numa posição (aloca automaticamente se não informada)
    """
    system_code = request.system_code

    try:
        item = ItemService.get_by_system_code(db, system_code)
        if not item:
            raise ItemNotFound(system_code)

        if request.location_code:
            movement = PlacementService.place(
                db, item.id, request.location_code, request.operator, request.notes
            )
        else:
            movement = PlacementService.place_auto(
                db, item.id, request.operator, request.ground_required, request.notes
            )
    except WarehouseError as e:
        return _error_response(system_code, e)

    return ScanResponse(
        success=True,
        system_code=system_code,
        message=f"Item {system_code} alocado em {movement.location_code}",
        location_code=movement.location_code,
        movement=MovementResponse.model_validate(movement)
    )


@router.post("/out", response_model=ScanResponse)
async def scan_out(
    request: ScanOutRequest,
    db: Session = Depends(get_db)
):
    """
    Scan OUT: retira item da posição (libera peso/empilhamento)
    """
    system_code = request.system_code

    try:
        item = ItemService.get_by_system_code(db, system_code)
        if not item:
            raise ItemNotFound(system_code)
        movement = PlacementService.pick(db, item.id, request.operator, request.notes)
    except WarehouseError as e:
        return _error_response(system_code, e)

    return ScanResponse(
        success=True,
        system_code=system_code,
        message=f"Item {system_code} coletado de {movement.location_code}",
        location_code=movement.location_code,
        movement=MovementResponse.model_validate(movement)
    )
