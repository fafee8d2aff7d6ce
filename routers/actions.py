"""
Rotas da fila de tarefas (goods-in a guardar, picks a separar)
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from models.database import get_db
from models.action import ActionStatus
from schemas.action_schemas import (
    ActionCompleteRequest,
    ActionResponse,
    ActionStartRequest,
    GoodsInActionRequest,
    PickActionRequest,
)
from schemas.movement_schemas import MovementResponse
from schemas.scan_schemas import ScanResponse
from services.action_service import ActionService
from services.exceptions import WarehouseError
from services.placement_service import PlacementService
from routers.errors import to_http_exception

router = APIRouter(prefix="/actions", tags=["actions"])


@router.post("/goods-in", response_model=ActionResponse, status_code=201)
async def create_goods_in_action(request: GoodsInActionRequest, db: Session = Depends(get_db)):
    try:
        return ActionService.create_goods_in_action(db, request.item_id, request.quantity)
    except WarehouseError as e:
        raise to_http_exception(e)


@router.post("/pick", response_model=ActionResponse, status_code=201)
async def create_pick_action(request: PickActionRequest, db: Session = Depends(get_db)):
    try:
        return ActionService.create_pick_action(
            db, request.item_id, request.department, request.quantity
        )
    except WarehouseError as e:
        raise to_http_exception(e)


@router.get("", response_model=List[ActionResponse])
async def list_actions(
    status: Optional[ActionStatus] = Query(None),
    db: Session = Depends(get_db)
):
    return ActionService.list_actions(db, status)


@router.get("/pending", response_model=List[ActionResponse])
async def pending_actions(db: Session = Depends(get_db)):
    """Tarefas em aberto para as estações de picking"""
    return ActionService.get_pending_actions(db)


@router.get("/{action_id}", response_model=ActionResponse)
async def get_action(action_id: int, db: Session = Depends(get_db)):
    try:
        return ActionService.get_action(db, action_id)
    except WarehouseError as e:
        raise to_http_exception(e)


@router.post("/{action_id}/start", response_model=ActionResponse)
async def start_action(action_id: int, request: ActionStartRequest, db: Session = Depends(get_db)):
    try:
        return ActionService.start_action(db, action_id, request.operator)
    except WarehouseError as e:
        raise to_http_exception(e)


@router.post("/{action_id}/complete", response_model=ScanResponse)
async def complete_action(
    action_id: int,
    request: ActionCompleteRequest,
    db: Session = Depends(get_db)
):
    """
    Scan do item da tarefa: executa o place/pick e conclui a tarefa juntos
    """
    try:
        movement = PlacementService.complete_action(
            db,
            action_id,
            request.system_code,
            location_code=request.location_code,
            operator=request.operator,
            ground_required=request.ground_required,
            notes=request.notes,
        )
    except WarehouseError as e:
        return ScanResponse(
            success=False,
            system_code=request.system_code,
            message="",
            error=e.message,
            error_code=e.code
        )

    verb = "alocado em" if movement.type.value == "IN" else "coletado de"
    return ScanResponse(
        success=True,
        system_code=request.system_code,
        message=f"Tarefa {action_id} concluída: item {verb} {movement.location_code}",
        location_code=movement.location_code,
        movement=MovementResponse.model_validate(movement)
    )


@router.delete("/{action_id}", status_code=204)
async def cancel_action(action_id: int, db: Session = Depends(get_db)):
    try:
        ActionService.cancel_action(db, action_id)
    except WarehouseError as e:
        raise to_http_exception(e)
