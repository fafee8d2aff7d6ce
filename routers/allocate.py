"""
Rota de sugestão de posição (sem escrita)
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from models.database import get_db
from schemas.allocation_schemas import AllocationRequest, AllocationResponse
from services.allocation_service import AllocationService
from services.exceptions import NoLocationAvailable, WarehouseError
from routers.errors import to_http_exception

router = APIRouter(prefix="/allocate", tags=["allocate"])


@router.post("", response_model=AllocationResponse)
async def allocate(request: AllocationRequest, db: Session = Depends(get_db)):
    """
    Retorna a melhor posição para o peso informado.
    Sem posição viável: location_code None e error_code NO_LOCATION_AVAILABLE
    """
    try:
        location = AllocationService.allocate(db, request.weight, request.ground_required)
    except WarehouseError as e:
        raise to_http_exception(e)

    if location is None:
        error = NoLocationAvailable(request.weight, request.ground_required)
        return AllocationResponse(error=error.message, error_code=error.code)

    return AllocationResponse(location_code=location.code)
