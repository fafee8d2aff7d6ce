"""
Rotas para consulta do livro de movimentos
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from models.database import get_db
from schemas.movement_schemas import MovementResponse
from services.movement_service import MovementService

router = APIRouter(prefix="/movements", tags=["movements"])


@router.get("", response_model=List[MovementResponse])
async def list_recent_movements(
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db)
):
    """Movimentos mais recentes primeiro"""
    return MovementService.recent(db, limit)
