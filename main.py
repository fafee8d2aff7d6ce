"""
Aplicação principal FastAPI para alocação de posições e movimentação de itens
"""
import logging
import os
from fastapi import FastAPI, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func
from models.database import get_db, Base, engine
from models.location import Location
from models.item import Item, ItemStatus
from models.action import WarehouseAction
from routers import (
    locations_router,
    items_router,
    allocate_router,
    scan_router,
    movements_router,
    actions_router,
    products_router,
)
from schemas.movement_schemas import MovementResponse
from services.action_service import OPEN_STATUSES
from services.movement_service import MovementService
import config

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Criar diretório storage se não existir (SQLite padrão)
os.makedirs("storage", exist_ok=True)

# Criar app FastAPI
app = FastAPI(
    title="Alocação de Posições",
    description="Alocação de itens em posições de armazenagem com controle de peso e movimentos"
)

app.include_router(locations_router)
app.include_router(items_router)
app.include_router(allocate_router)
app.include_router(scan_router)
app.include_router(movements_router)
app.include_router(actions_router)
app.include_router(products_router)


@app.on_event("startup")
async def startup_event():
    """Inicializar banco de dados na startup"""
    Base.metadata.create_all(bind=engine)
    logger.info("Tabelas verificadas")


@app.get("/")
async def dashboard(db: Session = Depends(get_db)):
    """Resumo: posições, posições livres, itens por status, tarefas abertas e últimos movimentos"""
    total_locations = db.query(func.count(Location.id)).scalar() or 0

    # Livres: disponíveis, verificadas e sem peso/empilhamento
    free_locations = db.query(func.count(Location.id)).filter(
        Location.available == True,
        Location.verified == True,
        Location.current_weight <= 0,
        ~Location.stacked_items.any()
    ).scalar() or 0

    items_by_status = {
        status.value: db.query(func.count(Item.id)).filter(Item.status == status).scalar() or 0
        for status in ItemStatus
    }

    pending_actions = db.query(func.count(WarehouseAction.id)).filter(
        WarehouseAction.status.in_(OPEN_STATUSES)
    ).scalar() or 0

    recent_movements = MovementService.recent(db, 10)

    return {
        "total_locations": total_locations,
        "free_locations": free_locations,
        "items": items_by_status,
        "pending_actions": pending_actions,
        "recent_movements": [
            MovementResponse.model_validate(m).model_dump(mode="json") for m in recent_movements
        ],
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
