"""
Rotas para registro e consulta de itens
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from models.database import get_db
from models.item import ItemStatus
from schemas.item_schemas import ItemCreateRequest, ItemResponse
from schemas.movement_schemas import MovementResponse
from services.exceptions import ItemNotFound, WarehouseError
from services.item_service import ItemService
from services.movement_service import MovementService
from services.product_service import ProductService
from routers.errors import to_http_exception

router = APIRouter(prefix="/items", tags=["items"])


@router.post("", response_model=ItemResponse, status_code=201)
async def register_item(request: ItemCreateRequest, db: Session = Depends(get_db)):
    """
    Registra item para entrada (status pending).
    Campos omitidos vêm do catálogo quando o item_code é um SKU conhecido.
    """
    try:
        product = None
        if request.item_code.strip():
            product = ProductService.get_product_by_sku(db, request.item_code)

        category = request.category
        description = request.description
        weight = request.weight
        if product:
            category = category or product.category
            description = product.description if description is None else description
            weight = weight or product.weight

        item = ItemService.register_item(
            db,
            item_code=request.item_code,
            system_code=request.system_code,
            category=category,
            weight=weight,
            description=description or "",
        )
        if product:
            ProductService.record_usage(db, product.sku)
        return item
    except WarehouseError as e:
        raise to_http_exception(e)


@router.get("", response_model=List[ItemResponse])
async def list_items(
    status: Optional[ItemStatus] = Query(None),
    location_code: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    return ItemService.list_items(db, status=status, location_code=location_code)


@router.get("/scan/{system_code}", response_model=ItemResponse)
async def get_item_by_system_code(system_code: str, db: Session = Depends(get_db)):
    """Busca item pelo código de scan"""
    item = ItemService.get_by_system_code(db, system_code)
    if not item:
        raise to_http_exception(ItemNotFound(system_code))
    return item


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(item_id: int, db: Session = Depends(get_db)):
    try:
        return ItemService.get_item(db, item_id)
    except WarehouseError as e:
        raise to_http_exception(e)


@router.get("/{item_id}/movements", response_model=List[MovementResponse])
async def get_item_movements(item_id: int, db: Session = Depends(get_db)):
    """Histórico de movimentos do item (mantido mesmo após a saída)"""
    try:
        ItemService.get_item(db, item_id)
    except WarehouseError as e:
        raise to_http_exception(e)
    return MovementService.for_item(db, item_id)
