"""
Rotas do catálogo de produtos
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from models.database import get_db
from schemas.product_schemas import ProductResponse, ProductSaveRequest
from services.exceptions import WarehouseError
from services.product_service import ProductService
from routers.errors import to_http_exception

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductResponse])
async def search_products(
    search: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """Mais usados recentemente; filtra por SKU/descrição e categoria"""
    return ProductService.search_products(db, search, category)


@router.post("", response_model=ProductResponse)
async def save_product(request: ProductSaveRequest, db: Session = Depends(get_db)):
    try:
        return ProductService.save_product(
            db,
            sku=request.sku,
            category=request.category,
            description=request.description,
            weight=request.weight,
            coil_number=request.coil_number,
            coil_length=request.coil_length,
        )
    except WarehouseError as e:
        raise to_http_exception(e)


@router.get("/{sku}", response_model=ProductResponse)
async def get_product(sku: str, db: Session = Depends(get_db)):
    try:
        product = ProductService.get_product_by_sku(db, sku)
    except WarehouseError as e:
        raise to_http_exception(e)
    if not product:
        raise HTTPException(status_code=404, detail=f"Produto {sku} não encontrado")
    return product
