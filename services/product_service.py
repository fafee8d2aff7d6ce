"""
Catálogo de produtos/SKU: lembra descrição, categoria e peso padrão para
preencher o registro de itens, ordenado pelos mais usados recentemente
"""
import logging
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from models.product import Product
from services.exceptions import StorageError, ValidationError
import config

logger = logging.getLogger(__name__)


class ProductService:
    """Consulta e atualização do catálogo"""

    @staticmethod
    def get_product_by_sku(db: Session, sku: str) -> Optional[Product]:
        sku = (sku or "").strip()
        if not sku:
            raise ValidationError("SKU é obrigatório")
        return db.query(Product).filter(Product.sku == sku).populate_existing().first()

    @staticmethod
    def save_product(
        db: Session,
        sku: str,
        category: str,
        description: str = "",
        weight: Optional[float] = None,
        coil_number: Optional[str] = None,
        coil_length: Optional[str] = None
    ) -> Product:
        """
        Cria ou atualiza o produto pelo SKU. Cada gravação conta como um uso
        (usage_count + 1, last_used = agora).
        """
        sku = (sku or "").strip()
        category = (category or "").strip()
        if not sku or not category:
            raise ValidationError("Campos obrigatórios: sku, category")
        if weight is not None and weight <= 0:
            raise ValidationError(f"Peso inválido: {weight}")

        values = {
            Product.description: (description or "").strip(),
            Product.category: category,
            Product.weight: weight,
            Product.coil_number: coil_number,
            Product.coil_length: coil_length,
        }

        try:
            product = ProductService._bump(db, sku, values)
            if product is None:
                db.add(Product(
                    sku=sku,
                    description=(description or "").strip(),
                    category=category,
                    weight=weight,
                    coil_number=coil_number,
                    coil_length=coil_length,
                    usage_count=1,
                ))
                try:
                    db.commit()
                except IntegrityError:
                    # outro cadastro do mesmo SKU chegou antes
                    db.rollback()
                    if ProductService._bump(db, sku, values) is None:
                        raise
                    db.commit()
            else:
                db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Erro ao salvar produto {sku}: {e}") from e

        logger.info(f"Produto {sku} salvo")
        return ProductService.get_product_by_sku(db, sku)

    @staticmethod
    def record_usage(db: Session, sku: str) -> Optional[Product]:
        """Conta um uso do produto (registro de item); None se fora do catálogo"""
        try:
            product = ProductService._bump(db, sku, {})
            if product is None:
                return None
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Erro ao atualizar produto {sku}: {e}") from e
        return ProductService.get_product_by_sku(db, sku)

    @staticmethod
    def _bump(db: Session, sku: str, values: dict) -> Optional[Product]:
        """Incremento atômico de uso; não faz commit"""
        rows = db.query(Product).filter(Product.sku == sku.strip()).update({
            **values,
            Product.usage_count: Product.usage_count + 1,
            Product.last_used: func.now(),
        }, synchronize_session=False)
        if rows == 0:
            return None
        return db.query(Product).filter(Product.sku == sku.strip()).populate_existing().first()

    @staticmethod
    def list_products(
        db: Session,
        category: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Product]:
        """Produtos mais usados recentemente primeiro"""
        limit = limit or config.PRODUCT_LIST_LIMIT
        query = db.query(Product)
        if category:
            query = query.filter(Product.category == category)
        return query.order_by(
            Product.last_used.desc(),
            Product.usage_count.desc(),
            Product.id.desc()
        ).limit(limit).all()

    @staticmethod
    def search_products(
        db: Session,
        term: Optional[str] = None,
        category: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Product]:
        """Busca por trecho do SKU ou da descrição (sem diferenciar maiúsculas)"""
        term = (term or "").strip()
        if not term:
            return ProductService.list_products(db, category, limit)

        limit = limit or config.PRODUCT_LIST_LIMIT
        pattern = f"%{term}%"
        query = db.query(Product).filter(
            or_(Product.sku.ilike(pattern), Product.description.ilike(pattern))
        )
        if category:
            query = query.filter(Product.category == category)
        return query.order_by(
            Product.last_used.desc(),
            Product.usage_count.desc(),
            Product.id.desc()
        ).limit(limit).all()
