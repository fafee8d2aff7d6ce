"""
Ciclo de vida dos itens: pending --place--> placed --pick--> removed
"""
import logging
from typing import List, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from models.item import Item, ItemStatus
from services.exceptions import (
    DuplicateItem,
    InvalidTransition,
    ItemNotFound,
    LocationUnavailable,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

PLACE = "place"
PICK = "pick"

# ação -> (status de origem, status de destino)
TRANSITIONS = {
    PLACE: (ItemStatus.PENDING, ItemStatus.PLACED),
    PICK: (ItemStatus.PLACED, ItemStatus.REMOVED),
}


class ItemService:
    """Gerencia registro de itens e transições de status"""

    @staticmethod
    def register_item(
        db: Session,
        item_code: str,
        system_code: str,
        category: str,
        weight: float,
        description: str = ""
    ) -> Item:
        """Registra item para goods-in com status pending"""
        item_code = (item_code or "").strip()
        system_code = (system_code or "").strip()
        category = (category or "").strip()
        if not item_code or not system_code or not category:
            raise ValidationError("Campos obrigatórios: item_code, system_code, category")
        if weight is None or weight <= 0:
            raise ValidationError(f"Peso inválido: {weight}")

        item = Item(
            item_code=item_code,
            system_code=system_code,
            description=(description or "").strip(),
            category=category,
            weight=weight,
            status=ItemStatus.PENDING,
            location_code=None,
            location_verified=False,
        )
        db.add(item)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise DuplicateItem(system_code) from e
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Erro ao registrar item: {e}") from e

        db.refresh(item)
        logger.info(f"Item {item.id} ({system_code}) registrado, {weight}kg")
        return item

    @staticmethod
    def get_item(db: Session, item_id: int, fresh: bool = False) -> Item:
        query = db.query(Item).filter(Item.id == item_id)
        if fresh:
            query = query.populate_existing()
        item = query.first()
        if not item:
            raise ItemNotFound(item_id)
        return item

    @staticmethod
    def get_by_system_code(db: Session, system_code: str) -> Optional[Item]:
        if not (system_code or "").strip():
            raise ValidationError("system_code é obrigatório")
        return db.query(Item).filter(Item.system_code == system_code.strip()).first()

    @staticmethod
    def list_items(
        db: Session,
        status: Optional[ItemStatus] = None,
        location_code: Optional[str] = None
    ) -> List[Item]:
        query = db.query(Item)
        if status is not None:
            query = query.filter(Item.status == status)
        if location_code:
            query = query.filter(
                Item.location_code == location_code,
                Item.status == ItemStatus.PLACED
            )
        return query.order_by(Item.id).all()

    @staticmethod
    def check_transition(item: Item, action: str) -> None:
        """Valida (sem escrever) que a ação é permitida no status atual"""
        source, _ = TRANSITIONS[action]
        if item.status != source:
            raise InvalidTransition(item.id, item.status, action)
        if action == PICK and not item.location_code:
            raise LocationUnavailable(None, f"não registrada para o item {item.id}")

    @staticmethod
    def _apply(db: Session, item: Item, action: str, values: dict) -> Item:
        """
        UPDATE condicional em (id, status esperado): de duas transições
        concorrentes no mesmo item, só uma encontra a linha.
        Não faz commit.
        """
        source, target = TRANSITIONS[action]
        values = {**values, Item.status: target, Item.last_updated: func.now()}
        rows = db.query(Item).filter(
            Item.id == item.id,
            Item.status == source
        ).update(values, synchronize_session=False)

        db.refresh(item)
        if rows == 0:
            raise InvalidTransition(item.id, item.status, action)
        return item

    @staticmethod
    def mark_placed(db: Session, item: Item, location_code: str) -> Item:
        return ItemService._apply(db, item, PLACE, {
            Item.location_code: location_code,
            Item.location_verified: True,
        })

    @staticmethod
    def mark_removed(db: Session, item: Item) -> Item:
        return ItemService._apply(db, item, PICK, {
            Item.location_code: None,
            Item.location_verified: False,
        })
