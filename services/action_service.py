"""
Fila de tarefas do armazém (goods-in a guardar, picks a separar).

A tarefa só é concluída junto com o place/pick correspondente, dentro da
mesma transação (ver PlacementService.complete_action).
"""
import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from models.action import ActionStatus, ActionType, WarehouseAction
from models.item import Item, ItemStatus
from services.exceptions import (
    ActionClosed,
    ActionNotFound,
    InvalidTransition,
    StorageError,
    ValidationError,
)
from services.item_service import ItemService, PICK, PLACE

logger = logging.getLogger(__name__)

OPEN_STATUSES = (ActionStatus.PENDING, ActionStatus.IN_PROGRESS)


class ActionService:
    """Cria, lista e avança tarefas da fila"""

    @staticmethod
    def _create(
        db: Session,
        item: Item,
        action_type: ActionType,
        department: Optional[str] = None,
        quantity: Optional[int] = None
    ) -> WarehouseAction:
        if quantity is not None and quantity <= 0:
            raise ValidationError(f"Quantidade inválida: {quantity}")

        already_open = db.query(WarehouseAction).filter(
            WarehouseAction.item_id == item.id,
            WarehouseAction.status.in_(OPEN_STATUSES)
        ).first()
        if already_open:
            raise ValidationError(f"Item {item.id} já possui a tarefa {already_open.id} em aberto")

        action = WarehouseAction(
            item_id=item.id,
            item_code=item.item_code,
            system_code=item.system_code,
            description=item.description or "",
            category=item.category,
            weight=item.weight or 0.0,
            location_code=item.location_code if action_type == ActionType.OUT else None,
            action_type=action_type,
            status=ActionStatus.PENDING,
            department=department,
            quantity=quantity,
        )
        db.add(action)
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Erro ao criar tarefa: {e}") from e

        db.refresh(action)
        logger.info(f"Tarefa {action.id} ({action_type.value}) criada para o item {item.id}")
        return action

    @staticmethod
    def create_goods_in_action(
        db: Session,
        item_id: int,
        quantity: Optional[int] = None
    ) -> WarehouseAction:
        """Tarefa de guarda para um item recém-registrado (status pending)"""
        item = ItemService.get_item(db, item_id, fresh=True)
        ItemService.check_transition(item, PLACE)
        return ActionService._create(db, item, ActionType.IN, quantity=quantity)

    @staticmethod
    def create_pick_action(
        db: Session,
        item_id: int,
        department: str,
        quantity: Optional[int] = None
    ) -> WarehouseAction:
        """Tarefa de separação para um item alocado; departamento é obrigatório"""
        department = (department or "").strip()
        if not department:
            raise ValidationError("Departamento é obrigatório para tarefas de pick")

        item = ItemService.get_item(db, item_id, fresh=True)
        ItemService.check_transition(item, PICK)
        return ActionService._create(db, item, ActionType.OUT, department=department, quantity=quantity)

    @staticmethod
    def get_action(db: Session, action_id: int, fresh: bool = False) -> WarehouseAction:
        query = db.query(WarehouseAction).filter(WarehouseAction.id == action_id)
        if fresh:
            query = query.populate_existing()
        action = query.first()
        if not action:
            raise ActionNotFound(action_id)
        return action

    @staticmethod
    def list_actions(db: Session, status: Optional[ActionStatus] = None) -> List[WarehouseAction]:
        query = db.query(WarehouseAction)
        if status is not None:
            query = query.filter(WarehouseAction.status == status)
        return query.order_by(WarehouseAction.created_at.desc(), WarehouseAction.id.desc()).all()

    @staticmethod
    def get_pending_actions(db: Session) -> List[WarehouseAction]:
        """Tarefas em aberto (pending ou in-progress), mais recentes primeiro"""
        return db.query(WarehouseAction).filter(
            WarehouseAction.status.in_(OPEN_STATUSES)
        ).order_by(WarehouseAction.created_at.desc(), WarehouseAction.id.desc()).all()

    @staticmethod
    def start_action(db: Session, action_id: int, operator: Optional[str] = None) -> WarehouseAction:
        """pending -> in-progress (operador assumiu a tarefa)"""
        action = ActionService.get_action(db, action_id)
        try:
            rows = db.query(WarehouseAction).filter(
                WarehouseAction.id == action.id,
                WarehouseAction.status == ActionStatus.PENDING
            ).update({
                WarehouseAction.status: ActionStatus.IN_PROGRESS,
                WarehouseAction.operator: operator,
                WarehouseAction.updated_at: func.now(),
            }, synchronize_session=False)
            if rows == 0:
                db.rollback()
                db.refresh(action)
                raise ActionClosed(action.id, action.status)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Erro ao iniciar tarefa: {e}") from e

        db.refresh(action)
        return action

    @staticmethod
    def mark_completed(
        db: Session,
        action: WarehouseAction,
        location_code: str,
        operator: str
    ) -> WarehouseAction:
        """
        UPDATE condicional: só uma conclusão encontra a tarefa em aberto.
        Não faz commit: participa da transação do place/pick.
        """
        rows = db.query(WarehouseAction).filter(
            WarehouseAction.id == action.id,
            WarehouseAction.status.in_(OPEN_STATUSES)
        ).update({
            WarehouseAction.status: ActionStatus.COMPLETED,
            WarehouseAction.location_code: location_code,
            WarehouseAction.operator: operator,
            WarehouseAction.updated_at: func.now(),
        }, synchronize_session=False)

        db.refresh(action)
        if rows == 0:
            raise ActionClosed(action.id, action.status)
        return action

    @staticmethod
    def cancel_action(db: Session, action_id: int) -> None:
        """Remove tarefa ainda em aberto; concluídas ficam como histórico"""
        action = ActionService.get_action(db, action_id, fresh=True)
        try:
            rows = db.query(WarehouseAction).filter(
                WarehouseAction.id == action.id,
                WarehouseAction.status.in_(OPEN_STATUSES)
            ).delete(synchronize_session=False)
            if rows == 0:
                db.rollback()
                raise ActionClosed(action.id, action.status)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Erro ao cancelar tarefa: {e}") from e

        db.expunge(action)
        logger.info(f"Tarefa {action_id} cancelada")

    @staticmethod
    def check_matches(action: WarehouseAction, item: Item, scanned_code: Optional[str]) -> None:
        """Valida o scan contra a tarefa e o estado do item (sem escrita)"""
        if action.status not in OPEN_STATUSES:
            raise ActionClosed(action.id, action.status)
        if (scanned_code or "").strip() != action.system_code:
            raise ValidationError(
                f"Item escaneado ({scanned_code}) não corresponde à tarefa {action.id}"
            )
        expected = ItemStatus.PENDING if action.action_type == ActionType.IN else ItemStatus.PLACED
        if item.status != expected:
            action_name = PLACE if action.action_type == ActionType.IN else PICK
            raise InvalidTransition(item.id, item.status, action_name)
