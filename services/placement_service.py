"""
Transação de entrada/saída: ocupação da posição + status do item +
registro de movimento, aplicados como uma única unidade (commit ou rollback)
"""
import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from models.action import ActionType, WarehouseAction
from models.movement import Movement, MovementType
from services.action_service import ActionService
from services.allocation_service import AllocationService
from services.exceptions import (
    LocationUnavailable,
    NoLocationAvailable,
    StorageError,
    WarehouseError,
)
from services.item_service import ItemService, PICK, PLACE
from services.location_service import LocationService
from services.movement_service import MovementService
import config

logger = logging.getLogger(__name__)


class PlacementService:
    """Orquestra place/pick sobre posições, itens e movimentos"""

    @staticmethod
    def place(
        db: Session,
        item_id: int,
        location_code: str,
        operator: Optional[str] = None,
        notes: Optional[str] = None,
        policy=None,
        action: Optional[WarehouseAction] = None
    ) -> Movement:
        """
        Coloca um item pending na posição informada.

        1. valida a transição (sem escrita)
        2. revalida a posição contra o estado atual do banco
        3. aplica o delta de ocupação (UPDATE condicional)
        4. item -> placed
        5. registra movimento IN
        6. conclui a tarefa da fila, se informada
        Passos 3-6 são confirmados juntos; qualquer falha desfaz o grupo.
        """
        operator = operator or config.DEFAULT_OPERATOR
        try:
            item = ItemService.get_item(db, item_id, fresh=True)
            ItemService.check_transition(item, PLACE)

            location = LocationService.get_by_code(db, location_code, fresh=True)
            if not location:
                raise LocationUnavailable(location_code)
            LocationService.check_can_accept(location, item.weight, policy)

            location = LocationService.apply_occupancy_delta(
                db,
                location.code,
                item.weight,
                item_id=item.id,
                stack_delta=1 if location.is_ground else 0,
                policy=policy,
            )
            ItemService.mark_placed(db, item, location.code)
            movement = MovementService.append(
                db,
                item_id=item.id,
                movement_type=MovementType.IN,
                weight=item.weight,
                operator=operator,
                reference=item.item_code,
                location_code=location.code,
                notes=notes or f"Alocado em {location.code}",
            )
            if action is not None:
                ActionService.mark_completed(db, action, location.code, operator)
            db.commit()
        except WarehouseError as e:
            db.rollback()
            logger.warning(f"Place do item {item_id} em {location_code} recusado: [{e.code}] {e.message}")
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Place do item {item_id} em {location_code} desfeito: {e}")
            raise StorageError(f"Erro ao alocar item {item_id}: {e}") from e

        db.refresh(movement)
        logger.info(f"Item {item_id} alocado em {location_code} por {operator} ({movement.weight}kg)")
        return movement

    @staticmethod
    def pick(
        db: Session,
        item_id: int,
        operator: Optional[str] = None,
        notes: Optional[str] = None,
        action: Optional[WarehouseAction] = None
    ) -> Movement:
        """
        Retira um item placed da posição registrada nele.
        Mesmo fluxo transacional do place; peso da posição nunca fica negativo.
        """
        operator = operator or config.DEFAULT_OPERATOR
        location_code = None
        try:
            item = ItemService.get_item(db, item_id, fresh=True)
            ItemService.check_transition(item, PICK)

            location_code = item.location_code
            location = LocationService.get_by_code(db, location_code, fresh=True)
            if not location:
                raise LocationUnavailable(location_code)

            LocationService.apply_occupancy_delta(
                db,
                location.code,
                -item.weight,
                item_id=item.id,
                stack_delta=-1 if location.is_ground else 0,
            )
            ItemService.mark_removed(db, item)
            movement = MovementService.append(
                db,
                item_id=item.id,
                movement_type=MovementType.OUT,
                weight=item.weight,
                operator=operator,
                reference=item.item_code,
                location_code=location.code,
                notes=notes or f"Coletado de {location.code}",
            )
            if action is not None:
                ActionService.mark_completed(db, action, location.code, operator)
            db.commit()
        except WarehouseError as e:
            db.rollback()
            logger.warning(f"Pick do item {item_id} recusado: [{e.code}] {e.message}")
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Pick do item {item_id} desfeito: {e}")
            raise StorageError(f"Erro ao coletar item {item_id}: {e}") from e

        db.refresh(movement)
        logger.info(f"Item {item_id} coletado de {location_code} por {operator}")
        return movement

    @staticmethod
    def place_auto(
        db: Session,
        item_id: int,
        operator: Optional[str] = None,
        ground_required: bool = False,
        notes: Optional[str] = None,
        action: Optional[WarehouseAction] = None
    ) -> Movement:
        """Aloca automaticamente a melhor posição e faz o place"""
        item = ItemService.get_item(db, item_id, fresh=True)
        ItemService.check_transition(item, PLACE)

        location = AllocationService.allocate(db, item.weight, ground_required)
        if location is None:
            raise NoLocationAvailable(item.weight, ground_required)

        return PlacementService.place(db, item.id, location.code, operator, notes, action=action)

    @staticmethod
    def complete_action(
        db: Session,
        action_id: int,
        scanned_code: str,
        location_code: Optional[str] = None,
        operator: Optional[str] = None,
        ground_required: bool = False,
        notes: Optional[str] = None
    ) -> Movement:
        """
        Conclui uma tarefa da fila com o scan do item:
        - in: place na posição informada (ou na sugerida pela alocação)
        - out: pick da posição registrada no item
        A tarefa vira completed na mesma transação do movimento.
        """
        action = ActionService.get_action(db, action_id, fresh=True)
        item = ItemService.get_item(db, action.item_id, fresh=True)
        ActionService.check_matches(action, item, scanned_code)

        if action.action_type == ActionType.OUT:
            return PlacementService.pick(db, item.id, operator, notes, action=action)

        target = location_code or action.location_code
        if target:
            return PlacementService.place(db, item.id, target, operator, notes, action=action)
        return PlacementService.place_auto(db, item.id, operator, ground_required, notes, action=action)
