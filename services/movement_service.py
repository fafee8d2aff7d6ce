"""
Livro de movimentos: auditoria somente-inserção de entradas (IN) e saídas (OUT)
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from models.movement import Movement, MovementType
import config


class MovementService:
    """Sem update/delete: movimentos nunca mudam depois de criados"""

    @staticmethod
    def append(
        db: Session,
        item_id: int,
        movement_type: MovementType,
        weight: float,
        operator: str,
        reference: str,
        location_code: Optional[str] = None,
        notes: Optional[str] = None
    ) -> Movement:
        """Insere movimento na transação corrente (sem commit)"""
        movement = Movement(
            item_id=item_id,
            type=movement_type,
            weight=weight,
            operator=operator,
            reference=reference,
            location_code=location_code,
            notes=notes,
        )
        db.add(movement)
        db.flush()
        return movement

    @staticmethod
    def recent(db: Session, limit: Optional[int] = None) -> List[Movement]:
        """Movimentos mais recentes primeiro, janela limitada"""
        if limit is None:
            limit = config.RECENT_MOVEMENTS_LIMIT
        limit = max(1, min(limit, config.MAX_MOVEMENTS_LIMIT))
        return db.query(Movement).order_by(
            Movement.ts.desc(),
            Movement.id.desc()
        ).limit(limit).all()

    @staticmethod
    def for_item(db: Session, item_id: int) -> List[Movement]:
        return db.query(Movement).filter(
            Movement.item_id == item_id
        ).order_by(Movement.id).all()
