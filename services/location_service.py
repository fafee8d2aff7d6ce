"""
Diretório de posições: consulta, provisionamento e a única mutação
sancionada dos campos de ocupação (apply_occupancy_delta)
"""
import logging
from typing import Dict, List, Optional
from sqlalchemy import case
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from models.location import Location, StackedItem, GROUND_LEVEL
from services.allocation_service import effective_max_weight
from services.capacity_service import (
    CapacityPolicy,
    height_for,
    max_level_for,
    max_weight_for,
    normalize_level,
    parse_policy,
    parse_rack_type,
)
from services.codecs import format_bay, location_code
from services.distance_service import DistanceService
from services.exceptions import (
    CapacityExceeded,
    LocationNotEmpty,
    LocationUnavailable,
    StorageError,
    ValidationError,
    WarehouseError,
)
import config

logger = logging.getLogger(__name__)

# Posições por baia na geração em massa
LOCATIONS_PER_BAY = 3


class LocationService:
    """Gerencia posições e sua ocupação"""

    @staticmethod
    def get_by_code(db: Session, code: str, fresh: bool = False) -> Optional[Location]:
        """
        Busca posição pelo código. fresh=True ignora o identity map
        e relê o estado atual do banco.
        """
        query = db.query(Location).filter(Location.code == code)
        if fresh:
            query = query.populate_existing()
        return query.first()

    @staticmethod
    def list_locations(
        db: Session,
        row: Optional[str] = None,
        bay: Optional[str] = None,
        level: Optional[str] = None,
        rack_type: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Location]:
        query = db.query(Location)
        if row:
            query = query.filter(Location.row == row.upper())
        if bay:
            query = query.filter(Location.bay == format_bay(bay))
        if level is not None:
            query = query.filter(Location.level == normalize_level(level))
        if rack_type:
            query = query.filter(Location.rack_type == parse_rack_type(rack_type).value)
        if search:
            query = query.filter(Location.code.ilike(f"%{search}%"))
        locations = query.order_by(Location.id).all()
        return sorted(locations, key=lambda loc: (DistanceService.location_score(loc), loc.level, loc.position))

    @staticmethod
    def list_eligible(db: Session, require_ground: bool) -> List[Location]:
        """Posições disponíveis, verificadas e do tipo pedido (chão ou rack)"""
        query = db.query(Location).filter(
            Location.available == True,
            Location.verified == True,
        )
        if require_ground:
            query = query.filter(Location.level == GROUND_LEVEL)
        else:
            query = query.filter(Location.level != GROUND_LEVEL)
        return query.order_by(Location.id).all()

    @staticmethod
    def _unavailable_reason(location: Location) -> Optional[str]:
        if not location.available:
            return "está indisponível"
        if not location.verified:
            return "não está verificada"
        if location.is_ground and location.is_ground_full:
            return "está com o chão cheio"
        if not location.is_ground and (location.current_weight or 0.0) > 0:
            return "está ocupada"
        return None

    @staticmethod
    def check_can_accept(location: Location, weight: float, policy=None) -> None:
        """
        Valida (sem escrever) se a posição aceita o peso agora.
        Levanta LocationUnavailable ou CapacityExceeded.
        """
        policy = parse_policy(policy or config.CAPACITY_POLICY)
        reason = LocationService._unavailable_reason(location)
        if reason:
            raise LocationUnavailable(location.code, reason)
        if location.is_ground or policy == CapacityPolicy.SOFT:
            return
        max_weight = effective_max_weight(location)
        current = location.current_weight or 0.0
        if current + weight > max_weight:
            raise CapacityExceeded(location.code, current, weight, max_weight)

    @staticmethod
    def apply_occupancy_delta(
        db: Session,
        code: str,
        weight_delta: float,
        item_id: Optional[int] = None,
        stack_delta: int = 0,
        policy=None
    ) -> Location:
        """
        Aplica variação de ocupação numa única posição com UPDATE condicional
        (ler-modificar-escrever atômico no banco). Não faz commit: participa
        da transação do chamador.

        - entrada (weight_delta > 0): exige disponível/verificada; em rack
          exige posição vazia (um item por posição) e, com política strict,
          atual + delta <= teto; senão LocationUnavailable ou CapacityExceeded
        - saída (weight_delta <= 0): peso nunca fica negativo (clamp em 0)
        - chão: peso não restringe; stack_delta +1/-1 inclui/remove o item
          dos empilhados
        """
        policy = parse_policy(policy or config.CAPACITY_POLICY)

        location = LocationService.get_by_code(db, code, fresh=True)
        if not location:
            raise LocationUnavailable(code)

        new_weight = Location.current_weight + weight_delta
        adding = weight_delta > 0 or stack_delta > 0

        if adding:
            conditions = [
                Location.id == location.id,
                Location.available == True,
                Location.verified == True,
            ]
            if location.is_ground:
                conditions.append(Location.is_ground_full == False)
            else:
                # rack: um item por posição
                conditions.append(Location.current_weight <= 0)
            if not location.is_ground and policy == CapacityPolicy.STRICT:
                limit = location.max_weight
                if limit is None:
                    limit = effective_max_weight(location)
                conditions.append(new_weight <= limit)
            values = {Location.current_weight: new_weight}
        else:
            conditions = [Location.id == location.id]
            values = {
                Location.current_weight: case((new_weight < 0, 0.0), else_=new_weight)
            }
        values[Location.version] = Location.version + 1

        rows = db.query(Location).filter(*conditions).update(values, synchronize_session=False)

        if rows == 0:
            # Reler para explicar a recusa
            db.refresh(location)
            reason = LocationService._unavailable_reason(location)
            if reason:
                raise LocationUnavailable(code, reason)
            raise CapacityExceeded(
                code,
                location.current_weight or 0.0,
                weight_delta,
                effective_max_weight(location),
            )

        if location.is_ground and item_id is not None and stack_delta:
            existing = db.query(StackedItem).filter(
                StackedItem.location_id == location.id,
                StackedItem.item_id == item_id
            ).first()
            if stack_delta > 0 and not existing:
                db.add(StackedItem(location_id=location.id, item_id=item_id))
            elif stack_delta < 0 and existing:
                db.delete(existing)

        db.flush()
        db.refresh(location)
        db.expire(location, ["stacked_items"])
        return location

    @staticmethod
    def create_location(
        db: Session,
        row: str,
        bay,
        level,
        position,
        rack_type: Optional[str] = None,
        height: Optional[float] = None,
        max_weight: Optional[float] = None,
        commit: bool = True
    ) -> Location:
        """
        Cria posição com padrões do modelo de capacidade:
        teto e altura derivados do (nível, tipo de rack) salvo override
        """
        rack = parse_rack_type(rack_type or config.DEFAULT_RACK_TYPE)
        level = normalize_level(level)
        row = (row or "").strip().upper()
        if not row:
            raise ValidationError("Rua é obrigatória")

        if level == GROUND_LEVEL:
            max_weight = None
        elif max_weight is None:
            max_weight = max_weight_for(level, rack)
        elif max_weight <= 0:
            raise ValidationError(f"Peso máximo inválido: {max_weight}")

        if height is None:
            height = height_for(level, rack)

        location = Location(
            code=location_code(row, bay, level, position),
            row=row,
            bay=format_bay(bay),
            level=level,
            position=str(position),
            rack_type=rack.value,
            max_weight=max_weight,
            current_weight=0.0,
            available=True,
            verified=True,
            is_ground_full=False,
            height=height,
            version=0,
        )
        db.add(location)
        if commit:
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise ValidationError(f"Posição {location.code} já existe") from e
            except SQLAlchemyError as e:
                db.rollback()
                raise StorageError(f"Erro ao criar posição: {e}") from e
            db.refresh(location)
        return location

    @staticmethod
    def generate_locations(
        db: Session,
        row: str,
        bay_start: int,
        bay_end: int,
        max_level: int = 4,
        rack_type: Optional[str] = None,
        heights: Optional[Dict[str, float]] = None,
        weight_limits: Optional[Dict[str, float]] = None
    ) -> dict:
        """
        Gera posições em massa: para cada baia, LOCATIONS_PER_BAY posições
        em cada nível de 0 até max_level. Códigos já existentes são ignorados.

        Retorna:
            {"created": [codes], "skipped": [codes]}
        """
        rack = parse_rack_type(rack_type or config.DEFAULT_RACK_TYPE)
        if bay_start < 1 or bay_start > bay_end:
            raise ValidationError("Baia inicial deve ser >= 1 e <= baia final")
        if max_level < 0 or max_level > max_level_for(rack):
            raise ValidationError(
                f"Nível máximo deve estar entre 0 e {max_level_for(rack)} para rack {rack.value}"
            )
        heights = heights or {}
        weight_limits = weight_limits or {}

        existing = {code for (code,) in db.query(Location.code).all()}
        created = []
        skipped = []

        try:
            for bay in range(bay_start, bay_end + 1):
                for position in range(1, LOCATIONS_PER_BAY + 1):
                    for level in range(0, max_level + 1):
                        code = location_code(row, bay, level, position)
                        if code in existing:
                            skipped.append(code)
                            continue
                        LocationService.create_location(
                            db,
                            row=row,
                            bay=bay,
                            level=level,
                            position=position,
                            rack_type=rack.value,
                            height=heights.get(str(level)),
                            max_weight=weight_limits.get(str(level)),
                            commit=False,
                        )
                        created.append(code)
            db.commit()
        except WarehouseError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Erro ao gerar posições: {e}") from e

        logger.info(f"Geradas {len(created)} posições na rua {row} ({len(skipped)} já existiam)")
        return {"created": created, "skipped": skipped}

    @staticmethod
    def update_flags(
        db: Session,
        code: str,
        available: Optional[bool] = None,
        verified: Optional[bool] = None,
        is_ground_full: Optional[bool] = None,
        height: Optional[float] = None
    ) -> Location:
        """Edição administrativa (não toca nos campos de ocupação)"""
        location = LocationService.get_by_code(db, code)
        if not location:
            raise LocationUnavailable(code)

        if is_ground_full is not None and not location.is_ground:
            raise ValidationError(f"Posição {code} não é de chão")

        values = {}
        if available is not None:
            values[Location.available] = available
        if verified is not None:
            values[Location.verified] = verified
        if is_ground_full is not None:
            values[Location.is_ground_full] = is_ground_full
        if height is not None:
            if height < 0:
                raise ValidationError(f"Altura inválida: {height}")
            values[Location.height] = height
        if not values:
            return location

        try:
            db.query(Location).filter(Location.id == location.id).update(
                values, synchronize_session=False
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Erro ao atualizar posição: {e}") from e

        db.refresh(location)
        return location

    @staticmethod
    def delete_location(db: Session, code: str) -> None:
        """Exclui posição vazia (sem peso e sem itens empilhados)"""
        location = LocationService.get_by_code(db, code, fresh=True)
        if not location:
            raise LocationUnavailable(code)

        try:
            rows = db.query(Location).filter(
                Location.id == location.id,
                Location.current_weight <= 0,
                ~Location.stacked_items.any(),
            ).delete(synchronize_session=False)
            if rows == 0:
                db.rollback()
                raise LocationNotEmpty(code)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Erro ao excluir posição: {e}") from e

        db.expunge(location)
        logger.info(f"Posição {code} excluída")
