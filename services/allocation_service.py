"""
Serviço de alocação: escolhe a melhor posição para um item com base
em distância e adequação de peso ao nível (sem I/O no motor de score)
"""
import logging
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from models.location import Location
from services.capacity_service import (
    CapacityPolicy,
    GROUND_LEVEL,
    max_weight_for,
    parse_policy,
)
from services.distance_service import DistanceService
from services.exceptions import ValidationError
import config

logger = logging.getLogger(__name__)

# Fator do número de empilhados no score de chão; maior que o
# distance_score máximo com os custos padrão (ruas A..Z, baias até 99)
GROUND_STACK_WEIGHT = 10 ** 6


def effective_max_weight(location: Location) -> Optional[float]:
    """Teto gravado na posição ou, se ausente, o do modelo de capacidade"""
    if location.level == GROUND_LEVEL:
        return None
    if location.max_weight is not None:
        return location.max_weight
    return max_weight_for(location.level, location.rack_type)


class AllocationService:
    """Motor de alocação (puro) e wrapper com acesso ao banco"""

    @staticmethod
    def weight_score(
        location: Location,
        weight: float,
        policy: CapacityPolicy = CapacityPolicy.STRICT
    ) -> Optional[float]:
        """
        Penalidade de peso (menor é melhor). None = posição inviável.
        - chão: sempre 0
        - penaliza itens pesados em níveis altos (peso * nível * 2)
        - strict: exclui se atual + peso > teto; soma folga de capacidade
          e utilização do nível
        """
        if location.level == GROUND_LEVEL:
            return 0.0

        level_num = int(location.level)
        height_penalty = weight * level_num * 2

        if policy == CapacityPolicy.SOFT:
            return height_penalty

        max_weight = effective_max_weight(location)
        new_weight = (location.current_weight or 0.0) + weight
        if new_weight > max_weight:
            return None

        capacity_score = abs(max_weight - new_weight)
        level_penalty = new_weight / max_weight * 1000
        return height_penalty + capacity_score + level_penalty

    @staticmethod
    def rank_locations(
        locations: List[Location],
        weight: float,
        ground_required: bool = False,
        policy=None
    ) -> List[Tuple[Location, float]]:
        """
        Retorna candidatos viáveis ordenados do melhor para o pior, com o
        score total de cada um (chão: empilhados * GROUND_STACK_WEIGHT + distância;
        rack: distância + penalidade de peso, só posições vazias).
        Ordenação estável: empates mantêm a ordem de entrada.
        """
        policy = parse_policy(policy or config.CAPACITY_POLICY)

        candidates = [
            loc for loc in locations
            if loc.available and loc.verified
            and (loc.level == GROUND_LEVEL) == ground_required
        ]
        if not candidates:
            return []

        if ground_required:
            free = [loc for loc in candidates if not loc.is_ground_full]
            # chave: itens empilhados, depois proximidade
            keyed = [
                (loc, loc.stacked_count, DistanceService.location_score(loc))
                for loc in free
            ]
            keyed.sort(key=lambda x: (x[1], x[2]))
            return [
                (loc, float(stacked * GROUND_STACK_WEIGHT + distance))
                for loc, stacked, distance in keyed
            ]

        scored = []
        for loc in candidates:
            if (loc.current_weight or 0.0) > 0:
                # rack: um item por posição
                continue
            w_score = AllocationService.weight_score(loc, weight, policy)
            if w_score is None:
                continue
            scored.append((loc, DistanceService.location_score(loc) + w_score))

        scored.sort(key=lambda x: x[1])
        return scored

    @staticmethod
    def find_optimal_location(
        locations: List[Location],
        weight: float,
        ground_required: bool = False,
        policy=None
    ) -> Optional[Location]:
        """Melhor posição para o peso informado, ou None se nenhuma for viável"""
        ranked = AllocationService.rank_locations(locations, weight, ground_required, policy)
        if not ranked:
            return None
        return ranked[0][0]

    @staticmethod
    def allocate(db: Session, weight: float, ground_required: bool = False) -> Optional[Location]:
        """Busca posições elegíveis no banco e escolhe a melhor"""
        from services.location_service import LocationService

        if weight is None or weight <= 0:
            raise ValidationError(f"Peso inválido: {weight}")

        eligible = LocationService.list_eligible(db, require_ground=ground_required)
        location = AllocationService.find_optimal_location(eligible, weight, ground_required)

        if location is None:
            logger.info(
                f"Nenhuma posição para {weight}kg (ground={ground_required}, "
                f"{len(eligible)} elegíveis)"
            )
            return None

        logger.debug(f"Alocação {weight}kg -> {location.code}")
        return location
