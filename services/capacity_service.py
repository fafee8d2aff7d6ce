"""
Modelo de capacidade: limites de peso e altura por (nível, tipo de rack).
Funções puras, sem acesso ao banco.
"""
import enum
from typing import Optional, Union
from services.exceptions import ConfigurationError

GROUND_LEVEL = "0"

# Chão não tem teto numérico, só a flag is_ground_full
UNLIMITED = None


class RackType(str, enum.Enum):
    STANDARD = "standard"
    HEAVY_DUTY = "heavy-duty"
    CANTILEVER = "cantilever"


class CapacityPolicy(str, enum.Enum):
    STRICT = "strict"  # teto por nível obrigatório
    SOFT = "soft"  # sem teto nos níveis superiores, só preferência por altura


# Peso máximo (kg) por nível
LEVEL_MAX_WEIGHTS = {
    RackType.STANDARD: {"1": 1500.0, "2": 1000.0, "3": 750.0, "4": 500.0},
    RackType.HEAVY_DUTY: {"1": 3000.0, "2": 2500.0, "3": 2000.0, "4": 1500.0},
    RackType.CANTILEVER: {"1": 1000.0, "2": 800.0, "3": 600.0, "4": 400.0},
}

# Altura (m) por nível
LEVEL_HEIGHTS = {
    RackType.STANDARD: {"1": 2.5, "2": 5.0, "3": 7.5, "4": 10.0},
    RackType.HEAVY_DUTY: {"1": 3.0, "2": 6.0, "3": 9.0, "4": 12.0},
    RackType.CANTILEVER: {"1": 2.0, "2": 4.0, "3": 6.0, "4": 8.0},
}


def parse_rack_type(rack_type: Union[str, RackType]) -> RackType:
    """Converte string em RackType; desconhecido -> ConfigurationError"""
    if isinstance(rack_type, RackType):
        return rack_type
    try:
        return RackType(str(rack_type).strip().lower())
    except ValueError:
        raise ConfigurationError(f"Tipo de rack desconhecido: {rack_type}", rack_type=rack_type)


def parse_policy(policy: Union[str, CapacityPolicy]) -> CapacityPolicy:
    if isinstance(policy, CapacityPolicy):
        return policy
    try:
        return CapacityPolicy(str(policy).strip().lower())
    except ValueError:
        raise ConfigurationError(f"Política de capacidade desconhecida: {policy}")


def normalize_level(level) -> str:
    """Aceita 0, "0", " 2 " e devolve a forma canônica em string"""
    text = str(level).strip()
    if not text.isdigit():
        raise ConfigurationError(f"Nível inválido: {level}", level=level)
    return str(int(text))


def _profile_value(table: dict, level, rack_type):
    profile = table[parse_rack_type(rack_type)]
    key = normalize_level(level)
    if key not in profile:
        raise ConfigurationError(
            f"Nível {key} não existe para rack {rack_type}", rack_type=rack_type, level=level
        )
    return profile[key]


def max_weight_for(level, rack_type) -> Optional[float]:
    """Peso máximo do nível; chão retorna UNLIMITED"""
    rack = parse_rack_type(rack_type)
    if normalize_level(level) == GROUND_LEVEL:
        return UNLIMITED
    return _profile_value(LEVEL_MAX_WEIGHTS, level, rack)


def height_for(level, rack_type) -> float:
    """Altura física do nível; chão é sempre 0"""
    rack = parse_rack_type(rack_type)
    if normalize_level(level) == GROUND_LEVEL:
        return 0.0
    return _profile_value(LEVEL_HEIGHTS, level, rack)


def max_level_for(rack_type) -> int:
    return max(int(k) for k in LEVEL_MAX_WEIGHTS[parse_rack_type(rack_type)])
