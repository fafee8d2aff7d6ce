"""
Hierarquia de erros do núcleo de alocação.

Cada erro carrega um `code` estável (legível por máquina) e os dados
estruturados do caso, para que rotas e chamadores tratem por tipo e
não por mensagem.

    WarehouseError
    +-- ConfigurationError      tipo de rack/nível desconhecido (fatal)
    +-- ValidationError         dados de entrada inválidos
    +-- NoLocationAvailable     nenhuma posição viável (recuperável)
    +-- InvalidTransition       mudança de status incompatível (erro do chamador)
    +-- CapacityExceeded        teto de peso violado no commit (pode realocar)
    +-- LocationUnavailable     posição sumiu/indisponível/não verificada
    +-- LocationNotEmpty        exclusão de posição ocupada
    +-- ItemNotFound
    +-- DuplicateItem
    +-- ActionNotFound
    +-- ActionClosed            tarefa já concluída ou de outro tipo
    +-- StorageError            falha transitória do banco (sem retry interno)
"""
from typing import Optional


class WarehouseError(Exception):
    """Base de todos os erros do núcleo"""
    code = "WAREHOUSE_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(WarehouseError):
    code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, rack_type=None, level=None):
        self.rack_type = rack_type
        self.level = level
        super().__init__(message)


class ValidationError(WarehouseError):
    code = "VALIDATION_ERROR"


class NoLocationAvailable(WarehouseError):
    code = "NO_LOCATION_AVAILABLE"

    def __init__(self, weight: float, ground_required: bool):
        self.weight = weight
        self.ground_required = ground_required
        area = "chão" if ground_required else "rack"
        super().__init__(f"Nenhuma posição disponível ({area}) para {weight}kg")


class InvalidTransition(WarehouseError):
    code = "INVALID_TRANSITION"

    def __init__(self, item_id, current_status, action: str):
        self.item_id = item_id
        self.current_status = current_status
        self.action = action
        status = getattr(current_status, "value", current_status)
        super().__init__(f"Item {item_id} com status '{status}' não permite '{action}'")


class CapacityExceeded(WarehouseError):
    code = "CAPACITY_EXCEEDED"

    def __init__(self, location_code: str, current_weight: float, weight: float, max_weight: float):
        self.location_code = location_code
        self.current_weight = current_weight
        self.weight = weight
        self.max_weight = max_weight
        super().__init__(
            f"{current_weight + weight}kg excederia o limite de {max_weight}kg em {location_code}"
        )


class LocationUnavailable(WarehouseError):
    code = "LOCATION_UNAVAILABLE"

    def __init__(self, location_code: Optional[str], reason: str = "não encontrada"):
        self.location_code = location_code
        self.reason = reason
        subject = f"Posição {location_code}" if location_code else "Posição"
        super().__init__(f"{subject} {reason}")


class LocationNotEmpty(WarehouseError):
    code = "LOCATION_NOT_EMPTY"

    def __init__(self, location_code: str):
        self.location_code = location_code
        super().__init__(f"Posição {location_code} possui itens e não pode ser excluída")


class ItemNotFound(WarehouseError):
    code = "ITEM_NOT_FOUND"

    def __init__(self, item_ref):
        self.item_ref = item_ref
        super().__init__(f"Item {item_ref} não encontrado")


class DuplicateItem(WarehouseError):
    code = "DUPLICATE_ITEM"

    def __init__(self, system_code: str):
        self.system_code = system_code
        super().__init__(f"Já existe item com system_code {system_code}")


class StorageError(WarehouseError):
    """Falha do banco (timeout, conexão, lock); o chamador decide o retry"""
    code = "STORAGE_ERROR"


class ActionNotFound(WarehouseError):
    code = "ACTION_NOT_FOUND"

    def __init__(self, action_id):
        self.action_id = action_id
        super().__init__(f"Tarefa {action_id} não encontrada")


class ActionClosed(WarehouseError):
    code = "ACTION_CLOSED"

    def __init__(self, action_id, current_status):
        self.action_id = action_id
        self.current_status = current_status
        status = getattr(current_status, "value", current_status)
        super().__init__(f"Tarefa {action_id} com status '{status}' não pode ser alterada")
