from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from models.action import ActionStatus, ActionType


class GoodsInActionRequest(BaseModel):
    """Request para criar tarefa de guarda (item pending)"""
    item_id: int
    quantity: Optional[int] = Field(None, gt=0)


class PickActionRequest(BaseModel):
    """Request para criar tarefa de separação (item placed)"""
    item_id: int
    department: str
    quantity: Optional[int] = Field(None, gt=0)


class ActionStartRequest(BaseModel):
    operator: Optional[str] = None


class ActionCompleteRequest(BaseModel):
    """Scan do item para concluir a tarefa"""
    system_code: str
    location_code: Optional[str] = None  # só tarefas in; vazio = alocação automática
    ground_required: bool = False
    operator: Optional[str] = None
    notes: Optional[str] = None


class ActionResponse(BaseModel):
    """Response de uma tarefa da fila"""
    id: int
    item_id: int
    item_code: str
    system_code: str
    description: str
    category: str
    weight: float
    location_code: Optional[str] = None
    action_type: ActionType
    status: ActionStatus
    operator: Optional[str] = None
    department: Optional[str] = None
    quantity: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True
