from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from .database import Base
import enum


class ActionType(str, enum.Enum):
    IN = "in"
    OUT = "out"


class ActionStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class WarehouseAction(Base):
    """Fila de tarefas do armazém: entradas a guardar e saídas a separar"""
    __tablename__ = "actions"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, index=True)
    # Cópia dos dados do item no momento da criação (exibição na fila)
    item_code = Column(String, nullable=False)
    system_code = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False)
    weight = Column(Float, nullable=False, default=0.0)
    location_code = Column(String, nullable=True)  # destino (in) ou origem (out)
    action_type = Column(SQLEnum(ActionType), nullable=False)
    status = Column(SQLEnum(ActionStatus), default=ActionStatus.PENDING, nullable=False, index=True)
    operator = Column(String, nullable=True)
    department = Column(String, nullable=True)  # obrigatório em saídas
    quantity = Column(Integer, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    item = relationship("Item")
