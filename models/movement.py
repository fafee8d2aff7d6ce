from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from .database import Base
import enum


class MovementType(str, enum.Enum):
    IN = "IN"
    OUT = "OUT"


class Movement(Base):
    """Auditoria de entradas e saídas (somente inserção)"""
    __tablename__ = "movements"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, index=True)
    type = Column(SQLEnum(MovementType), nullable=False)
    weight = Column(Float, nullable=False)
    operator = Column(String, nullable=False)
    reference = Column(String, nullable=False)  # item_code do item
    location_code = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    ts = Column(DateTime, server_default=func.now(), nullable=False, index=True)

    item = relationship("Item", back_populates="movements")
