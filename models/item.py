from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from .database import Base
import enum


class ItemStatus(str, enum.Enum):
    PENDING = "pending"
    PLACED = "placed"
    REMOVED = "removed"


class Item(Base):
    """Itens recebidos (goods-in) e seu ciclo de vida"""
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    item_code = Column(String, nullable=False, index=True)  # Produto/SKU
    system_code = Column(String, unique=True, nullable=False, index=True)  # chave de scan
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False)
    weight = Column(Float, nullable=False)
    status = Column(SQLEnum(ItemStatus), default=ItemStatus.PENDING, nullable=False, index=True)
    location_code = Column(String, nullable=True, index=True)  # presente sse status == placed
    location_verified = Column(Boolean, default=False, nullable=False)
    last_updated = Column(DateTime, server_default=func.now(), onupdate=func.now())

    movements = relationship("Movement", back_populates="item")
