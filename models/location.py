from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from .database import Base

GROUND_LEVEL = "0"


class Location(Base):
    """Posições físicas de armazenagem (rua/baia/nível/posição)"""
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, unique=True, nullable=False, index=True)  # "A01-1-2"
    row = Column(String, nullable=False)  # "A".."M"
    bay = Column(String, nullable=False)  # "01"
    level = Column(String, nullable=False, index=True)  # "0" = chão
    position = Column(String, nullable=False)  # "1".."3"
    rack_type = Column(String, nullable=False, default="standard")
    max_weight = Column(Float, nullable=True)  # NULL = sem limite (chão)
    current_weight = Column(Float, nullable=False, default=0.0)
    available = Column(Boolean, nullable=False, default=True, index=True)
    verified = Column(Boolean, nullable=False, default=True, index=True)
    is_ground_full = Column(Boolean, nullable=False, default=False)
    height = Column(Float, nullable=False, default=0.0)
    # Incrementado a cada mutação de ocupação (update condicional)
    version = Column(Integer, nullable=False, default=0)
    last_updated = Column(DateTime, server_default=func.now(), onupdate=func.now())

    stacked_items = relationship(
        "StackedItem",
        back_populates="location",
        cascade="all, delete-orphan",
        order_by="StackedItem.id",
    )

    @property
    def is_ground(self) -> bool:
        return self.level == GROUND_LEVEL

    @property
    def stacked_count(self) -> int:
        return len(self.stacked_items or [])

    @property
    def stacked_item_ids(self):
        return [s.item_id for s in self.stacked_items or []]


class StackedItem(Base):
    """Itens empilhados numa posição de chão (nível 0)"""
    __tablename__ = "stacked_items"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)

    location = relationship("Location", back_populates="stacked_items")

    __table_args__ = (
        UniqueConstraint("location_id", "item_id", name="uq_location_stacked_item"),
    )
