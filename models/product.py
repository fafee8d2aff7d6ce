from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.sql import func
from .database import Base


class Product(Base):
    """Catálogo de produtos/SKU usado para preencher o goods-in"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String, unique=True, nullable=False, index=True)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False, index=True)
    weight = Column(Float, nullable=True)  # peso padrão, opcional
    usage_count = Column(Integer, nullable=False, default=0)
    last_used = Column(DateTime, server_default=func.now(), nullable=False, index=True)
    # Matéria-prima (bobinas)
    coil_number = Column(String, nullable=True)
    coil_length = Column(String, nullable=True)
