# backend/models/product_model.py
import enum

from sqlalchemy import Column, String, Boolean, DateTime, Numeric, JSON, Enum
from sqlalchemy.types import Unicode, UnicodeText
from sqlalchemy.orm import relationship

from database.session import Base
from models._common import new_id, utcnow


class ProductStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    OUT_OF_STOCK = "OUT_OF_STOCK"
    DISCONTINUED = "DISCONTINUED"


class Product(Base):
    __tablename__ = "products"

    id          = Column(String(36), primary_key=True, default=new_id)
    name        = Column(Unicode(255), nullable=False)
    barcode     = Column(Unicode(100), nullable=False, unique=True, index=True)
    cost_price  = Column(Numeric(10, 2), nullable=False)
    sell_price  = Column(Numeric(10, 2), nullable=False)
    status      = Column(Enum(ProductStatus, name="product_status"), nullable=False, default=ProductStatus.ACTIVE)
    is_ordered  = Column(Boolean, nullable=False, default=False)
    tags        = Column(JSON, nullable=False, default=list)
    vendors     = Column(JSON, nullable=False, default=list)   # vendor registry ids
    note        = Column(UnicodeText, nullable=True)
    image_path  = Column(Unicode(500), nullable=True)
    created_at  = Column(DateTime, nullable=False, default=utcnow)
    updated_at  = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow, index=True)

    order_items = relationship("OrderItem", back_populates="product", passive_deletes="all")
