# backend/models/order_model.py
from sqlalchemy import Column, String, DateTime
from sqlalchemy.types import UnicodeText
from sqlalchemy.orm import relationship

from database.session import Base
from models._common import new_id, utcnow


class Order(Base):
    __tablename__ = "orders"
    id         = Column(String(36), primary_key=True, default=new_id)
    note       = Column(UnicodeText, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    items = relationship(
        "OrderItem",
        cascade="all, delete-orphan",
        back_populates="order",
        order_by="OrderItem.position",
    )
