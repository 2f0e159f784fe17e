# backend/models/order_item_model.py
from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from database.session import Base
from models._common import new_id


class OrderItem(Base):
    __tablename__ = "order_items"
    id         = Column(String(36), primary_key=True, default=new_id)
    order_id   = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    quantity   = Column(Integer, nullable=False)
    position   = Column(Integer, nullable=False, default=0)  # index in the submitted item list

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )

    order   = relationship("Order", back_populates="items")
    product = relationship("Product", back_populates="order_items")
