# backend/queries/order_queries.py
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session, joinedload

from models.order_model import Order
from models.order_item_model import OrderItem

# (product_id, quantity) in submission order
ItemRow = Tuple[str, int]


def _build_items(rows: Sequence[ItemRow]) -> List[OrderItem]:
    return [
        OrderItem(product_id=product_id, quantity=quantity, position=index)
        for index, (product_id, quantity) in enumerate(rows)
    ]


class OrderQueries:
    def __init__(self, db: Session):
        self.db = db

    def _with_items(self):
        return self.db.query(Order).options(
            joinedload(Order.items).joinedload(OrderItem.product)
        )

    def find_by_id(self, order_id: str) -> Optional[Order]:
        return self._with_items().filter(Order.id == order_id).first()

    def _in_range(self, q, start: Optional[datetime], end: Optional[datetime]):
        if start is not None:
            q = q.filter(Order.created_at >= start)
        if end is not None:
            q = q.filter(Order.created_at <= end)
        return q

    def search(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> List[Order]:
        q = self._in_range(self._with_items(), start, end)
        return q.order_by(Order.created_at.desc(), Order.id).offset(offset).limit(limit).all()

    def count(self, start: Optional[datetime] = None, end: Optional[datetime] = None) -> int:
        return self._in_range(self.db.query(Order), start, end).count()

    # ---------- writes (caller owns the transaction) ----------

    def insert_with_items(self, note: Optional[str], rows: Sequence[ItemRow]) -> Order:
        order = Order(note=note, items=_build_items(rows))
        self.db.add(order)
        self.db.flush()
        return order

    def replace_items(self, order: Order, rows: Sequence[ItemRow]) -> Order:
        """Delete every current item, then insert the new set.

        Both statements go out inside the caller's transaction, so other
        readers only ever see the old set or the new one.
        """
        order.items.clear()
        self.db.flush()  # DELETEs
        order.items.extend(_build_items(rows))
        self.db.flush()  # INSERTs
        return order

    def update_note(self, order: Order, note: Optional[str]) -> Order:
        order.note = note
        self.db.flush()
        return order

    def delete_with_items(self, order: Order) -> None:
        # delete-orphan cascade removes the items in the same flush
        self.db.delete(order)
        self.db.flush()
