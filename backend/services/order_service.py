# backend/services/order_service.py
"""
Order transactional workflow.

An order and its items are created, replaced and deleted as one unit.
Referential checks run first with a single batched product lookup; the
writes then go out inside one transaction (see database.session.atomic),
so a failure anywhere leaves the order exactly as it was.

Duplicate product ids inside one submission are kept as separate line items,
in submission order. The existence check compares against the distinct id
set, so repeats of a valid id pass and a genuinely missing id still fails.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.session import atomic
from errors import NotFoundError, ValidationError
from models.order_model import Order
from queries.order_queries import ItemRow, OrderQueries
from queries.product_queries import ProductQueries
from schemas.orders import OrderCreate, OrderItemIn, OrderUpdate

logger = logging.getLogger(__name__)

PRODUCTS_NOT_FOUND = "Some products not found"


def _rows(items: Sequence[OrderItemIn]) -> List[ItemRow]:
    return [(it.product_id, it.quantity) for it in items]


class OrderService:
    def __init__(self, db: Session):
        self.db = db
        self.orders = OrderQueries(db)
        self.products = ProductQueries(db)

    # ---------- reads ----------

    def get_order(self, order_id: str) -> Order:
        order = self.orders.find_by_id(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    def list_orders(
        self,
        page: int = 1,
        page_size: int = 20,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Tuple[List[Order], int]:
        offset = (page - 1) * page_size
        orders = self.orders.search(start=start, end=end, offset=offset, limit=page_size)
        total = self.orders.count(start=start, end=end)
        return orders, total

    def order_stats(self, start: Optional[datetime] = None, end: Optional[datetime] = None) -> dict:
        return {"total_orders": self.orders.count(start=start, end=end)}

    # ---------- referential check ----------

    def _check_products_exist(self, rows: Sequence[ItemRow]) -> None:
        if not rows:
            raise ValidationError("Order must contain at least one item")

        wanted = {product_id for product_id, _ in rows}
        found = {p.id for p in self.products.list_by_ids(wanted)}
        if len(found) != len(wanted):
            missing = sorted(wanted - found)
            raise ValidationError(PRODUCTS_NOT_FOUND, details={"missingProductIds": missing})

    def _write_items(self, write) -> Order:
        # a product may be deleted between the existence check and the insert
        try:
            return write()
        except IntegrityError as e:
            raise ValidationError(PRODUCTS_NOT_FOUND) from e

    # ---------- writes ----------

    def create_order(self, data: OrderCreate) -> Order:
        rows = _rows(data.items)
        with atomic(self.db):
            self._check_products_exist(rows)
            order = self._write_items(lambda: self.orders.insert_with_items(data.note, rows))
            self.products.mark_ordered(pid for pid, _ in rows)

        logger.info(f"Order created: {order.id} with {len(rows)} item(s)")
        return self.get_order(order.id)

    def update_order(self, order_id: str, data: OrderUpdate) -> Order:
        fields = data.model_fields_set
        with atomic(self.db):
            order = self.get_order(order_id)

            if data.items is not None:
                rows = _rows(data.items)
                self._check_products_exist(rows)
                self._write_items(lambda: self.orders.replace_items(order, rows))
                self.products.mark_ordered(pid for pid, _ in rows)

            if "note" in fields:
                self.orders.update_note(order, data.note)

        if data.items is not None:
            logger.info(f"Order {order_id}: items replaced ({len(data.items)} item(s))")
        else:
            logger.info(f"Order {order_id}: note updated")

        self.db.expire_all()
        return self.get_order(order_id)

    def delete_order(self, order_id: str) -> None:
        with atomic(self.db):
            order = self.get_order(order_id)
            self.orders.delete_with_items(order)

        logger.info(f"Order deleted: {order_id}")
