# backend/queries/product_queries.py
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import UnicodeText, cast, func, or_, select
from sqlalchemy.orm import Session

from models.product_model import Product, ProductStatus
from models.order_item_model import OrderItem
from models._common import utcnow


@dataclass
class ProductFilter:
    """Optional product filters, combined with AND. Unset fields match everything."""
    status: Optional[ProductStatus] = None
    is_ordered: Optional[bool] = None
    keyword: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    vendors: List[str] = field(default_factory=list)


def _json_list_has_any(column, values: Iterable[str]):
    # JSON arrays are stored as text; match each value as a quoted element
    as_text = cast(column, UnicodeText)
    return or_(*[as_text.contains(json.dumps(v), autoescape=True) for v in values])


class ProductQueries:
    def __init__(self, db: Session):
        self.db = db

    # ---------- lookups ----------

    def find_by_id(self, product_id: str) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def find_by_barcode(self, barcode: str, exclude_id: Optional[str] = None) -> Optional[Product]:
        q = self.db.query(Product).filter(Product.barcode == barcode)
        if exclude_id is not None:
            q = q.filter(Product.id != exclude_id)
        return q.first()

    def list_by_ids(self, product_ids: Iterable[str]) -> List[Product]:
        """One round trip for the whole candidate set."""
        ids = list(set(product_ids))
        if not ids:
            return []
        return self.db.query(Product).filter(Product.id.in_(ids)).all()

    def count_order_items_referencing(self, product_id: str) -> int:
        return (
            self.db.query(func.count(OrderItem.id))
            .filter(OrderItem.product_id == product_id)
            .scalar()
        )

    # ---------- filtered listing ----------

    def _filtered(self, flt: ProductFilter):
        q = self.db.query(Product)

        if flt.status is not None:
            q = q.filter(Product.status == flt.status)

        if flt.is_ordered is not None:
            q = q.filter(Product.is_ordered == flt.is_ordered)

        if flt.keyword:
            # literal substring: % and _ typed by the user are not wildcards
            kw = flt.keyword
            q = q.filter(or_(
                Product.name.icontains(kw, autoescape=True),
                Product.barcode.icontains(kw, autoescape=True),
                Product.note.icontains(kw, autoescape=True),
            ))

        if flt.tags:
            q = q.filter(_json_list_has_any(Product.tags, flt.tags))

        if flt.vendors:
            q = q.filter(_json_list_has_any(Product.vendors, flt.vendors))

        return q

    def search(self, flt: ProductFilter, offset: int = 0, limit: int = 20) -> List[Product]:
        return (
            self._filtered(flt)
            .order_by(Product.updated_at.desc(), Product.id)
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count(self, flt: Optional[ProductFilter] = None) -> int:
        return self._filtered(flt or ProductFilter()).count()

    # ---------- writes (caller owns the transaction) ----------

    def insert(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def update_fields(self, product: Product, patch: Dict[str, Any]) -> Product:
        for name, value in patch.items():
            setattr(product, name, value)
        product.updated_at = utcnow()
        self.db.flush()
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.flush()

    def mark_ordered(self, product_ids: Iterable[str]) -> int:
        ids = list(set(product_ids))
        if not ids:
            return 0
        return (
            self.db.query(Product)
            .filter(Product.id.in_(ids), Product.is_ordered.is_(False))
            .update({Product.is_ordered: True, Product.updated_at: utcnow()}, synchronize_session="fetch")
        )

    def delete_unreferenced(self, product_ids: Iterable[str]) -> int:
        """Delete the given products that no order item points at."""
        ids = list(set(product_ids))
        if not ids:
            return 0
        referenced = select(OrderItem.product_id).where(OrderItem.product_id.in_(ids))
        return (
            self.db.query(Product)
            .filter(Product.id.in_(ids), Product.id.not_in(referenced))
            .delete(synchronize_session="fetch")
        )

    def update_status_bulk(self, product_ids: Iterable[str], status: ProductStatus) -> int:
        ids = list(set(product_ids))
        if not ids:
            return 0
        return (
            self.db.query(Product)
            .filter(Product.id.in_(ids))
            .update({Product.status: status, Product.updated_at: utcnow()}, synchronize_session="fetch")
        )
