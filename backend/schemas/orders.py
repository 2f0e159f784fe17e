# backend/schemas/orders.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field, constr, field_validator

from schemas.common import CamelModel
from schemas.products import ProductSummary

ProductIdStr = constr(strip_whitespace=True, min_length=1)

# order_items.quantity is a 32-bit INTEGER column
MAX_QUANTITY = 2_147_483_647


class OrderItemIn(CamelModel):
    product_id: ProductIdStr
    quantity: int = Field(gt=0, le=MAX_QUANTITY)


class OrderCreate(CamelModel):
    note: Optional[str] = None
    items: List[OrderItemIn] = Field(min_length=1)


class OrderUpdate(CamelModel):
    """items, when present, replace the whole item set."""
    note: Optional[str] = None
    items: Optional[List[OrderItemIn]] = None

    @field_validator("items")
    @classmethod
    def items_not_empty(cls, v):
        if v is not None and len(v) == 0:
            raise ValueError("items must contain at least one item")
        return v


class OrderItemOut(CamelModel):
    id: str
    product_id: str
    quantity: int
    product: Optional[ProductSummary] = None


class OrderOut(CamelModel):
    id: str
    note: Optional[str] = None
    created_at: datetime
    items: List[OrderItemOut] = []


class OrderStats(CamelModel):
    total_orders: int
