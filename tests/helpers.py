"""Small builders shared by the service and API tests."""

from decimal import Decimal

from schemas.orders import OrderCreate, OrderItemIn
from schemas.products import ProductCreate
from services.order_service import OrderService
from services.product_service import ProductService


def product_payload(barcode: str = "COKE-001", **overrides) -> dict:
    payload = {
        "name": "Coke",
        "barcode": barcode,
        "costPrice": 20,
        "sellPrice": 25,
    }
    payload.update(overrides)
    return payload


def make_product(session, barcode: str = "COKE-001", **overrides):
    data = {
        "name": "Coke",
        "barcode": barcode,
        "cost_price": Decimal("20"),
        "sell_price": Decimal("25"),
    }
    data.update(overrides)
    return ProductService(session).create_product(ProductCreate(**data))


def make_order(session, items, note=None):
    """items: [(product_id, quantity), ...]"""
    return OrderService(session).create_order(OrderCreate(
        note=note,
        items=[OrderItemIn(product_id=pid, quantity=qty) for pid, qty in items],
    ))


def item_rows(order):
    return [(it.product_id, it.quantity) for it in order.items]
