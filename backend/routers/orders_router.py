# backend/routers/orders_router.py
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from models._common import to_naive_utc
from models.order_model import Order
from routers.deps import MAX_PAGE, get_order_service
from schemas.common import ApiResponse, PaginatedResponse, Pagination
from schemas.orders import OrderCreate, OrderItemOut, OrderOut, OrderStats, OrderUpdate
from schemas.products import ProductSummary
from services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def _order_to_response(o: Order) -> OrderOut:
    items: List[OrderItemOut] = []
    for it in o.items:
        product = None
        if it.product is not None:
            product = ProductSummary(
                id=it.product.id,
                name=it.product.name,
                barcode=it.product.barcode,
                image_path=it.product.image_path,
            )
        items.append(OrderItemOut(
            id=it.id,
            product_id=it.product_id,
            quantity=it.quantity,
            product=product,
        ))
    return OrderOut(
        id=o.id,
        note=o.note,
        created_at=o.created_at,
        items=items,
    )


@router.get("", response_model=PaginatedResponse[OrderOut])
def list_orders(
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    page_size: int = Query(default=20, ge=1, le=100, alias="pageSize"),
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    service: OrderService = Depends(get_order_service),
):
    orders, total = service.list_orders(
        page=page, page_size=page_size, start=to_naive_utc(start_date), end=to_naive_utc(end_date)
    )
    return PaginatedResponse[OrderOut](
        data=[_order_to_response(o) for o in orders],
        pagination=Pagination.build(page, page_size, total),
    )


# must be registered before /{order_id}
@router.get("/stats", response_model=ApiResponse[OrderStats])
def order_stats(
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    service: OrderService = Depends(get_order_service),
):
    stats = service.order_stats(start=to_naive_utc(start_date), end=to_naive_utc(end_date))
    return ApiResponse[OrderStats](data=OrderStats(**stats))


@router.get("/{order_id}", response_model=ApiResponse[OrderOut])
def get_order_by_id(order_id: str, service: OrderService = Depends(get_order_service)):
    return ApiResponse[OrderOut](data=_order_to_response(service.get_order(order_id)))


@router.post("", response_model=ApiResponse[OrderOut], status_code=201)
def create_order(order: OrderCreate, service: OrderService = Depends(get_order_service)):
    o = service.create_order(order)
    return ApiResponse[OrderOut](data=_order_to_response(o), message="Order created")


@router.put("/{order_id}", response_model=ApiResponse[OrderOut])
def update_order(order_id: str, body: OrderUpdate, service: OrderService = Depends(get_order_service)):
    o = service.update_order(order_id, body)
    return ApiResponse[OrderOut](data=_order_to_response(o), message="Order updated")


@router.delete("/{order_id}", response_model=ApiResponse[None])
def delete_order(order_id: str, service: OrderService = Depends(get_order_service)):
    service.delete_order(order_id)
    return ApiResponse[None](message="Order deleted")
