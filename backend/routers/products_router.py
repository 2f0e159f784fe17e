# backend/routers/products_router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from models.product_model import Product, ProductStatus
from queries.product_queries import ProductFilter
from routers.deps import MAX_PAGE, get_product_service, split_csv
from schemas.common import ApiResponse, PaginatedResponse, Pagination
from schemas.products import (
    OrderedFlagUpdate, ProductBatchRequest, ProductBatchResult, ProductCreate,
    ProductOut, ProductUpdate, StatusUpdate,
)
from services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


# small helper: ORM -> schema
def _to_out(p: Product) -> ProductOut:
    return ProductOut(
        id=p.id,
        name=p.name,
        barcode=p.barcode,
        cost_price=float(p.cost_price),
        sell_price=float(p.sell_price),
        status=p.status,
        is_ordered=p.is_ordered,
        tags=list(p.tags or []),
        vendors=list(p.vendors or []),
        note=p.note,
        image_path=p.image_path,
        created_at=p.created_at,
        updated_at=p.updated_at,
    )


@router.get("", response_model=PaginatedResponse[ProductOut])
def list_products(
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    page_size: int = Query(default=20, ge=1, le=100, alias="pageSize"),
    status: Optional[ProductStatus] = Query(default=None),
    is_ordered: Optional[bool] = Query(default=None, alias="isOrdered"),
    keyword: Optional[str] = Query(default=None),
    tags: Optional[str] = Query(default=None, description="comma separated"),
    vendors: Optional[str] = Query(default=None, description="comma separated vendor ids"),
    service: ProductService = Depends(get_product_service),
):
    flt = ProductFilter(
        status=status,
        is_ordered=is_ordered,
        keyword=keyword.strip() if keyword and keyword.strip() else None,
        tags=split_csv(tags),
        vendors=split_csv(vendors),
    )
    products, total = service.list_products(flt, page=page, page_size=page_size)
    return PaginatedResponse[ProductOut](
        data=[_to_out(p) for p in products],
        pagination=Pagination.build(page, page_size, total),
    )


@router.post("/batch", response_model=ApiResponse[ProductBatchResult])
def batch_products(body: ProductBatchRequest, service: ProductService = Depends(get_product_service)):
    if body.action == "delete":
        count = service.batch_delete(body.ids)
        return ApiResponse[ProductBatchResult](
            data=ProductBatchResult(deleted_count=count),
            message=f"Deleted {count} product(s)",
        )

    count = service.batch_update_status(body.ids, body.status)
    return ApiResponse[ProductBatchResult](
        data=ProductBatchResult(updated_count=count),
        message=f"Updated status of {count} product(s)",
    )


@router.get("/{product_id}", response_model=ApiResponse[ProductOut])
def get_product(product_id: str, service: ProductService = Depends(get_product_service)):
    return ApiResponse[ProductOut](data=_to_out(service.get_product(product_id)))


@router.post("", response_model=ApiResponse[ProductOut], status_code=201)
def create_product(body: ProductCreate, service: ProductService = Depends(get_product_service)):
    p = service.create_product(body)
    return ApiResponse[ProductOut](data=_to_out(p), message="Product created")


@router.put("/{product_id}", response_model=ApiResponse[ProductOut])
def update_product(product_id: str, body: ProductUpdate, service: ProductService = Depends(get_product_service)):
    # only fields present in the request are applied
    p = service.update_product(product_id, body)
    return ApiResponse[ProductOut](data=_to_out(p), message="Product updated")


@router.put("/{product_id}/status", response_model=ApiResponse[ProductOut])
def update_status(product_id: str, body: StatusUpdate, service: ProductService = Depends(get_product_service)):
    p = service.set_status(product_id, body.status)
    return ApiResponse[ProductOut](data=_to_out(p), message="Product status updated")


@router.put("/{product_id}/ordered", response_model=ApiResponse[ProductOut])
def update_ordered_flag(
    product_id: str, body: OrderedFlagUpdate, service: ProductService = Depends(get_product_service)
):
    p = service.set_ordered_flag(product_id, body.is_ordered)
    return ApiResponse[ProductOut](data=_to_out(p), message="Product ordered flag updated")


@router.delete("/{product_id}", response_model=ApiResponse[None])
def delete_product(product_id: str, service: ProductService = Depends(get_product_service)):
    service.delete_product(product_id)
    return ApiResponse[None](message="Product deleted")
