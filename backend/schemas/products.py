# backend/schemas/products.py
from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import Field, constr, field_validator, model_validator

from models.product_model import ProductStatus
from schemas.common import CamelModel

NameStr = constr(strip_whitespace=True, min_length=1, max_length=255)
BarcodeStr = constr(strip_whitespace=True, min_length=1, max_length=100)

# columns that may not be cleared through a partial update
_NOT_NULLABLE = ("name", "barcode", "cost_price", "sell_price", "status", "is_ordered", "tags", "vendors")


class ProductCreate(CamelModel):
    name: NameStr
    barcode: BarcodeStr
    cost_price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    sell_price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    vendors: List[str] = []
    tags: List[str] = []
    note: Optional[str] = None
    image_path: Optional[str] = None
    status: ProductStatus = ProductStatus.ACTIVE

    @field_validator("note", "image_path")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ProductUpdate(CamelModel):
    """Sparse update: only fields present in the payload are applied."""
    name: Optional[NameStr] = None
    barcode: Optional[BarcodeStr] = None
    cost_price: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    sell_price: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    vendors: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    note: Optional[str] = None
    image_path: Optional[str] = None
    status: Optional[ProductStatus] = None
    is_ordered: Optional[bool] = None

    @field_validator("note", "image_path")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def no_null_for_required(self):
        for name in _NOT_NULLABLE:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def patch(self) -> dict:
        return self.model_dump(exclude_unset=True, by_alias=False)


class StatusUpdate(CamelModel):
    status: ProductStatus


class OrderedFlagUpdate(CamelModel):
    is_ordered: bool


class ProductBatchRequest(CamelModel):
    action: Literal["delete", "updateStatus"]
    ids: List[str] = Field(min_length=1)
    status: Optional[ProductStatus] = None


class ProductBatchResult(CamelModel):
    deleted_count: Optional[int] = None
    updated_count: Optional[int] = None


class ProductOut(CamelModel):
    id: str
    name: str
    barcode: str
    cost_price: float
    sell_price: float
    status: ProductStatus
    is_ordered: bool
    tags: List[str] = []
    vendors: List[str] = []
    note: Optional[str] = None
    image_path: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProductSummary(CamelModel):
    id: str
    name: str
    barcode: str
    image_path: Optional[str] = None
