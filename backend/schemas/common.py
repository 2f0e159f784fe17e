# backend/schemas/common.py
import math
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire; accepts both on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Pagination(CamelModel):
    page: int
    page_size: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, page_size: int, total: int) -> "Pagination":
        return cls(page=page, page_size=page_size, total=total, total_pages=math.ceil(total / page_size))


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class PaginatedResponse(CamelModel, Generic[T]):
    success: bool = True
    data: List[T] = []
    pagination: Pagination
    message: Optional[str] = None


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
    message: Optional[str] = None
    details: Optional[Any] = None
