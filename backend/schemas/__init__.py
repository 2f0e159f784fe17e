# backend/schemas/__init__.py

# envelope
from .common import ApiResponse, PaginatedResponse, Pagination, ErrorResponse

# products
from .products import (
    ProductCreate, ProductUpdate, ProductOut, ProductSummary,
    StatusUpdate, OrderedFlagUpdate, ProductBatchRequest, ProductBatchResult,
)

# orders
from .orders import OrderCreate, OrderUpdate, OrderOut, OrderItemIn, OrderItemOut, OrderStats

# dashboard / vendors
from .dashboard import DashboardStats
from .vendors import VendorOut

__all__ = [
    # envelope
    "ApiResponse", "PaginatedResponse", "Pagination", "ErrorResponse",
    # products
    "ProductCreate", "ProductUpdate", "ProductOut", "ProductSummary",
    "StatusUpdate", "OrderedFlagUpdate", "ProductBatchRequest", "ProductBatchResult",
    # orders
    "OrderCreate", "OrderUpdate", "OrderOut", "OrderItemIn", "OrderItemOut", "OrderStats",
    # dashboard / vendors
    "DashboardStats", "VendorOut",
]
