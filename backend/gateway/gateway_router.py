# backend/gateway/gateway_router.py
from fastapi import APIRouter, Depends

from routers.dashboard_router import router as dashboard_router
from routers.deps import require_api_key
from routers.health_router import router as health_router
from routers.orders_router import router as orders_router
from routers.products_router import router as products_router
from routers.vendors_router import router as vendors_router

# single entry point for every /api/v1 route
gateway_router = APIRouter()

# health checks stay open
gateway_router.include_router(health_router)           # /health, /health/db, /health/full

# business routers
protected = [Depends(require_api_key)]
gateway_router.include_router(products_router, dependencies=protected)   # /products/...
gateway_router.include_router(orders_router, dependencies=protected)     # /orders/...
gateway_router.include_router(vendors_router, dependencies=protected)    # /vendors/...
gateway_router.include_router(dashboard_router, dependencies=protected)  # /dashboard/...
