# backend/routers/dashboard_router.py
from fastapi import APIRouter, Depends

from routers.deps import get_dashboard_service
from schemas.common import ApiResponse
from schemas.dashboard import DashboardStats
from services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=ApiResponse[DashboardStats])
def dashboard_stats(service: DashboardService = Depends(get_dashboard_service)):
    return ApiResponse[DashboardStats](data=DashboardStats(**service.stats()))
