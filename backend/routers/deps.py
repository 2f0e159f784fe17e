# backend/routers/deps.py
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from database.session import get_db
from services.dashboard_service import DashboardService
from services.order_service import OrderService
from services.product_service import ProductService

# keeps (page - 1) * pageSize inside a 64-bit OFFSET
MAX_PAGE = 1_000_000


def require_api_key(request: Request, x_api_key: Optional[str] = Header(default=None)) -> None:
    """Enforced only when an API key is configured."""
    expected = request.app.state.settings.api_key
    if not expected:
        return
    if x_api_key != expected:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(db)


def split_csv(raw: Optional[str]) -> list:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]
