# backend/services/dashboard_service.py
from datetime import datetime, time
from typing import Dict

from sqlalchemy.orm import Session

from models._common import utcnow
from models.product_model import ProductStatus
from queries.order_queries import OrderQueries
from queries.product_queries import ProductFilter, ProductQueries


def start_of_today() -> datetime:
    return datetime.combine(utcnow().date(), time.min)


class DashboardService:
    def __init__(self, db: Session):
        self.products = ProductQueries(db)
        self.orders = OrderQueries(db)

    def stats(self) -> Dict[str, int]:
        return {
            "total_products": self.products.count(),
            "out_of_stock_products": self.products.count(ProductFilter(status=ProductStatus.OUT_OF_STOCK)),
            "ordered_products": self.products.count(ProductFilter(is_ordered=True)),
            "total_orders": self.orders.count(),
            "today_orders": self.orders.count(start=start_of_today()),
        }
