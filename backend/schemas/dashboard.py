# backend/schemas/dashboard.py
from schemas.common import CamelModel


class DashboardStats(CamelModel):
    total_products: int
    out_of_stock_products: int
    ordered_products: int
    total_orders: int
    today_orders: int
