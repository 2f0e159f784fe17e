# backend/models/__init__.py
from .product_model import Product, ProductStatus
from .order_model import Order
from .order_item_model import OrderItem
