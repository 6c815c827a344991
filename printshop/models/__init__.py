"""Models package initialization"""

from .base import Base
from .product import Product
from .cart import CartItem
from .order import Order, OrderItem, OrderStatus, OrderStatusHistory, IN_PROGRESS_STATUSES

__all__ = [
    "Base",
    "Product",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderStatusHistory",
    "IN_PROGRESS_STATUSES",
]
