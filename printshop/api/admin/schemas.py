"""Admin schemas"""

from pydantic import BaseModel

from printshop.schemas.base import Money

class AdminStats(BaseModel):
    total_products: int
    total_orders: int
    pending_orders: int
    total_revenue: Money
