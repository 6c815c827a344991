"""Admin dashboard statistics"""

from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, case
import logging

from printshop.models import Order, OrderStatus, IN_PROGRESS_STATUSES
from printshop.core.database import persistence_guard
from printshop.api.products.services import ProductService
from .schemas import AdminStats

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

class StatsService:
    """Summary metrics over the stored orders, recomputed on every call"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def compute_stats(self) -> AdminStats:
        """
        Compute dashboard totals

        Revenue counts delivered orders only. Pending counts every order still
        in the pipeline; statuses outside the known flow count in neither.
        """
        total_products = await ProductService(self.db).count_products()

        query = select(
            func.count(Order.id).label("total_orders"),
            func.coalesce(
                func.sum(case((Order.status.in_(IN_PROGRESS_STATUSES), 1), else_=0)), 0
            ).label("pending_orders"),
            func.coalesce(
                func.sum(case((Order.status == OrderStatus.DELIVERED.value, Order.total), else_=0)), 0
            ).label("total_revenue"),
        )

        async with persistence_guard(self.db, "compute stats"):
            row = (await self.db.execute(query)).one()

        revenue = Decimal(str(row.total_revenue)).quantize(CENTS)
        logger.debug(f"Stats: {row.total_orders} orders, {row.pending_orders} pending, revenue {revenue}")

        return AdminStats(
            total_products=total_products,
            total_orders=row.total_orders,
            pending_orders=row.pending_orders,
            total_revenue=revenue
        )
