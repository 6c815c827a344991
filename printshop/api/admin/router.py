"""
Admin API routes
Order management and dashboard stats
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, List

from printshop.core.database import get_db
from printshop.schemas.base import MessageResponse
from printshop.api.orders.schemas import (
    OrderResponse,
    OrderStatusUpdate,
    OrderHistoryResponse,
    StatusHistoryResponse
)
from printshop.api.orders.services import OrderService
from .schemas import AdminStats
from .services import StatsService

router = APIRouter()

@router.get("/orders", response_model=List[OrderResponse], summary="List all orders")
async def list_orders(
    status: Optional[str] = Query(None, description="Exact status to filter on"),
    db: AsyncSession = Depends(get_db)
):
    """All orders, newest first"""
    service = OrderService(db)
    return await service.list_orders(status)

@router.get(
    "/orders/{order_id}/history",
    response_model=OrderHistoryResponse,
    summary="Order status history"
)
async def get_order_history(order_id: int, db: AsyncSession = Depends(get_db)):
    """Status history, oldest first, with the statuses the order can move to"""
    service = OrderService(db)
    order, history = await service.get_status_history(order_id)
    return OrderHistoryResponse(
        order_id=order.id,
        status=order.status,
        is_terminal=service.state_machine.is_terminal_state(order.status),
        valid_next_statuses=service.state_machine.get_valid_transitions(order.status),
        history=[StatusHistoryResponse.model_validate(entry) for entry in history]
    )

@router.put("/orders/{order_id}", response_model=MessageResponse, summary="Update order status")
async def update_order_status(
    order_id: int,
    update_data: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Move an order to a new status"""
    service = OrderService(db)
    await service.update_order_status(order_id, update_data.status, update_data.message)
    return MessageResponse(message="Order updated!")

@router.get("/stats", response_model=AdminStats, summary="Dashboard stats")
async def get_admin_stats(db: AsyncSession = Depends(get_db)):
    """Get admin dashboard statistics"""
    service = StatsService(db)
    return await service.compute_stats()
