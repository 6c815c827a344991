"""
Order API routes
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from printshop.core.config import settings
from printshop.core.database import get_db
from printshop.core.rate_limit import limiter
from printshop.utils.dependencies import get_session_id
from .schemas import OrderCreate, OrderResponse, OrderTrackingResponse, StatusHistoryResponse
from .services import OrderService

router = APIRouter()

@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
    description="Turn the session cart into an order and empty the cart"
)
@limiter.limit(settings.RATE_LIMIT_ORDERS)
async def create_order(
    request: Request,
    order_data: OrderCreate,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Create new order"""
    service = OrderService(db)
    return await service.create_order(
        session_id,
        order_data.customer_name,
        order_data.customer_email,
        order_data.address
    )

@router.get(
    "/track/{tracking_code}",
    response_model=OrderTrackingResponse,
    summary="Track order",
    description="Look up an order by tracking code with its status history, newest first"
)
async def track_order(tracking_code: str, db: AsyncSession = Depends(get_db)):
    """Track order by code"""
    service = OrderService(db)
    order, history = await service.get_order_tracking(tracking_code)
    return OrderTrackingResponse(
        order=OrderResponse.model_validate(order),
        status_history=[StatusHistoryResponse.model_validate(entry) for entry in history]
    )

@router.get("/{order_id}", response_model=OrderResponse, summary="Get order")
async def get_order(order_id: int, db: AsyncSession = Depends(get_db)):
    """Get order details"""
    service = OrderService(db)
    return await service.get_order(order_id)
