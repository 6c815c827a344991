"""
Order schemas for request/response validation
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from printshop.schemas.base import BaseSchema, Money

class OrderCreate(BaseModel):
    """
    Schema for creating an order from the session cart

    Fields are optional here so blank or missing values reach the service
    and come back as INVALID_INPUT rather than a schema error.
    """
    customer_name: Optional[str] = Field(None, max_length=255)
    customer_email: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=2000)

class OrderItemResponse(BaseSchema):
    """Frozen order line"""
    id: int
    order_id: int
    product_id: int
    product_name: str
    price: Money
    quantity: int

class OrderResponse(BaseSchema):
    """Schema for order response"""
    id: int
    session_id: str
    customer_name: str
    customer_email: str
    address: str
    total: Money
    status: str
    tracking_code: str
    items: List[OrderItemResponse]
    created_at: datetime
    updated_at: datetime

class StatusHistoryResponse(BaseSchema):
    status: str
    message: str
    timestamp: datetime

class OrderTrackingResponse(BaseModel):
    """Order plus its status history, newest first"""
    order: OrderResponse
    status_history: List[StatusHistoryResponse]

class OrderStatusUpdate(BaseModel):
    """Admin status change"""
    status: str = Field(..., max_length=50)
    message: Optional[str] = Field(None, max_length=1000)

class OrderHistoryResponse(BaseModel):
    """Admin view of an order's audit trail, oldest first"""
    order_id: int
    status: str
    is_terminal: bool
    valid_next_statuses: List[str]
    history: List[StatusHistoryResponse]
