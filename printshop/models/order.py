"""Order, order line items and status history"""

from sqlalchemy import Column, String, Numeric, Integer, ForeignKey, Index, Text, DateTime
from sqlalchemy.orm import relationship
import enum

from .base import BaseModel, IntegerIDModel, TimestampedModel, utcnow

class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PRINTING = "printing"
    QUALITY_CHECK = "quality_check"
    READY = "ready"
    DELIVERED = "delivered"

# Statuses still in the pipeline for the admin "pending" counter
IN_PROGRESS_STATUSES = (
    OrderStatus.PENDING.value,
    OrderStatus.CONFIRMED.value,
    OrderStatus.PRINTING.value,
    OrderStatus.QUALITY_CHECK.value,
    OrderStatus.READY.value,
)

class Order(BaseModel, IntegerIDModel, TimestampedModel):
    """Order placed from a session cart"""

    __tablename__ = "orders"

    session_id = Column(String(255), nullable=False, index=True)

    # Customer
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    address = Column(Text, nullable=False)

    # Frozen at creation
    total = Column(Numeric(10, 2), nullable=False)

    # Plain string so custom admin statuses survive
    status = Column(String(50), nullable=False, default=OrderStatus.PENDING.value, index=True)

    tracking_code = Column(String(50), unique=True, nullable=False, index=True)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_orders_created_status", "created_at", "status"),
    )

class OrderItem(BaseModel, IntegerIDModel):
    """Order line item, a snapshot of the product at order time"""

    __tablename__ = "order_items"

    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)

    # Reference only, the product may be deleted later
    product_id = Column(Integer, nullable=False)

    product_name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)

    order = relationship("Order", back_populates="items")

class OrderStatusHistory(BaseModel, IntegerIDModel):
    """Append-only audit trail of order status changes"""

    __tablename__ = "order_status_history"

    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    status = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("idx_order_status_history_order", "order_id", "timestamp"),
    )
