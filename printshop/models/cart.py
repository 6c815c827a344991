"""
Shopping cart model
Carts are session-scoped; a cart is just the lines sharing a session_id
"""

from sqlalchemy import Column, String, Integer, Index, UniqueConstraint, CheckConstraint

from .base import BaseModel, IntegerIDModel, CreatedAtModel

class CartItem(BaseModel, IntegerIDModel, CreatedAtModel):
    """Shopping cart line"""

    __tablename__ = "cart_items"

    session_id = Column(String(255), nullable=False)

    # Plain reference, the line outlives a deleted product
    product_id = Column(Integer, nullable=False)

    quantity = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        UniqueConstraint("session_id", "product_id", name="uq_session_product"),
        CheckConstraint("quantity > 0", name="check_positive_cart_quantity"),
        Index("idx_cart_items_session", "session_id"),
    )
