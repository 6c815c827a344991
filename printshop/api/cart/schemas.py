"""
Cart schemas for request/response validation
"""

from pydantic import BaseModel
from typing import Optional

from printshop.schemas.base import BaseSchema, Money
from printshop.api.products.schemas import ProductResponse

class CartItemCreate(BaseModel):
    """Schema for adding item to cart"""
    product_id: int
    quantity: int = 1

class CartItemUpdate(BaseModel):
    """Schema for updating cart item; zero or less removes the line"""
    quantity: int

class CartItemResponse(BaseSchema):
    """
    Cart line with its resolved product

    A line whose product was deleted from the catalog is kept and sent with
    `product: null`, not an empty placeholder object.
    """
    id: int
    session_id: str
    product_id: int
    quantity: int

    # None once the product has been deleted from the catalog
    product: Optional[ProductResponse] = None

class CartSummaryResponse(BaseModel):
    item_count: int
    line_count: int
    subtotal: Money
