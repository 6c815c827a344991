"""Session-scoped cart routes"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from printshop.core.database import get_db
from printshop.schemas.base import MessageResponse
from printshop.utils.dependencies import get_session_id
from .schemas import CartItemCreate, CartItemUpdate, CartItemResponse, CartSummaryResponse
from .services import CartService

router = APIRouter()

@router.get("", response_model=List[CartItemResponse])
async def get_cart(
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Get cart lines with their products"""
    service = CartService(db)
    lines = await service.get_cart(session_id)
    return [CartItemResponse.model_validate(line) for line in lines]

@router.get("/summary", response_model=CartSummaryResponse)
async def get_cart_summary(
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Item count and subtotal"""
    service = CartService(db)
    return await service.get_cart_summary(session_id)

@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_to_cart(
    item_data: CartItemCreate,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Add item to cart"""
    service = CartService(db)
    await service.add_to_cart(session_id, item_data.product_id, item_data.quantity)
    return MessageResponse(message="Added to cart!")

@router.put("/{item_id}", response_model=MessageResponse)
async def update_cart_item(
    item_id: int,
    update_data: CartItemUpdate,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Update cart item quantity"""
    service = CartService(db)
    await service.update_cart_item(session_id, item_id, update_data.quantity)
    return MessageResponse(message="Cart updated!")

@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def remove_from_cart(
    item_id: int,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Remove item from cart"""
    service = CartService(db)
    await service.remove_from_cart(session_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def clear_cart(
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Clear entire cart"""
    service = CartService(db)
    await service.clear_cart(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
