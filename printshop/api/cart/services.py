"""
Cart service layer
Handles session-scoped shopping cart business logic
"""

from dataclasses import dataclass
from typing import List, Optional, Dict, Tuple
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
import logging

from printshop.models import CartItem, Product
from printshop.core.database import persistence_guard
from printshop.core.exceptions import (
    NotFoundException,
    InvalidInputException,
    MissingSessionException
)
from printshop.core.monitoring import cart_additions

logger = logging.getLogger(__name__)

@dataclass
class CartLine:
    """A cart line joined with its product, if the product still exists"""
    id: int
    session_id: str
    product_id: int
    quantity: int
    product: Optional[Product]

    @property
    def subtotal(self) -> Decimal:
        if self.product is None:
            return Decimal("0")
        return self.product.price * self.quantity

def require_session(session_id: Optional[str]) -> str:
    """Reject a missing or blank session token"""
    if session_id is None or not session_id.strip():
        raise MissingSessionException()
    return session_id

class CartService:
    """Shopping cart service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_cart(self, session_id: str) -> List[CartLine]:
        """
        Get cart lines for a session

        Args:
            session_id: Caller's session token

        Returns:
            Lines in insertion order, each with its product resolved.
            A line whose product was deleted is kept with product=None.
        """
        require_session(session_id)

        async with persistence_guard(self.db, "load cart"):
            result = await self.db.execute(
                select(CartItem)
                .where(CartItem.session_id == session_id)
                .order_by(CartItem.id)
            )
            items = result.scalars().all()
            products = await self.load_products({item.product_id for item in items})

        return [
            CartLine(
                id=item.id,
                session_id=item.session_id,
                product_id=item.product_id,
                quantity=item.quantity,
                product=products.get(item.product_id)
            )
            for item in items
        ]

    async def get_cart_summary(self, session_id: str) -> Dict[str, object]:
        """Item count and subtotal over lines whose product still exists"""
        lines = await self.get_cart(session_id)
        return {
            "item_count": sum(line.quantity for line in lines),
            "line_count": len(lines),
            "subtotal": sum((line.subtotal for line in lines), Decimal("0")),
        }

    async def add_to_cart(
        self,
        session_id: str,
        product_id: int,
        quantity: int = 1
    ) -> Tuple[CartItem, bool]:
        """
        Add item to cart, merging with an existing line for the same product

        Args:
            session_id: Caller's session token
            product_id: Product to add
            quantity: Units to add

        Returns:
            The cart line and whether it was merged into an existing one

        Raises:
            InvalidInputException: If quantity is below 1
            NotFoundException: If product not found
        """
        require_session(session_id)
        if quantity < 1:
            raise InvalidInputException("Quantity must be at least 1")

        async with persistence_guard(self.db, "load product"):
            product = await self.db.get(Product, product_id)
        if product is None:
            raise NotFoundException("Product not found")

        async with persistence_guard(self.db, "add to cart"):
            # A concurrent insert of the same line trips the unique constraint,
            # in which case the second pass merges into the winner's row
            for attempt in range(2):
                try:
                    merged = await self._merge_or_insert(session_id, product_id, quantity)
                    await self.db.commit()
                    break
                except IntegrityError:
                    await self.db.rollback()
                    if attempt == 1:
                        raise
                    logger.info("Concurrent insert of the same cart line, retrying as merge")

            result = await self.db.execute(
                select(CartItem)
                .where(
                    CartItem.session_id == session_id,
                    CartItem.product_id == product_id
                )
                .execution_options(populate_existing=True)
            )
            cart_item = result.scalar_one()

        cart_additions.labels(merged=str(merged).lower()).inc()
        return cart_item, merged

    async def _merge_or_insert(self, session_id: str, product_id: int, quantity: int) -> bool:
        # Single UPDATE keeps the increment atomic under concurrent adds
        result = await self.db.execute(
            update(CartItem)
            .where(
                CartItem.session_id == session_id,
                CartItem.product_id == product_id
            )
            .values(quantity=CartItem.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            return True

        self.db.add(CartItem(
            session_id=session_id,
            product_id=product_id,
            quantity=quantity
        ))
        await self.db.flush()
        return False

    async def update_cart_item(
        self,
        session_id: str,
        item_id: int,
        quantity: int
    ) -> Optional[CartItem]:
        """
        Set a line's quantity

        Args:
            session_id: Caller's session token
            item_id: Cart line ID
            quantity: New quantity; zero or less removes the line

        Returns:
            The updated line, or None when it was removed

        Raises:
            NotFoundException: If the line does not belong to the session
        """
        require_session(session_id)
        owned = (CartItem.id == item_id, CartItem.session_id == session_id)

        async with persistence_guard(self.db, "update cart"):
            # Statement-level writes, so a line drained by a concurrent
            # checkout reads as missing rather than as a stale object
            if quantity <= 0:
                result = await self.db.execute(delete(CartItem).where(*owned))
                if result.rowcount == 0:
                    raise NotFoundException("Cart item not found")
                await self.db.commit()
                return None

            result = await self.db.execute(
                update(CartItem)
                .where(*owned)
                .values(quantity=quantity)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundException("Cart item not found")

            result = await self.db.execute(
                select(CartItem)
                .where(*owned)
                .execution_options(populate_existing=True)
            )
            cart_item = result.scalar_one()
            await self.db.commit()

        return cart_item

    async def remove_from_cart(self, session_id: str, item_id: int) -> None:
        """
        Remove item from cart

        Raises:
            NotFoundException: If the line does not belong to the session
        """
        require_session(session_id)

        async with persistence_guard(self.db, "remove cart item"):
            result = await self.db.execute(
                delete(CartItem).where(
                    CartItem.id == item_id,
                    CartItem.session_id == session_id
                )
            )

            if result.rowcount == 0:
                raise NotFoundException("Cart item not found")

            await self.db.commit()

    async def clear_cart(self, session_id: str) -> int:
        """
        Clear all items from cart

        Returns:
            Number of lines removed, zero for an empty cart
        """
        require_session(session_id)

        async with persistence_guard(self.db, "clear cart"):
            result = await self.db.execute(
                delete(CartItem).where(CartItem.session_id == session_id)
            )
            await self.db.commit()

        return result.rowcount

    async def load_products(self, product_ids) -> Dict[int, Product]:
        if not product_ids:
            return {}
        result = await self.db.execute(
            select(Product).where(Product.id.in_(product_ids))
        )
        return {product.id: product for product in result.scalars().all()}
