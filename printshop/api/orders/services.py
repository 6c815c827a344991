"""
Order service layer
Turns session carts into orders and manages their status history
"""

from typing import List, Optional, Tuple
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
import logging

from printshop.models import CartItem, Order, OrderItem, OrderStatus, OrderStatusHistory
from printshop.models.base import utcnow
from printshop.core.config import settings
from printshop.core.database import persistence_guard
from printshop.core.exceptions import (
    NotFoundException,
    InvalidInputException,
    EmptyCartException,
    PersistenceFailureException
)
from printshop.core.monitoring import orders_created, order_status_updates
from printshop.utils.validators import validate_email_address, is_blank, normalize_text
from printshop.api.cart.services import CartService, require_session
from .state_machine import OrderStateMachine
from .tracking import TrackingCodeGenerator

logger = logging.getLogger(__name__)

ORDER_RECEIVED_MESSAGE = "Order received! We're reviewing it. 🎉"

def default_status_message(status: str) -> str:
    return f"Status updated to {status}"

class OrderService:
    """Order service for business logic"""

    def __init__(
        self,
        db: AsyncSession,
        tracking_codes: Optional[TrackingCodeGenerator] = None,
        state_machine: Optional[OrderStateMachine] = None
    ):
        self.db = db
        self.cart_service = CartService(db)
        self.tracking_codes = tracking_codes or TrackingCodeGenerator()
        self.state_machine = state_machine or OrderStateMachine(
            strict=settings.STRICT_STATUS_TRANSITIONS
        )

    async def create_order(
        self,
        session_id: str,
        customer_name: Optional[str],
        customer_email: Optional[str],
        address: Optional[str]
    ) -> Order:
        """
        Create an order from the session's cart

        The cart lines are deleted and returned by a single statement, then
        snapshotted into order items in the same transaction as the order and
        its first history entry. Lines whose product no longer exists are left
        out of the order but still drained from the cart.

        Args:
            session_id: Caller's session token
            customer_name: Shopper name
            customer_email: Shopper email
            address: Shipping address

        Returns:
            Created order with its items

        Raises:
            InvalidInputException: If a customer field is missing or the email is malformed
            EmptyCartException: If the cart has no lines, or another checkout drained it first
            PersistenceFailureException: If storage fails or no free tracking code is found
        """
        require_session(session_id)
        customer_name, customer_email, address = self._validate_customer(
            customer_name, customer_email, address
        )

        async with persistence_guard(self.db, "create order"):
            # Read and drain in one statement: a concurrent add lands wholly
            # before it or after it, a concurrent checkout finds nothing left
            drained = await self.db.execute(
                delete(CartItem)
                .where(CartItem.session_id == session_id)
                .returning(CartItem.id, CartItem.product_id, CartItem.quantity)
                .execution_options(synchronize_session=False)
            )
            cart_lines = sorted(drained.all(), key=lambda line: line.id)

            if not cart_lines:
                raise EmptyCartException()

            products = await self.cart_service.load_products(
                {line.product_id for line in cart_lines}
            )

            total = Decimal("0")
            order_items = []
            for line in cart_lines:
                product = products.get(line.product_id)
                if product is None:
                    logger.warning(
                        f"Dropping cart line {line.id}: product {line.product_id} no longer exists"
                    )
                    continue

                total += product.price * line.quantity
                order_items.append(OrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    price=product.price,
                    quantity=line.quantity
                ))

            now = utcnow()
            order = Order(
                session_id=session_id,
                customer_name=customer_name,
                customer_email=customer_email,
                address=address,
                total=total,
                status=OrderStatus.PENDING.value,
                tracking_code=await self._allocate_tracking_code(),
                items=order_items,
                created_at=now,
                updated_at=now
            )
            self.db.add(order)
            await self.db.flush()

            self.db.add(OrderStatusHistory(
                order_id=order.id,
                status=OrderStatus.PENDING.value,
                message=ORDER_RECEIVED_MESSAGE,
                timestamp=now
            ))

            await self.db.commit()

        orders_created.inc()
        logger.info(
            f"Order {order.id} ({order.tracking_code}) created with "
            f"{len(order_items)} items, total {total}"
        )
        return order

    def _validate_customer(
        self,
        customer_name: Optional[str],
        customer_email: Optional[str],
        address: Optional[str]
    ) -> Tuple[str, str, str]:
        missing = [
            field
            for field, value in (
                ("customer_name", customer_name),
                ("customer_email", customer_email),
                ("address", address),
            )
            if is_blank(value)
        ]
        if missing:
            raise InvalidInputException(f"Missing required fields: {', '.join(missing)}")

        try:
            customer_email = validate_email_address(customer_email)
        except ValueError as e:
            raise InvalidInputException(f"Invalid email address: {e}")

        return normalize_text(customer_name), customer_email, address.strip()

    async def _allocate_tracking_code(self) -> str:
        """Draw tracking codes until one is not used by a stored order"""
        for _ in range(settings.TRACKING_CODE_MAX_ATTEMPTS):
            code = self.tracking_codes.generate()
            taken = await self.db.scalar(
                select(Order.id).where(Order.tracking_code == code)
            )
            if taken is None:
                return code
            logger.info(f"Tracking code {code} already in use, drawing another")

        raise PersistenceFailureException("Could not allocate a unique tracking code")

    async def get_order(self, order_id: int) -> Order:
        """
        Get order with its items

        Raises:
            NotFoundException: If order not found
        """
        async with persistence_guard(self.db, "load order"):
            order = await self.db.get(Order, order_id)

        if order is None:
            raise NotFoundException("Order not found")
        return order

    async def get_order_tracking(self, tracking_code: str) -> Tuple[Order, List[OrderStatusHistory]]:
        """
        Look up an order by tracking code

        Args:
            tracking_code: Code handed to the shopper

        Returns:
            The order and its status history, newest first

        Raises:
            NotFoundException: If no order has this code
        """
        async with persistence_guard(self.db, "track order"):
            result = await self.db.execute(
                select(Order).where(Order.tracking_code == tracking_code)
            )
            order = result.scalar_one_or_none()

            if order is None:
                raise NotFoundException("Order not found")

            history = await self._load_history(order.id, newest_first=True)

        return order, history

    async def get_status_history(self, order_id: int) -> Tuple[Order, List[OrderStatusHistory]]:
        """
        Order and its status history, oldest first

        Raises:
            NotFoundException: If order not found
        """
        order = await self.get_order(order_id)
        async with persistence_guard(self.db, "load status history"):
            history = await self._load_history(order_id, newest_first=False)
        return order, history

    async def list_orders(self, status: Optional[str] = None) -> List[Order]:
        """
        List every order for the admin panel

        Args:
            status: Optional exact status filter

        Returns:
            Orders newest first, each with its items
        """
        query = select(Order).order_by(Order.created_at.desc(), Order.id.desc())
        if status:
            query = query.where(Order.status == status)

        async with persistence_guard(self.db, "list orders"):
            result = await self.db.execute(query)
            return list(result.scalars().all())

    async def update_order_status(
        self,
        order_id: int,
        new_status: str,
        message: Optional[str] = None
    ) -> Order:
        """
        Update order status and append to its history

        Args:
            order_id: Order ID
            new_status: New status; any non-empty value unless strict transitions are on
            message: History message, defaults to "Status updated to <status>"

        Returns:
            Updated order

        Raises:
            NotFoundException: If order not found
            InvalidInputException: If the status is blank or the transition is not allowed
        """
        new_status = (new_status or "").strip()

        async with persistence_guard(self.db, "update order status"):
            # Row lock keeps status and history order consistent on
            # backends that support it
            result = await self.db.execute(
                select(Order).where(Order.id == order_id).with_for_update()
            )
            order = result.scalar_one_or_none()

            if order is None:
                raise NotFoundException("Order not found")

            self.state_machine.validate_transition(order.status, new_status)

            previous_status = order.status
            now = utcnow()
            order.status = new_status
            order.updated_at = now

            self.db.add(OrderStatusHistory(
                order_id=order.id,
                status=new_status,
                message=message if not is_blank(message) else default_status_message(new_status),
                timestamp=now
            ))

            await self.db.commit()

        order_status_updates.labels(status=new_status).inc()
        logger.info(f"Order {order_id} status changed from {previous_status} to {new_status}")
        return order

    async def _load_history(self, order_id: int, newest_first: bool) -> List[OrderStatusHistory]:
        if newest_first:
            ordering = (OrderStatusHistory.timestamp.desc(), OrderStatusHistory.id.desc())
        else:
            ordering = (OrderStatusHistory.timestamp.asc(), OrderStatusHistory.id.asc())

        result = await self.db.execute(
            select(OrderStatusHistory)
            .where(OrderStatusHistory.order_id == order_id)
            .order_by(*ordering)
        )
        return list(result.scalars().all())
