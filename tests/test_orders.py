"""Tests for order creation, tracking and status history."""

import re
from decimal import Decimal

import pytest
from sqlalchemy import select

from printshop.api.cart.services import CartService
from printshop.api.orders.services import OrderService, ORDER_RECEIVED_MESSAGE
from printshop.api.orders.state_machine import OrderStateMachine
from printshop.api.orders.tracking import TrackingCodeGenerator
from printshop.api.products.services import ProductService
from printshop.core.exceptions import (
    NotFoundException,
    InvalidInputException,
    EmptyCartException,
    PersistenceFailureException,
)
from printshop.models import Order

SESSION = "sess-order-001"
CUSTOMER = ("Mia", "mia@x.com", "1 Main St")


class FixedCodes:
    """Hands out a scripted sequence of tracking codes."""

    def __init__(self, *codes):
        self.codes = list(codes)

    def generate(self):
        if len(self.codes) > 1:
            return self.codes.pop(0)
        return self.codes[0]


async def _order_from_cart(db, product, quantity=1, session_id=SESSION, **service_kwargs):
    await CartService(db).add_to_cart(session_id, product.id, quantity)
    return await OrderService(db, **service_kwargs).create_order(session_id, *CUSTOMER)


class TestCreateOrder:
    async def test_order_from_cart(self, db, make_product):
        product = await make_product("Cute Dragon", price="8.50")
        await CartService(db).add_to_cart(SESSION, product.id, 2)

        order = await OrderService(db).create_order(SESSION, *CUSTOMER)

        assert order.total == Decimal("17.00")
        assert order.status == "pending"
        assert order.created_at == order.updated_at
        assert [(i.product_name, i.price, i.quantity) for i in order.items] == [
            ("Cute Dragon", Decimal("8.50"), 2)
        ]
        assert re.fullmatch(r"3DK-\d{1,5}-\d{1,3}", order.tracking_code)

        _, history = await OrderService(db).get_status_history(order.id)
        assert [(h.status, h.message) for h in history] == [("pending", ORDER_RECEIVED_MESSAGE)]

        assert await CartService(db).get_cart(SESSION) == []

    async def test_empty_cart_rejected_without_mutation(self, db):
        with pytest.raises(EmptyCartException):
            await OrderService(db).create_order(SESSION, *CUSTOMER)

        assert await OrderService(db).list_orders() == []

    @pytest.mark.parametrize(
        "customer",
        [
            ("", "mia@x.com", "1 Main St"),
            ("Mia", None, "1 Main St"),
            ("Mia", "mia@x.com", "   "),
            ("Mia", "not-an-email", "1 Main St"),
        ],
    )
    async def test_invalid_customer_fields(self, db, make_product, customer):
        product = await make_product()
        await CartService(db).add_to_cart(SESSION, product.id, 1)

        with pytest.raises(InvalidInputException):
            await OrderService(db).create_order(SESSION, *customer)

        assert len(await CartService(db).get_cart(SESSION)) == 1

    async def test_deleted_product_line_dropped(self, db, make_product):
        dragon = await make_product("Cute Dragon", price="8.50")
        rocket = await make_product("Rocket Ship", price="12.00")
        cart = CartService(db)
        await cart.add_to_cart(SESSION, dragon.id, 1)
        await cart.add_to_cart(SESSION, rocket.id, 1)
        await ProductService(db).delete_product(rocket.id)

        order = await OrderService(db).create_order(SESSION, *CUSTOMER)

        assert [i.product_name for i in order.items] == ["Cute Dragon"]
        assert order.total == Decimal("8.50")
        assert await cart.get_cart(SESSION) == []

    async def test_total_frozen_after_price_change(self, db, make_product, fresh_session):
        product = await make_product("Cute Dragon", price="8.50")
        order = await _order_from_cart(db, product, quantity=2)

        await ProductService(db).update_product(product.id, {"price": Decimal("20.00")})

        async with fresh_session() as other:
            stored = await OrderService(other).get_order(order.id)
            assert stored.total == Decimal("17.00")
            assert stored.items[0].price == Decimal("8.50")

    async def test_tracking_code_collision_draws_again(self, db, make_product):
        product = await make_product()
        first = await _order_from_cart(
            db, product, tracking_codes=FixedCodes("3DK-1-1")
        )
        second = await _order_from_cart(
            db, product, tracking_codes=FixedCodes("3DK-1-1", "3DK-1-1", "3DK-1-2")
        )

        assert first.tracking_code == "3DK-1-1"
        assert second.tracking_code == "3DK-1-2"

    async def test_tracking_codes_exhausted(self, db, make_product):
        product = await make_product()
        await _order_from_cart(db, product, tracking_codes=FixedCodes("3DK-1-1"))
        await CartService(db).add_to_cart(SESSION, product.id, 1)

        with pytest.raises(PersistenceFailureException):
            await OrderService(db, tracking_codes=FixedCodes("3DK-1-1")).create_order(
                SESSION, *CUSTOMER
            )

        assert len(await CartService(db).get_cart(SESSION)) == 1
        assert len(await OrderService(db).list_orders()) == 1


class TestOrderLookup:
    async def test_get_order(self, db, make_product):
        product = await make_product()
        order = await _order_from_cart(db, product)

        assert (await OrderService(db).get_order(order.id)).id == order.id

    async def test_get_missing_order(self, db):
        with pytest.raises(NotFoundException):
            await OrderService(db).get_order(999)

    async def test_track_newest_first(self, db, make_product):
        product = await make_product()
        order = await _order_from_cart(db, product)
        service = OrderService(db)
        await service.update_order_status(order.id, "confirmed")
        await service.update_order_status(order.id, "printing", "On the printer now")

        tracked, history = await service.get_order_tracking(order.tracking_code)

        assert tracked.id == order.id
        assert [h.status for h in history] == ["printing", "confirmed", "pending"]

    async def test_track_unknown_code(self, db):
        with pytest.raises(NotFoundException):
            await OrderService(db).get_order_tracking("3DK-0-0")

    async def test_admin_listing_newest_first(self, db, make_product):
        product = await make_product()
        first = await _order_from_cart(db, product, session_id="sess-a")
        second = await _order_from_cart(db, product, session_id="sess-b")
        third = await _order_from_cart(db, product, session_id="sess-c")

        orders = await OrderService(db).list_orders()

        assert [o.id for o in orders] == [third.id, second.id, first.id]

    async def test_admin_listing_status_filter(self, db, make_product):
        product = await make_product()
        first = await _order_from_cart(db, product, session_id="sess-a")
        await _order_from_cart(db, product, session_id="sess-b")
        service = OrderService(db)
        await service.update_order_status(first.id, "delivered")

        delivered = await service.list_orders("delivered")

        assert [o.id for o in delivered] == [first.id]


class TestStatusUpdates:
    async def test_update_appends_one_entry(self, db, make_product, fresh_session):
        product = await make_product()
        order = await _order_from_cart(db, product)

        async with fresh_session() as before_session:
            _, before = await OrderService(before_session).get_status_history(order.id)
            before = [(h.id, h.status, h.message, h.timestamp) for h in before]

        updated = await OrderService(db).update_order_status(order.id, "confirmed")

        async with fresh_session() as after_session:
            _, after = await OrderService(after_session).get_status_history(order.id)

        assert updated.status == "confirmed"
        assert len(after) == len(before) + 1
        assert [(h.id, h.status, h.message, h.timestamp) for h in after[:-1]] == before
        assert after[-1].status == "confirmed"
        assert after[-1].message == "Status updated to confirmed"

    async def test_update_with_message(self, db, make_product):
        product = await make_product()
        order = await _order_from_cart(db, product)
        service = OrderService(db)

        await service.update_order_status(order.id, "ready", "Come pick it up!")

        _, history = await service.get_status_history(order.id)
        assert (history[-1].status, history[-1].message) == ("ready", "Come pick it up!")

    async def test_permissive_accepts_custom_status(self, db, make_product):
        product = await make_product()
        order = await _order_from_cart(db, product)

        updated = await OrderService(db).update_order_status(order.id, "cancelled")

        assert updated.status == "cancelled"

    async def test_blank_status_rejected(self, db, make_product):
        product = await make_product()
        order = await _order_from_cart(db, product)

        with pytest.raises(InvalidInputException):
            await OrderService(db).update_order_status(order.id, "  ")

    async def test_update_missing_order(self, db):
        with pytest.raises(NotFoundException):
            await OrderService(db).update_order_status(999, "confirmed")

    async def test_strict_mode_rejects_skips(self, db, make_product):
        product = await make_product()
        order = await _order_from_cart(db, product)
        # A rejected update rolls the session back and expires loaded orders
        order_id = order.id
        service = OrderService(db, state_machine=OrderStateMachine(strict=True))

        with pytest.raises(InvalidInputException):
            await service.update_order_status(order_id, "delivered")

        _, history = await service.get_status_history(order_id)
        assert [h.status for h in history] == ["pending"]

        await service.update_order_status(order_id, "confirmed")
        result = await db.execute(select(Order.status).where(Order.id == order_id))
        assert result.scalar_one() == "confirmed"


class TestTrackingCodeGenerator:
    def test_format(self):
        generator = TrackingCodeGenerator(prefix="TST", clock=lambda: 1700000012.0)

        code = generator.generate()

        assert re.fullmatch(r"TST-12000-\d{1,3}", code)

    def test_default_prefix(self):
        assert TrackingCodeGenerator().generate().startswith("3DK-")
