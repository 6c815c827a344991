"""Tests for admin stats and the order state machine."""

from decimal import Decimal

import pytest

from printshop.api.admin.services import StatsService
from printshop.api.cart.services import CartService
from printshop.api.orders.services import OrderService
from printshop.api.orders.state_machine import OrderStateMachine, STATUS_FLOW
from printshop.core.exceptions import InvalidInputException
from printshop.services.catalog_seed import seed_sample_products, SAMPLE_PRODUCTS

CUSTOMER = ("Mia", "mia@x.com", "1 Main St")


async def _place_order(db, product, session_id):
    await CartService(db).add_to_cart(session_id, product.id, 1)
    return await OrderService(db).create_order(session_id, *CUSTOMER)


class TestStats:
    async def test_empty_store(self, db):
        stats = await StatsService(db).compute_stats()

        assert stats.total_products == 0
        assert stats.total_orders == 0
        assert stats.pending_orders == 0
        assert stats.total_revenue == Decimal("0")

    async def test_revenue_counts_delivered_only(self, db, make_product):
        ten = await make_product("Rocket Ship", price="10.00")
        five = await make_product("Phone Stand", price="5.00")
        three = await make_product("Keychain", price="3.00")

        delivered = await _place_order(db, ten, "sess-a")
        await _place_order(db, five, "sess-b")
        cancelled = await _place_order(db, three, "sess-c")

        service = OrderService(db)
        await service.update_order_status(delivered.id, "delivered")
        await service.update_order_status(cancelled.id, "cancelled")

        stats = await StatsService(db).compute_stats()

        assert stats.total_products == 3
        assert stats.total_orders == 3
        assert stats.pending_orders == 1
        assert stats.total_revenue == Decimal("10.00")

    async def test_every_in_progress_status_counts_as_pending(self, db, make_product):
        product = await make_product()
        service = OrderService(db)
        for index, status in enumerate(STATUS_FLOW):
            order = await _place_order(db, product, f"sess-{index}")
            if status != "pending":
                await service.update_order_status(order.id, status)

        stats = await StatsService(db).compute_stats()

        assert stats.total_orders == len(STATUS_FLOW)
        assert stats.pending_orders == len(STATUS_FLOW) - 1

    async def test_stats_reflect_latest_state(self, db, make_product):
        product = await make_product(price="4.50")
        order = await _place_order(db, product, "sess-a")
        stats_service = StatsService(db)

        assert (await stats_service.compute_stats()).total_revenue == Decimal("0")

        await OrderService(db).update_order_status(order.id, "delivered")

        assert (await stats_service.compute_stats()).total_revenue == Decimal("4.50")


class TestOrderStateMachine:
    def test_permissive_accepts_any_non_blank_status(self):
        machine = OrderStateMachine()

        assert machine.can_transition("pending", "delivered")
        assert machine.can_transition("delivered", "pending")
        assert machine.can_transition("pending", "on_hold")
        assert not machine.can_transition("pending", " ")

    def test_strict_allows_next_step_only(self):
        machine = OrderStateMachine(strict=True)

        for current, following in zip(STATUS_FLOW, STATUS_FLOW[1:]):
            assert machine.can_transition(current, following)
        assert not machine.can_transition("pending", "printing")
        assert not machine.can_transition("confirmed", "pending")
        assert not machine.can_transition("delivered", "pending")

    def test_strict_rejects_unknown_status(self):
        machine = OrderStateMachine(strict=True)

        with pytest.raises(InvalidInputException):
            machine.validate_transition("pending", "on_hold")

    def test_valid_transitions(self):
        assert OrderStateMachine(strict=True).get_valid_transitions("printing") == ["quality_check"]
        assert OrderStateMachine(strict=True).get_valid_transitions("delivered") == []
        assert "pending" not in OrderStateMachine().get_valid_transitions("pending")

    def test_terminal_state(self):
        machine = OrderStateMachine()

        assert machine.is_terminal_state("delivered")
        assert not machine.is_terminal_state("ready")
        assert not machine.is_terminal_state("on_hold")


class TestCatalogSeed:
    async def test_seeds_empty_catalog_once(self, db):
        assert await seed_sample_products(db) == len(SAMPLE_PRODUCTS)
        assert await seed_sample_products(db) == 0

    async def test_skips_non_empty_catalog(self, db, make_product):
        await make_product()

        assert await seed_sample_products(db) == 0
