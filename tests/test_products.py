"""Tests for the product catalog."""

from decimal import Decimal

import pytest

from printshop.api.products.services import ProductService, ALL_CATEGORIES
from printshop.core.exceptions import NotFoundException, InvalidInputException


class TestCatalogQueries:
    async def test_list_products_in_id_order(self, db, make_product):
        first = await make_product("Cute Dragon")
        second = await make_product("Rocket Ship", price="12.00", category="Space")

        products = await ProductService(db).list_products()

        assert [p.id for p in products] == [first.id, second.id]

    async def test_filter_by_exact_category(self, db, make_product):
        await make_product("Cute Dragon", category="Fantasy")
        await make_product("Rocket Ship", category="Space")
        await make_product("Unicorn", category="Fantasy")

        service = ProductService(db)
        fantasy = await service.list_products("Fantasy")

        assert [p.name for p in fantasy] == ["Cute Dragon", "Unicorn"]
        assert await service.list_products("fantasy") == []

    async def test_all_category_returns_everything(self, db, make_product):
        await make_product("Cute Dragon", category="Fantasy")
        await make_product("Rocket Ship", category="Space")

        products = await ProductService(db).list_products(ALL_CATEGORIES)

        assert len(products) == 2

    async def test_categories_led_by_all(self, db, make_product):
        await make_product("Rocket Ship", category="Space")
        await make_product("Cute Dragon", category="Fantasy")
        await make_product("Unicorn", category="Fantasy")

        categories = await ProductService(db).list_categories()

        assert categories == ["All", "Fantasy", "Space"]

    async def test_get_missing_product(self, db):
        with pytest.raises(NotFoundException):
            await ProductService(db).get_product(999)

    async def test_count_products(self, db, make_product):
        service = ProductService(db)
        assert await service.count_products() == 0

        await make_product()
        await make_product("Phone Stand", price="5.00")

        assert await service.count_products() == 2


class TestCatalogEdits:
    async def test_create_assigns_id_and_created_at(self, db, make_product):
        product = await make_product(price="8.50")

        assert product.id is not None
        assert product.created_at is not None
        assert product.price == Decimal("8.50")

    async def test_create_requires_name(self, db):
        with pytest.raises(InvalidInputException):
            await ProductService(db).create_product({"price": Decimal("1.00")})

    async def test_update_replaces_only_given_fields(self, db, make_product):
        product = await make_product("Cute Dragon", price="8.50")
        created_at = product.created_at

        updated = await ProductService(db).update_product(
            product.id,
            {"price": Decimal("9.00"), "id": 12345, "created_at": None}
        )

        assert updated.id == product.id
        assert updated.price == Decimal("9.00")
        assert updated.name == "Cute Dragon"
        assert updated.created_at == created_at

    async def test_update_missing_product(self, db):
        with pytest.raises(NotFoundException):
            await ProductService(db).update_product(999, {"name": "Ghost"})

    async def test_delete_product(self, db, make_product):
        product = await make_product()
        service = ProductService(db)

        await service.delete_product(product.id)

        assert await service.find_product(product.id) is None
        with pytest.raises(NotFoundException):
            await service.delete_product(product.id)
