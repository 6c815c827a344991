"""
Product service layer
Catalog reads and admin edits
"""

from typing import List, Optional, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, delete
import logging

from printshop.models import Product
from printshop.models.product import EDITABLE_FIELDS
from printshop.core.database import persistence_guard
from printshop.core.exceptions import NotFoundException, InvalidInputException

logger = logging.getLogger(__name__)

# Category value meaning "no filter"
ALL_CATEGORIES = "All"

class ProductService:
    """Product catalog service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_products(self, category: Optional[str] = None) -> List[Product]:
        """
        List catalog products

        Args:
            category: Exact category to match; None or "All" returns everything

        Returns:
            Products ordered by id
        """
        query = select(Product).order_by(Product.id)

        if category and category != ALL_CATEGORIES:
            query = query.where(Product.category == category)

        async with persistence_guard(self.db, "list products"):
            result = await self.db.execute(query)
            return list(result.scalars().all())

    async def find_product(self, product_id: int) -> Optional[Product]:
        """Get product by ID, or None when it does not exist"""
        async with persistence_guard(self.db, "load product"):
            return await self.db.get(Product, product_id)

    async def get_product(self, product_id: int) -> Product:
        """
        Get product by ID

        Raises:
            NotFoundException: If product not found
        """
        product = await self.find_product(product_id)
        if product is None:
            raise NotFoundException("Product not found")
        return product

    async def create_product(self, data: Dict[str, Any]) -> Product:
        """
        Create a product

        Args:
            data: Product fields; unknown keys are ignored

        Returns:
            The stored product with its id and created_at
        """
        fields = {key: value for key, value in data.items() if key in EDITABLE_FIELDS}
        if not fields.get("name"):
            raise InvalidInputException("Product name is required")
        if fields.get("price") is None:
            raise InvalidInputException("Product price is required")

        product = Product(**fields)

        async with persistence_guard(self.db, "create product"):
            self.db.add(product)
            await self.db.commit()
            await self.db.refresh(product)

        logger.info(f"Product {product.id} created: {product.name}")
        return product

    async def update_product(self, product_id: int, data: Dict[str, Any]) -> Product:
        """
        Replace the given fields of a product

        Args:
            product_id: Product ID
            data: Fields to replace; "id" and "created_at" are never touched

        Returns:
            Updated product

        Raises:
            NotFoundException: If product not found
        """
        product = await self.get_product(product_id)

        product.update_from_dict(
            {key: value for key, value in data.items() if key in EDITABLE_FIELDS}
        )

        async with persistence_guard(self.db, "update product"):
            await self.db.commit()
            await self.db.refresh(product)

        return product

    async def delete_product(self, product_id: int) -> None:
        """
        Delete a product; carts and past orders keep their references

        Raises:
            NotFoundException: If product not found
        """
        async with persistence_guard(self.db, "delete product"):
            result = await self.db.execute(
                delete(Product).where(Product.id == product_id)
            )
            if result.rowcount == 0:
                raise NotFoundException("Product not found")
            await self.db.commit()

        logger.info(f"Product {product_id} deleted")

    async def list_categories(self) -> List[str]:
        """Distinct categories in the catalog, led by "All" """
        async with persistence_guard(self.db, "list categories"):
            result = await self.db.execute(
                select(Product.category)
                .where(Product.category != "")
                .distinct()
                .order_by(Product.category)
            )
            return [ALL_CATEGORIES, *result.scalars().all()]

    async def count_products(self) -> int:
        async with persistence_guard(self.db, "count products"):
            return await self.db.scalar(select(func.count()).select_from(Product))
