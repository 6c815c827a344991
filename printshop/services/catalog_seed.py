"""Sample catalog loaded into an empty store on startup"""

from typing import Any, Dict, List
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from printshop.models import Product
from printshop.core.database import persistence_guard
from printshop.api.products.services import ProductService

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {"name": "Cute Dragon", "description": "A friendly little dragon that glows in the dark! Perfect desk buddy.", "price": Decimal("8.50"), "image_url": "/images/dragon.png", "category": "Fantasy", "in_stock": 15, "print_time": "3 hours", "created_by": "Emma (12)"},
    {"name": "Rocket Ship", "description": "Blast off with this awesome rocket! Has movable fins.", "price": Decimal("12.00"), "image_url": "/images/rocket.png", "category": "Space", "in_stock": 10, "print_time": "4 hours", "created_by": "Jake (11)"},
    {"name": "Phone Stand", "description": "Cool geometric phone stand. Holds any phone!", "price": Decimal("5.00"), "image_url": "/images/phonestand.png", "category": "Useful", "in_stock": 25, "print_time": "2 hours", "created_by": "Mia (13)"},
    {"name": "Dino T-Rex", "description": "Roar! This T-Rex has articulated joints and can pose.", "price": Decimal("15.00"), "image_url": "/images/trex.png", "category": "Dinosaurs", "in_stock": 8, "print_time": "5 hours", "created_by": "Lucas (12)"},
    {"name": "Minecraft Creeper", "description": "Ssssss... Don't worry, this one won't explode!", "price": Decimal("7.00"), "image_url": "/images/creeper.png", "category": "Gaming", "in_stock": 20, "print_time": "2.5 hours", "created_by": "Sophie (11)"},
    {"name": "Fidget Spinner", "description": "Super smooth spinning action. Satisfying clicks!", "price": Decimal("4.50"), "image_url": "/images/spinner.png", "category": "Fidgets", "in_stock": 30, "print_time": "1.5 hours", "created_by": "Noah (13)"},
    {"name": "Unicorn", "description": "Magical rainbow unicorn with sparkly finish.", "price": Decimal("10.00"), "image_url": "/images/unicorn.png", "category": "Fantasy", "in_stock": 12, "print_time": "3.5 hours", "created_by": "Emma (12)"},
    {"name": "Articulated Snake", "description": "Wiggly snake that actually moves! So satisfying.", "price": Decimal("6.00"), "image_url": "/images/snake.png", "category": "Animals", "in_stock": 18, "print_time": "2 hours", "created_by": "Jake (11)"},
    {"name": "Pencil Holder", "description": "Keep your desk organized with this cool holder!", "price": Decimal("5.50"), "image_url": "/images/pencilholder.png", "category": "Useful", "in_stock": 22, "print_time": "2.5 hours", "created_by": "Mia (13)"},
    {"name": "Baby Yoda", "description": "The cutest little guy from the galaxy far far away.", "price": Decimal("11.00"), "image_url": "/images/babyyoda.png", "category": "Movies", "in_stock": 14, "print_time": "3 hours", "created_by": "Lucas (12)"},
    {"name": "Flexi Octopus", "description": "Eight wiggly tentacles! Stress relief champion.", "price": Decimal("8.00"), "image_url": "/images/octopus.png", "category": "Animals", "in_stock": 16, "print_time": "3 hours", "created_by": "Sophie (11)"},
    {"name": "Keychain Set", "description": "Pack of 3 custom keychains - heart, star, and moon!", "price": Decimal("6.50"), "image_url": "/images/keychains.png", "category": "Accessories", "in_stock": 35, "print_time": "1 hour", "created_by": "Noah (13)"},
]

async def seed_sample_products(db: AsyncSession) -> int:
    """
    Insert the sample catalog when the store has no products

    Returns:
        Number of products inserted, zero if the catalog was not empty
    """
    if await ProductService(db).count_products() > 0:
        return 0

    async with persistence_guard(db, "seed sample products"):
        db.add_all([Product(**fields) for fields in SAMPLE_PRODUCTS])
        await db.commit()

    logger.info(f"Seeded {len(SAMPLE_PRODUCTS)} sample products")
    return len(SAMPLE_PRODUCTS)
