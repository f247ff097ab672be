import asyncio
import logging
from decimal import Decimal

import sqlalchemy as sa

from .common.config import settings
from .common.database import init_db, create_product, AsyncSessionLocal
from .inventory.model import Product

_logger = logging.getLogger(__name__)


SAMPLE_PRODUCTS = [
    {"name": "Laptop Pro 14", "quantity": 20, "price": Decimal("1499.00")},
    {"name": "Wireless Mouse", "quantity": 150, "price": Decimal("24.99")},
    {"name": "Mechanical Keyboard", "quantity": 8, "price": Decimal("89.99")},
    {"name": "USB-C Hub", "quantity": 120, "price": Decimal("39.99")},
    {"name": "Noise-cancelling Headphones", "quantity": 0, "price": Decimal("199.99")},
    {"name": "4K Monitor 27\"", "quantity": 5, "price": Decimal("329.99")},
    {"name": "Portable SSD 1TB", "quantity": 60, "price": Decimal("99.99")},
    {"name": "Webcam 1080p", "quantity": 75, "price": Decimal("49.99")},
]


async def seed_products(products=None) -> int:
    """Insert sample products, skipping names that already exist. Returns the number added."""
    if products is None:
        products = SAMPLE_PRODUCTS
    await init_db()
    async with AsyncSessionLocal() as session:
        res = await session.execute(sa.select(Product.name))
        existing = set(res.scalars().all())
    added = 0
    for p in products:
        if p["name"] in existing:
            continue
        await create_product(p["name"], p["quantity"], p["price"])
        existing.add(p["name"])
        added += 1
    _logger.info("Seed complete | added=%s", added)
    return added


async def amain():
    logging.basicConfig(level=settings.LOG_LEVEL)
    await seed_products()


if __name__ == "__main__":
    asyncio.run(amain())
