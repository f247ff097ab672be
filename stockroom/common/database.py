from decimal import Decimal
from typing import Optional, Dict, Any, List

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from .config import settings
from .db import Base
from ..inventory.model import Product


# Async SQLAlchemy engine and session factory
engine = create_async_engine(settings.DB_URL, future=True, echo=settings.DB_ECHO)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


def _to_dict(prod: Product) -> Dict[str, Any]:
    return {
        "id": prod.id,
        "name": prod.name,
        "quantity": prod.quantity,
        "price": prod.price,
        "created_at": prod.created_at,
    }


async def init_db() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def find_products() -> List[Dict[str, Any]]:
    async with AsyncSessionLocal() as session:
        # id breaks ties between rows created within the same microsecond
        stmt = sa.select(Product).order_by(Product.created_at.desc(), Product.id.desc())
        res = await session.execute(stmt)
        return [_to_dict(prod) for prod in res.scalars().all()]


async def find_product(product_id: str) -> Optional[Dict[str, Any]]:
    async with AsyncSessionLocal() as session:
        prod = await session.get(Product, product_id)
        if not prod:
            return None
        return _to_dict(prod)


async def create_product(name: str, quantity: int, price: Decimal) -> Dict[str, Any]:
    async with AsyncSessionLocal() as session:
        prod = Product(name=name, quantity=quantity, price=price)
        session.add(prod)
        await session.flush()  # assign defaults
        data = _to_dict(prod)
        await session.commit()
        return data


async def update_product(product_id: str, name: str, quantity: int, price: Decimal) -> Optional[Dict[str, Any]]:
    """Overwrite the editable fields of one product. Returns None if it does not exist."""
    async with AsyncSessionLocal() as session:
        async with session.begin():
            stmt = (
                sa.update(Product)
                .where(Product.id == product_id)
                .values(name=name, quantity=quantity, price=price)
            )
            res = await session.execute(stmt)
            if not (res.rowcount or 0):
                return None
        prod = await session.get(Product, product_id, populate_existing=True)
        return _to_dict(prod) if prod else None


async def delete_product(product_id: str) -> bool:
    async with AsyncSessionLocal() as session:
        async with session.begin():
            res = await session.execute(sa.delete(Product).where(Product.id == product_id))
            deleted = res.rowcount or 0
        return deleted > 0
