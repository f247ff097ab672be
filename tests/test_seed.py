from decimal import Decimal

import pytest

from stockroom.common.database import find_products
from stockroom.seed import SAMPLE_PRODUCTS, seed_products


@pytest.mark.asyncio
async def test_seed_inserts_samples_once(db):
    added = await seed_products()
    assert added == len(SAMPLE_PRODUCTS)

    again = await seed_products()
    assert again == 0

    names = {p["name"] for p in await find_products()}
    assert names == {p["name"] for p in SAMPLE_PRODUCTS}


@pytest.mark.asyncio
async def test_seed_defaults_leave_sample_list_untouched(db):
    before = [dict(p) for p in SAMPLE_PRODUCTS]

    await seed_products(None)

    assert SAMPLE_PRODUCTS == before


@pytest.mark.asyncio
async def test_seed_skips_existing_names(db):
    products = [
        {"name": "Widget", "quantity": 1, "price": Decimal("1.00")},
        {"name": "Widget", "quantity": 2, "price": Decimal("2.00")},
    ]
    assert await seed_products(products) == 1
