import os
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio

_TMP_DIR = Path(tempfile.mkdtemp(prefix="stockroom-tests-"))
os.environ["DB_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR / 'test.db'}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["CURRENCY_SYMBOL"] = "$"

from stockroom.app import create_app  # noqa: E402
from stockroom.common.database import engine  # noqa: E402
from stockroom.common.db import Base  # noqa: E402


@pytest_asyncio.fixture
async def db():
    """Fresh products table for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app, db):
    return app.test_client()
