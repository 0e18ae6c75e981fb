"""공용 테스트 fixture

DB 는 인메모리 SQLite(aiosqlite)로 대체한다.
"""
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from api import create_app
from config import Settings
from init_db import apply_schema

SQLITE_URL = "sqlite+aiosqlite://"


def make_sqlite_engine():
    return create_async_engine(
        SQLITE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def test_settings():
    settings = Settings()
    settings.DB_RETRY_ATTEMPTS = 3
    settings.DB_RETRY_DELAY = 10
    return settings


@pytest.fixture
async def engine():
    engine = make_sqlite_engine()
    await apply_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def app(test_settings, engine):
    return create_app(test_settings, engine=engine)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
