"""
Общие фикстуры для всех тестов XQ Fitness.

Стратегия:
- На каждый тест поднимается свежая SQLite в памяти (aiosqlite + StaticPool),
  таблицы создаются, справочник групп мышц загружается.
- read- и write-приложения создаются без startup-событий; get_db подменяется
  на сессию тестовой БД, get_today на фиксированную дату.
- GatewayClient привязывается к обоим приложениям через ASGITransport,
  так что клиентские оркестраторы ходят в настоящий backend без сети.
- Для модульных тестов оркестраторов есть mock_gateway (AsyncMock).
"""

import pytest
from datetime import date
from typing import AsyncGenerator
from unittest.mock import AsyncMock

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from xq_fitness.core.database import init_database
from xq_fitness.core.db import create_engine, create_session_factory, get_db
from xq_fitness.core.dependencies import get_today
from xq_fitness.main import create_read_app, create_write_app
from xq_fitness.services.gateway_client import GatewayClient

TEST_DATABASE_URL = "sqlite+aiosqlite://"
BASE_URL = "http://test"
API_URL = f"{BASE_URL}/api/v1"

# Среда, неделя начинается 2025-01-13
TODAY = date(2025, 1, 15)


# ---------------------------------------------------------------------------
# База данных
# ---------------------------------------------------------------------------

@pytest.fixture
def today() -> date:
    """Дата, которую видят эндпоинты через get_today."""
    return TODAY


@pytest.fixture
async def session_factory():
    """Свежая БД в памяти с заполненным справочником групп мышц."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    factory = create_session_factory(engine)
    await init_database(engine, factory, reset=False)
    yield factory
    await engine.dispose()


# ---------------------------------------------------------------------------
# Приложения
# ---------------------------------------------------------------------------

def _override(app: FastAPI, session_factory, today_getter) -> FastAPI:
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = today_getter
    return app


@pytest.fixture
def clock(today) -> dict:
    """Изменяемые «часы»: тест может сдвинуть clock['today'] между запросами."""
    return {"today": today}


@pytest.fixture
def read_app(session_factory, clock) -> FastAPI:
    return _override(create_read_app(), session_factory, lambda: clock["today"])


@pytest.fixture
def write_app(session_factory, clock) -> FastAPI:
    return _override(create_write_app(), session_factory, lambda: clock["today"])


# ---------------------------------------------------------------------------
# HTTP-клиенты
# ---------------------------------------------------------------------------

@pytest.fixture
async def read_client(read_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=read_app), base_url=BASE_URL) as ac:
        yield ac


@pytest.fixture
async def write_client(write_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=write_app), base_url=BASE_URL) as ac:
        yield ac


@pytest.fixture
async def gateway(read_app, write_app) -> AsyncGenerator[GatewayClient, None]:
    """Настоящий GatewayClient, подключённый к тестовым read/write приложениям."""
    client = GatewayClient(
        read_base_url=API_URL,
        write_base_url=API_URL,
        read_transport=ASGITransport(app=read_app),
        write_transport=ASGITransport(app=write_app),
    )
    yield client
    await client.close()


@pytest.fixture
def mock_gateway() -> AsyncMock:
    """Мокированный GatewayClient для модульных тестов оркестраторов."""
    return AsyncMock(spec=GatewayClient)
