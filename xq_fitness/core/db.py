import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from xq_fitness.core.config import settings

logger = logging.getLogger(__name__)


def create_engine(database_url: str, **kwargs):
    return create_async_engine(database_url, future=True, **kwargs)


def create_session_factory(engine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )


engine = create_engine(settings.async_database_url, pool_pre_ping=True)
AsyncSessionLocal = create_session_factory(engine)


async def get_db():
    """Зависимость для получения сессии БД"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
