import logging

from fastapi import FastAPI

from xq_fitness.api.router import read_router, write_router
from xq_fitness.core.config import settings
from xq_fitness.core.database import init_database
from xq_fitness.core.db import AsyncSessionLocal, engine
from xq_fitness.core.errors import register_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_read_app() -> FastAPI:
    """read-service: справочники, программы и недельный отчёт."""
    app = FastAPI(title="XQ Fitness read service")
    register_exception_handlers(app)
    app.include_router(read_router, prefix=settings.API_PREFIX)
    return app


def create_write_app() -> FastAPI:
    """write-service: изменения программ, дней, подходов, упражнений и снимки."""
    app = FastAPI(title="XQ Fitness write service")
    register_exception_handlers(app)
    app.include_router(write_router, prefix=settings.API_PREFIX)
    return app


read_app = create_read_app()
write_app = create_write_app()


@read_app.on_event("startup")
async def read_startup_event():
    await init_database(engine, AsyncSessionLocal)
    logger.info("read-service запущен")


@write_app.on_event("startup")
async def write_startup_event():
    await init_database(engine, AsyncSessionLocal)
    logger.info("write-service запущен")
