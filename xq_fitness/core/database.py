import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from xq_fitness.core.base import Base
from xq_fitness.core.config import settings
from xq_fitness.core.initial_muscle_groups import INITIAL_MUSCLE_GROUPS

# Импортируем ВСЕ модели, чтобы metadata знала о таблицах
from xq_fitness.models.muscle_group import MuscleGroup
from xq_fitness.models.routine import Routine, WorkoutDay, WorkoutDaySet
from xq_fitness.models.exercise import Exercise
from xq_fitness.models.snapshot import WeeklySnapshot

logger = logging.getLogger(__name__)


async def seed_muscle_groups(session: AsyncSession) -> None:
    """Загрузить справочник групп мышц, если таблица пуста"""
    result = await session.execute(select(MuscleGroup))
    existing = result.scalars().all()
    if existing:
        logger.debug(f"Справочник групп мышц уже содержит {len(existing)} записей")
        return

    for data in INITIAL_MUSCLE_GROUPS:
        session.add(MuscleGroup(name=data["name"], description=data["description"]))
    await session.commit()
    logger.info(f"Загружено {len(INITIAL_MUSCLE_GROUPS)} групп мышц")


async def init_database(engine, session_factory, reset: bool = None) -> None:
    """Инициализация базы данных"""
    if reset is None:
        reset = settings.RESET_DATABASE

    async with engine.begin() as conn:
        if reset:
            logger.warning("RESET_DATABASE=true - пересоздаем БД")
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as session:
        await seed_muscle_groups(session)
