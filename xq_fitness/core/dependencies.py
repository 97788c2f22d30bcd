from datetime import date

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from xq_fitness.core.db import get_db
from xq_fitness.repositories.exercise_repository import ExerciseRepository
from xq_fitness.repositories.routine_repository import RoutineRepository
from xq_fitness.repositories.snapshot_repository import SnapshotRepository


def get_today() -> date:
    """Текущая дата сервера. В тестах подменяется через dependency_overrides."""
    return date.today()


def get_routine_repository(db: AsyncSession = Depends(get_db)) -> RoutineRepository:
    """Фабрика репозитория — инжектируется в эндпоинты через Depends."""
    return RoutineRepository(db)


def get_exercise_repository(db: AsyncSession = Depends(get_db)) -> ExerciseRepository:
    return ExerciseRepository(db)


def get_snapshot_repository(db: AsyncSession = Depends(get_db)) -> SnapshotRepository:
    return SnapshotRepository(db)
