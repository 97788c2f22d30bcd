import logging
from typing import Optional

from xq_fitness.core.errors import ApiError
from xq_fitness.core.result import Failure, Result, Success
from xq_fitness.schemas.muscle_group import MuscleGroupRead
from xq_fitness.schemas.routine import RoutineDetail, RoutineRead, WorkoutDayRead
from xq_fitness.services.gateway_client import GatewayClient

logger = logging.getLogger(__name__)


class RoutineLoader:
    """
    Загрузка программы вместе с днями, подходами и упражнениями.

    NOT_FOUND возвращается отдельным видом ошибки: экран показывает
    «не найдено», а не «временная ошибка, повторите».
    """

    def __init__(self, gateway: GatewayClient):
        self.gateway = gateway

    async def get_routine_by_id(self, routine_id) -> Result:
        try:
            data = await self.gateway.get_routine_by_id(int(routine_id))
        except ApiError as e:
            logger.error(f"Ошибка загрузки программы {routine_id}: {e.message}")
            if e.is_not_found:
                return Failure.from_error(e)
            return Failure.from_error(e, message="Failed to load routine details")
        return Success(value=RoutineDetail.model_validate(data))

    async def get_muscle_groups(self) -> Result:
        try:
            data = await self.gateway.get_muscle_groups()
        except ApiError as e:
            logger.error(f"Ошибка загрузки групп мышц: {e.message}")
            return Failure.from_error(e, message="Failed to load muscle groups")
        return Success(value=[MuscleGroupRead.model_validate(item) for item in data])

    async def get_routines(self, is_active: Optional[bool] = None) -> Result:
        try:
            data = await self.gateway.get_routines(is_active=is_active)
        except ApiError as e:
            logger.error(f"Ошибка загрузки списка программ: {e.message}")
            return Failure.from_error(e, message="Failed to load routines. Please try again.")
        return Success(value=[RoutineRead.model_validate(item) for item in data])

    async def get_workout_days(self, routine_id) -> Result:
        try:
            data = await self.gateway.get_workout_days(int(routine_id))
        except ApiError as e:
            logger.error(f"Ошибка загрузки дней программы {routine_id}: {e.message}")
            if e.is_not_found:
                return Failure.from_error(e)
            return Failure.from_error(e, message="Failed to load workout days")
        return Success(value=[WorkoutDayRead.model_validate(item) for item in data])
