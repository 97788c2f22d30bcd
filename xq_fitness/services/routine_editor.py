import logging
from typing import Any

from xq_fitness.core.errors import ApiError
from xq_fitness.core.result import Failure, Result, Success
from xq_fitness.schemas.routine import RoutineDetail, RoutineRead
from xq_fitness.services.forms import validate_routine_form
from xq_fitness.services.gateway_client import GatewayClient

logger = logging.getLogger(__name__)


class RoutineEditor:
    """Создание, изменение и удаление программ и отдельных дней."""

    def __init__(self, gateway: GatewayClient):
        self.gateway = gateway

    @staticmethod
    def _failure(e: ApiError, fallback: str) -> Failure:
        return Failure.from_error(e, message=e.server_message or fallback)

    async def create_routine(self, name: Any, description: Any = None, is_active: bool = True) -> Result:
        validation = validate_routine_form(name, description, is_active)
        if not validation.ok:
            return validation

        try:
            data = await self.gateway.create_routine(validation.value.to_payload())
        except ApiError as e:
            logger.error(f"Ошибка создания программы: {e.message}")
            return self._failure(e, "Failed to create routine")

        routine = RoutineDetail.model_validate(data)
        logger.info(f"Программа {routine.id} создана")
        return Success(value=routine, message="Routine created successfully")

    async def update_routine(
        self,
        routine_id,
        name: Any,
        description: Any = None,
        is_active: bool = True,
    ) -> Result:
        validation = validate_routine_form(name, description, is_active)
        if not validation.ok:
            return validation

        try:
            data = await self.gateway.update_routine(int(routine_id), validation.value.to_payload())
        except ApiError as e:
            logger.error(f"Ошибка обновления программы {routine_id}: {e.message}")
            return self._failure(e, "Failed to update routine")

        return Success(value=RoutineRead.model_validate(data), message="Routine updated successfully")

    async def delete_routine(self, routine_id) -> Result:
        try:
            await self.gateway.delete_routine(int(routine_id))
        except ApiError as e:
            logger.error(f"Ошибка удаления программы {routine_id}: {e.message}")
            return self._failure(e, "Failed to delete routine")
        return Success(message="Routine deleted successfully")

    async def delete_workout_day(self, workout_day_id) -> Result:
        # Подходы и упражнения дня удаляет сервер каскадом
        try:
            await self.gateway.delete_workout_day(int(workout_day_id))
        except ApiError as e:
            logger.error(f"Ошибка удаления дня {workout_day_id}: {e.message}")
            return self._failure(e, "Failed to delete workout day")
        return Success(message="Workout day deleted successfully")
