"""
Упражнения внутри дня тренировки.

Форма проверяется до сети: при ошибке ни create, ни update не вызываются.
Группа мышц нового упражнения по умолчанию берётся из первого подхода дня.
"""
import logging
from typing import Any, Optional

from xq_fitness.core.errors import ApiError
from xq_fitness.core.result import Failure, Result, Success
from xq_fitness.schemas.exercise import ExerciseCreate, ExerciseFields, ExerciseRead, ExerciseUpdate
from xq_fitness.schemas.routine import WorkoutDayRead
from xq_fitness.services.forms import validate_exercise_form
from xq_fitness.services.gateway_client import GatewayClient

logger = logging.getLogger(__name__)

MUSCLE_GROUP_REQUIRED = "No muscle group selected"


def default_muscle_group_id(workout_day: WorkoutDayRead) -> Optional[int]:
    if not workout_day.sets:
        return None
    first = workout_day.sets[0]
    return int(first.muscle_group.id if first.muscle_group else first.muscle_group_id)


class ExerciseManager:
    def __init__(self, gateway: GatewayClient):
        self.gateway = gateway

    async def list_exercises(self, workout_day_id) -> Result:
        try:
            data = await self.gateway.get_exercises(int(workout_day_id))
        except ApiError as e:
            logger.error(f"Ошибка загрузки упражнений дня {workout_day_id}: {e.message}")
            if e.is_not_found:
                return Failure.from_error(e)
            return Failure.from_error(e, message="Failed to load exercises")
        return Success(value=[ExerciseRead.model_validate(item) for item in data])

    async def save_exercise(
        self,
        workout_day: Any,
        exercise_name: Any,
        total_reps: Any = "",
        weight: Any = "",
        total_sets: Any = "",
        notes: Any = "",
        muscle_group_id: Any = None,
        exercise_id: Any = None,
    ) -> Result:
        """
        exercise_id=None — добавление, иначе изменение существующего упражнения.
        workout_day — dict или WorkoutDayRead (нужны id и подходы дня).
        """
        validation = validate_exercise_form(exercise_name, total_reps, weight, total_sets, notes)
        if not validation.ok:
            return validation
        fields: ExerciseFields = validation.value

        if not isinstance(workout_day, WorkoutDayRead):
            workout_day = WorkoutDayRead.model_validate(workout_day)

        if muscle_group_id in (None, ""):
            muscle_group_id = None
        else:
            muscle_group_id = int(muscle_group_id)

        try:
            if exercise_id is None:
                if muscle_group_id is None:
                    muscle_group_id = default_muscle_group_id(workout_day)
                if muscle_group_id is None:
                    return Failure.validation(MUSCLE_GROUP_REQUIRED)
                data = await self.gateway.create_exercise(ExerciseCreate(
                    workout_day_id=int(workout_day.id),
                    muscle_group_id=muscle_group_id,
                    **fields.model_dump(),
                ).to_payload())
                message = "Exercise added"
            else:
                update = ExerciseUpdate(**fields.model_dump())
                if muscle_group_id is not None:
                    update.muscle_group_id = muscle_group_id
                data = await self.gateway.update_exercise(int(exercise_id), update.to_payload())
                message = "Exercise updated"
        except ApiError as e:
            logger.error(f"Ошибка сохранения упражнения в дне {workout_day.id}: {e.message}")
            return Failure.from_error(e, message=e.server_message or "Failed to save exercise")

        return Success(value=ExerciseRead.model_validate(data), message=message)

    async def delete_exercise(self, exercise_id) -> Result:
        try:
            await self.gateway.delete_exercise(int(exercise_id))
        except ApiError as e:
            logger.error(f"Ошибка удаления упражнения {exercise_id}: {e.message}")
            return Failure.from_error(e, message=e.server_message or "Failed to delete exercise")
        return Success(message="Exercise deleted")
