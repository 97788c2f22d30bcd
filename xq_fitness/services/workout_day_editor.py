"""
Сохранение дня тренировки вместе с подходами по группам мышц.

Пользователь задаёт желаемое состояние: {id группы мышц: число подходов}
по всему справочнику групп. Редактор сравнивает его с уже сохранёнными подходами дня
и для каждой группы выбирает ровно одно действие:

- create — группа выбрана, подходов для неё ещё нет
- update — группа выбрана и подходы уже есть
- delete — подходы есть, а группа больше не выбрана ('' или 0)

Порядок вызовов:
1. создание/обновление самого дня (нужен его id);
2. удаления, обновления, создания подходов — последовательно,
   до первой ошибки. Откат дня не делается: частичное применение
   возвращается как Failure(partial=True).
"""
import logging
import math
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ValidationError

from xq_fitness.core.errors import ApiError, ErrorKind
from xq_fitness.core.result import Failure, Result, Success
from xq_fitness.schemas.routine import (
    WorkoutDayCreate,
    WorkoutDayRead,
    WorkoutDayUpdate,
    WorkoutDaySetCreate,
    WorkoutDaySetUpdate,
)
from xq_fitness.services.forms import clean_text, is_blank
from xq_fitness.services.gateway_client import GatewayClient

logger = logging.getLogger(__name__)

DAY_NUMBER_INVALID = "Please enter a valid day number (1 or greater)"
DAY_NAME_REQUIRED = "Please enter a day name"
MUSCLE_GROUP_REQUIRED = "Please select at least one muscle group and number of sets"
SETS_COUNT_INVALID = "All selected muscle groups must have at least 1 set"

# При обновлении по составному ключу id в пути сервер игнорирует
COMPOSITE_SET_ID = 0


class WorkoutDayFormData(BaseModel):
    day_number: int
    day_name: str
    notes: Optional[str] = None
    desired_sets: Dict[int, int]


class SetChangePlan(BaseModel):
    creates: List[Tuple[int, int]] = []          # (muscle_group_id, number_of_sets)
    updates: List[Tuple[int, int, int]] = []     # (muscle_group_id, number_of_sets, set_id)
    deletes: List[Tuple[int, int]] = []          # (muscle_group_id, set_id)

    @property
    def created_ids(self) -> List[int]:
        return [muscle_group_id for muscle_group_id, _ in self.creates]

    @property
    def updated_ids(self) -> List[int]:
        return [muscle_group_id for muscle_group_id, _, _ in self.updates]

    @property
    def deleted_ids(self) -> List[int]:
        return [muscle_group_id for muscle_group_id, _ in self.deletes]


class WorkoutDaySaveResult(BaseModel):
    workout_day_id: int
    created: List[int] = []
    updated: List[int] = []
    deleted: List[int] = []


# ---------------------------------------------------------------------------
# Валидация
# ---------------------------------------------------------------------------

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(value: Any) -> Optional[int]:
    """
    Целое из пользовательского ввода с отбрасыванием дробной части и хвоста:
    "1.5" → 1, "3 sets" → 3, "abc" → None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def _is_unselected(value: Any) -> bool:
    return is_blank(value) or _parse_int(value) == 0


def validate_workout_day_form(
    day_number: Any,
    day_name: Any,
    desired_sets: Optional[Mapping[Any, Any]],
    notes: Any = None,
) -> Result:
    """Проверки по порядку, первая ошибка выигрывает. Сеть не трогается."""
    number = None if is_blank(day_number) else _parse_int(day_number)
    if number is None or number < 1:
        return Failure.validation(DAY_NUMBER_INVALID)

    name = clean_text(day_name)
    if name is None:
        return Failure.validation(DAY_NAME_REQUIRED)

    selected = {
        muscle_group_id: count
        for muscle_group_id, count in (desired_sets or {}).items()
        if not _is_unselected(count)
    }
    if not selected:
        return Failure.validation(MUSCLE_GROUP_REQUIRED)

    cleaned: Dict[int, int] = {}
    for muscle_group_id, count in selected.items():
        sets = _parse_int(count)
        group_id = _parse_int(muscle_group_id)
        if sets is None or sets < 1 or group_id is None:
            return Failure.validation(SETS_COUNT_INVALID)
        cleaned[group_id] = sets

    return Success(value=WorkoutDayFormData(
        day_number=number,
        day_name=name,
        notes=clean_text(notes),
        desired_sets=cleaned,
    ))


# ---------------------------------------------------------------------------
# Сверка желаемого и сохранённого состояния
# ---------------------------------------------------------------------------

def existing_sets_by_muscle_group(workout_day: Optional[WorkoutDayRead]) -> Dict[int, int]:
    """{id группы мышц: id подхода} для уже сохранённого дня."""
    if workout_day is None:
        return {}
    existing = {}
    for day_set in workout_day.sets:
        muscle_group_id = day_set.muscle_group.id if day_set.muscle_group else day_set.muscle_group_id
        existing[int(muscle_group_id)] = int(day_set.id)
    return existing


def plan_set_changes(desired: Mapping[int, int], existing: Mapping[int, int]) -> SetChangePlan:
    """
    desired — {группа: число подходов >= 1}, existing — {группа: id подхода}.
    Каждая группа попадает ровно в один список.
    """
    plan = SetChangePlan()
    for muscle_group_id, set_id in existing.items():
        if muscle_group_id not in desired:
            plan.deletes.append((muscle_group_id, set_id))
    for muscle_group_id, number_of_sets in desired.items():
        if muscle_group_id in existing:
            plan.updates.append((muscle_group_id, number_of_sets, existing[muscle_group_id]))
        else:
            plan.creates.append((muscle_group_id, number_of_sets))
    return plan


# ---------------------------------------------------------------------------
# Оркестратор
# ---------------------------------------------------------------------------

class WorkoutDayEditor:
    def __init__(self, gateway: GatewayClient, use_composite_key: bool = True):
        self.gateway = gateway
        # Прямая адресация по id подхода устарела: id из кэша экрана бывает неверным
        self.use_composite_key = use_composite_key

    async def _apply_plan(self, workout_day_id: int, plan: SetChangePlan) -> None:
        for muscle_group_id, set_id in plan.deletes:
            await self.gateway.delete_workout_day_set(set_id)

        for muscle_group_id, number_of_sets, set_id in plan.updates:
            data = WorkoutDaySetUpdate(number_of_sets=number_of_sets).to_payload()
            if self.use_composite_key:
                await self.gateway.update_workout_day_set(
                    COMPOSITE_SET_ID,
                    data,
                    workout_day_id=workout_day_id,
                    muscle_group_id=muscle_group_id,
                )
            else:
                await self.gateway.update_workout_day_set(set_id, data)

        for muscle_group_id, number_of_sets in plan.creates:
            await self.gateway.create_workout_day_set(WorkoutDaySetCreate(
                workout_day_id=workout_day_id,
                muscle_group_id=muscle_group_id,
                number_of_sets=number_of_sets,
            ).to_payload())

    async def save_workout_day(
        self,
        routine_id: Any,
        day_number: Any,
        day_name: Any,
        desired_sets: Optional[Mapping[Any, Any]],
        notes: Any = None,
        workout_day: Any = None,
    ) -> Result:
        """
        workout_day — сохранённый день (dict или WorkoutDayRead) в режиме редактирования,
        None — создание нового дня в программе routine_id.
        """
        validation = validate_workout_day_form(day_number, day_name, desired_sets, notes=notes)
        if not validation.ok:
            return validation
        form: WorkoutDayFormData = validation.value

        if workout_day is not None and not isinstance(workout_day, WorkoutDayRead):
            workout_day = WorkoutDayRead.model_validate(workout_day)
        is_edit = workout_day is not None
        action = "update" if is_edit else "create"
        failure_message = f"Failed to {action} workout day"

        # 1. Сам день, до любых подходов
        try:
            if is_edit:
                workout_day_id = int(workout_day.id)
                await self.gateway.update_workout_day(workout_day_id, WorkoutDayUpdate(
                    day_number=form.day_number,
                    day_name=form.day_name,
                    notes=form.notes,
                ).to_payload())
            else:
                created = await self.gateway.create_workout_day(WorkoutDayCreate(
                    routine_id=int(routine_id),
                    day_number=form.day_number,
                    day_name=form.day_name,
                    notes=form.notes,
                ).to_payload())
                workout_day_id = WorkoutDayRead.model_validate(created).id
        except ApiError as e:
            logger.error(f"Ошибка сохранения дня тренировки (routine={routine_id}): {e.message}")
            return Failure.from_error(e, message=e.server_message or failure_message)
        except ValidationError as e:
            logger.error(f"Сервис вернул некорректный день (routine={routine_id}): {e}")
            return Failure(kind=ErrorKind.server, message=failure_message)

        # 2. Подходы
        plan = plan_set_changes(form.desired_sets, existing_sets_by_muscle_group(workout_day))
        try:
            await self._apply_plan(workout_day_id, plan)
        except ApiError as e:
            logger.error(f"Подходы дня {workout_day_id} применены частично: {e.message}")
            return Failure.from_error(e, message=e.server_message or failure_message, partial=True)

        logger.info(
            f"День {workout_day_id} сохранён: +{len(plan.creates)} ~{len(plan.updates)} -{len(plan.deletes)}"
        )
        return Success(
            value=WorkoutDaySaveResult(
                workout_day_id=workout_day_id,
                created=plan.created_ids,
                updated=plan.updated_ids,
                deleted=plan.deleted_ids,
            ),
            message=f"Workout day {action}d successfully",
        )
