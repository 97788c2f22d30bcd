"""
Клиентская валидация форм до любого сетевого вызова.

Поля приходят так, как их ввёл пользователь (обычно строки).
Тексты ошибок — часть контракта с UI, менять их нельзя.
"""
import math
from typing import Any, Callable, Optional

from xq_fitness.core.result import Failure, Result, Success
from xq_fitness.schemas.exercise import ExerciseFields
from xq_fitness.schemas.routine import RoutineUpdate

ROUTINE_NAME_REQUIRED = "Please enter a routine name"

EXERCISE_NAME_REQUIRED = "Exercise name is required"
TOTAL_REPS_INVALID = "Total reps must be 0 or greater"
WEIGHT_INVALID = "Weight must be 0 or greater"
TOTAL_SETS_INVALID = "Total sets must be 0 or greater"


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def clean_text(value: Any) -> Optional[str]:
    """Обрезать пробелы; пустая строка превращается в None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_number(value: Any, cast: Callable = int):
    """
    Пустое поле считается нулём. Нечисловой ввод — ValueError.
    """
    if is_blank(value):
        return cast(0)
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, (int, float)):
        number = cast(value)
    else:
        number = cast(str(value).strip())
    if isinstance(number, float) and not math.isfinite(number):
        raise ValueError(f"Not a finite number: {value!r}")
    return number


def validate_routine_form(name: Any, description: Any = None, is_active: bool = True) -> Result:
    if is_blank(name):
        return Failure.validation(ROUTINE_NAME_REQUIRED)
    return Success(value=RoutineUpdate(
        name=str(name).strip(),
        description=clean_text(description),
        is_active=bool(is_active),
    ))


def _non_negative(value: Any, cast: Callable, message: str):
    try:
        number = parse_number(value, cast)
    except ValueError:
        return None, Failure.validation(message)
    if number < 0:
        return None, Failure.validation(message)
    return number, None


def validate_exercise_form(
    exercise_name: Any,
    total_reps: Any = "",
    weight: Any = "",
    total_sets: Any = "",
    notes: Any = "",
) -> Result:
    """
    Пустые числовые поля уходят как 0, пустые заметки — как None.
    Проверки идут по порядку полей, первая ошибка выигрывает.
    """
    name = clean_text(exercise_name)
    if name is None:
        return Failure.validation(EXERCISE_NAME_REQUIRED)

    reps, failure = _non_negative(total_reps, int, TOTAL_REPS_INVALID)
    if failure:
        return failure
    weight_kg, failure = _non_negative(weight, float, WEIGHT_INVALID)
    if failure:
        return failure
    sets, failure = _non_negative(total_sets, int, TOTAL_SETS_INVALID)
    if failure:
        return failure

    return Success(value=ExerciseFields(
        exercise_name=name,
        total_reps=reps,
        weight=weight_kg,
        total_sets=sets,
        notes=clean_text(notes),
    ))
