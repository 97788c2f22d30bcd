from datetime import datetime
from typing import List, Optional

from pydantic import Field

from xq_fitness.schemas.base import CamelModel
from xq_fitness.schemas.exercise import ExerciseRead
from xq_fitness.schemas.muscle_group import MuscleGroupRead


# ---------------------------------------------------------------------------
# Подходы (WorkoutDaySet)
# ---------------------------------------------------------------------------

class WorkoutDaySetCreate(CamelModel):
    workout_day_id: int
    muscle_group_id: int
    number_of_sets: int = Field(ge=1)
    notes: Optional[str] = None


class WorkoutDaySetUpdate(CamelModel):
    number_of_sets: int = Field(ge=1)
    notes: Optional[str] = None


class WorkoutDaySetRead(CamelModel):
    id: int
    workout_day_id: int
    muscle_group_id: int
    number_of_sets: int
    notes: Optional[str] = None
    muscle_group: Optional[MuscleGroupRead] = None


class NestedSetCreate(CamelModel):
    muscle_group_id: int
    number_of_sets: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Дни тренировок
# ---------------------------------------------------------------------------

class WorkoutDayFields(CamelModel):
    day_number: int = Field(ge=1)
    day_name: str = Field(min_length=1)
    notes: Optional[str] = None


class WorkoutDayCreate(WorkoutDayFields):
    routine_id: int


class WorkoutDayUpdate(WorkoutDayFields):
    pass


class NestedWorkoutDayCreate(WorkoutDayFields):
    sets: List[NestedSetCreate] = []


class WorkoutDayRead(CamelModel):
    id: int
    routine_id: int
    day_number: int
    day_name: str
    notes: Optional[str] = None
    sets: List[WorkoutDaySetRead] = []
    exercises: List[ExerciseRead] = []


# ---------------------------------------------------------------------------
# Программы
# ---------------------------------------------------------------------------

class RoutineFields(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    is_active: bool = True


class RoutineCreate(RoutineFields):
    workout_days: List[NestedWorkoutDayCreate] = []


class RoutineUpdate(RoutineFields):
    pass


class RoutineRead(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RoutineDetail(RoutineRead):
    workout_days: List[WorkoutDayRead] = []
