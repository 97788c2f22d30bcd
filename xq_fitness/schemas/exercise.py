from typing import Optional

from pydantic import Field

from xq_fitness.schemas.base import CamelModel
from xq_fitness.schemas.muscle_group import MuscleGroupRead


class ExerciseFields(CamelModel):
    exercise_name: str = Field(min_length=1)
    total_reps: int = Field(0, ge=0)
    weight: float = Field(0, ge=0, description="Вес в кг")
    total_sets: int = Field(0, ge=0)
    notes: Optional[str] = None


class ExerciseCreate(ExerciseFields):
    workout_day_id: int
    muscle_group_id: int


class ExerciseUpdate(ExerciseFields):
    muscle_group_id: Optional[int] = None


class ExerciseRead(CamelModel):
    id: int
    workout_day_id: int
    muscle_group_id: int
    exercise_name: str
    total_reps: int
    weight: float
    total_sets: int
    notes: Optional[str] = None
    muscle_group: Optional[MuscleGroupRead] = None
