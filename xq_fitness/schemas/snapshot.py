from datetime import date, datetime
from typing import List, Optional

from xq_fitness.schemas.base import CamelModel
from xq_fitness.schemas.muscle_group import MuscleGroupRead


class WeeklySnapshotResponse(CamelModel):
    id: int
    routine_id: int
    week_start_date: date
    created_at: datetime


class MuscleGroupTotal(CamelModel):
    muscle_group: MuscleGroupRead
    total_sets: int


class ExerciseTotal(CamelModel):
    exercise_name: str
    muscle_group: Optional[MuscleGroupRead] = None
    total_reps: int
    total_weight: float
    total_sets: int


class WeeklyReportResponse(CamelModel):
    routine_id: int
    week_start_date: date
    has_snapshot: bool
    snapshot_created_at: Optional[datetime] = None
    muscle_group_totals: List[MuscleGroupTotal] = []
    exercise_totals: List[ExerciseTotal] = []

    @property
    def is_empty(self) -> bool:
        return not self.has_snapshot
