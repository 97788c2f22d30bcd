from xq_fitness.models.muscle_group import MuscleGroup
from xq_fitness.models.routine import Routine, WorkoutDay, WorkoutDaySet
from xq_fitness.models.exercise import Exercise
from xq_fitness.models.snapshot import WeeklySnapshot

__all__ = [
    "MuscleGroup",
    "Routine", "WorkoutDay", "WorkoutDaySet",
    "Exercise",
    "WeeklySnapshot",
]
