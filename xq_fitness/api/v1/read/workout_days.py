from typing import List

from fastapi import APIRouter, Depends, HTTPException

from xq_fitness.core.dependencies import get_exercise_repository, get_routine_repository
from xq_fitness.repositories.exercise_repository import ExerciseRepository
from xq_fitness.repositories.routine_repository import RoutineRepository
from xq_fitness.schemas.exercise import ExerciseRead

router = APIRouter(tags=["workout-days"])


@router.get("/{workout_day_id}/exercises", response_model=List[ExerciseRead])
async def list_exercises(
    workout_day_id: int,
    routines: RoutineRepository = Depends(get_routine_repository),
    exercises: ExerciseRepository = Depends(get_exercise_repository),
):
    if await routines.get_workout_day(workout_day_id) is None:
        raise HTTPException(status_code=404, detail="Workout day not found")
    return await exercises.list_for_workout_day(workout_day_id)
