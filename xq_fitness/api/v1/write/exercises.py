from fastapi import APIRouter, Depends, HTTPException, status

from xq_fitness.core.dependencies import get_exercise_repository, get_routine_repository
from xq_fitness.repositories.exercise_repository import ExerciseRepository
from xq_fitness.repositories.routine_repository import RoutineRepository
from xq_fitness.schemas.exercise import ExerciseCreate, ExerciseRead, ExerciseUpdate

router = APIRouter(tags=["exercises"])


@router.post("", response_model=ExerciseRead, status_code=status.HTTP_201_CREATED)
async def create_exercise(
    data: ExerciseCreate,
    routines: RoutineRepository = Depends(get_routine_repository),
    exercises: ExerciseRepository = Depends(get_exercise_repository),
):
    if await routines.get_workout_day(data.workout_day_id) is None:
        raise HTTPException(status_code=404, detail="Workout day not found")
    if await routines.get_muscle_group(data.muscle_group_id) is None:
        raise HTTPException(status_code=404, detail="Muscle group not found")
    return await exercises.create(data)


@router.put("/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    exercise_id: int,
    data: ExerciseUpdate,
    routines: RoutineRepository = Depends(get_routine_repository),
    exercises: ExerciseRepository = Depends(get_exercise_repository),
):
    exercise = await exercises.get(exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    if data.muscle_group_id is not None and await routines.get_muscle_group(data.muscle_group_id) is None:
        raise HTTPException(status_code=404, detail="Muscle group not found")
    return await exercises.update(exercise, data)


@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exercise(exercise_id: int, exercises: ExerciseRepository = Depends(get_exercise_repository)):
    exercise = await exercises.get(exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    await exercises.delete(exercise)
