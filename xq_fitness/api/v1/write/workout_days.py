from fastapi import APIRouter, Depends, HTTPException, status

from xq_fitness.core.dependencies import get_routine_repository
from xq_fitness.repositories.routine_repository import RoutineRepository
from xq_fitness.schemas.routine import WorkoutDayCreate, WorkoutDayRead, WorkoutDayUpdate

router = APIRouter(tags=["workout-days"])


@router.post("", response_model=WorkoutDayRead, status_code=status.HTTP_201_CREATED)
async def create_workout_day(data: WorkoutDayCreate, repo: RoutineRepository = Depends(get_routine_repository)):
    if await repo.get_routine(data.routine_id) is None:
        raise HTTPException(status_code=404, detail="Routine not found")
    return await repo.create_workout_day(data)


@router.put("/{workout_day_id}", response_model=WorkoutDayRead)
async def update_workout_day(
    workout_day_id: int,
    data: WorkoutDayUpdate,
    repo: RoutineRepository = Depends(get_routine_repository),
):
    day = await repo.get_workout_day(workout_day_id)
    if day is None:
        raise HTTPException(status_code=404, detail="Workout day not found")
    return await repo.update_workout_day(day, data)


@router.delete("/{workout_day_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout_day(workout_day_id: int, repo: RoutineRepository = Depends(get_routine_repository)):
    day = await repo.get_workout_day(workout_day_id)
    if day is None:
        raise HTTPException(status_code=404, detail="Workout day not found")
    await repo.delete(day)
