from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from xq_fitness.core.dependencies import get_routine_repository
from xq_fitness.repositories.routine_repository import RoutineRepository
from xq_fitness.schemas.routine import WorkoutDaySetCreate, WorkoutDaySetRead, WorkoutDaySetUpdate

router = APIRouter(tags=["workout-day-sets"])


@router.post("", response_model=WorkoutDaySetRead, status_code=status.HTTP_201_CREATED)
async def create_workout_day_set(
    data: WorkoutDaySetCreate,
    repo: RoutineRepository = Depends(get_routine_repository),
):
    if await repo.get_workout_day(data.workout_day_id) is None:
        raise HTTPException(status_code=404, detail="Workout day not found")
    if await repo.get_muscle_group(data.muscle_group_id) is None:
        raise HTTPException(status_code=404, detail="Muscle group not found")
    if await repo.get_set_by_day_and_muscle_group(data.workout_day_id, data.muscle_group_id) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Sets for this muscle group already exist on this workout day",
        )
    return await repo.create_set(data)


@router.put("/{set_id}", response_model=WorkoutDaySetRead)
async def update_workout_day_set(
    set_id: int,
    data: WorkoutDaySetUpdate,
    workout_day_id: Optional[int] = Query(None, alias="workoutDayId"),
    muscle_group_id: Optional[int] = Query(None, alias="muscleGroupId"),
    repo: RoutineRepository = Depends(get_routine_repository),
):
    # Составной ключ приоритетнее: id в пути тогда игнорируется (клиент шлёт 0)
    if workout_day_id is not None and muscle_group_id is not None:
        day_set = await repo.get_set_by_day_and_muscle_group(workout_day_id, muscle_group_id)
    else:
        day_set = await repo.get_set(set_id)

    if day_set is None:
        raise HTTPException(status_code=404, detail="Workout day set not found")
    return await repo.update_set(day_set, data)


@router.delete("/{set_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout_day_set(set_id: int, repo: RoutineRepository = Depends(get_routine_repository)):
    day_set = await repo.get_set(set_id)
    if day_set is None:
        raise HTTPException(status_code=404, detail="Workout day set not found")
    await repo.delete(day_set)
