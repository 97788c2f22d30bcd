import logging

from fastapi import APIRouter, Depends, HTTPException, status

from xq_fitness.core.dependencies import get_routine_repository
from xq_fitness.repositories.routine_repository import RoutineRepository
from xq_fitness.schemas.routine import RoutineCreate, RoutineDetail, RoutineRead, RoutineUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["routines"])


@router.post("", response_model=RoutineDetail, status_code=status.HTTP_201_CREATED)
async def create_routine(data: RoutineCreate, repo: RoutineRepository = Depends(get_routine_repository)):
    # Вложенные дни могут сразу нести подходы: группы мышц проверяются заранее
    for day in data.workout_days:
        for day_set in day.sets:
            if await repo.get_muscle_group(day_set.muscle_group_id) is None:
                raise HTTPException(status_code=404, detail="Muscle group not found")

    routine = await repo.create_routine(data)
    logger.info(f"Создана программа {routine.id} ({len(data.workout_days)} дней)")
    return routine


@router.put("/{routine_id}", response_model=RoutineRead)
async def update_routine(
    routine_id: int,
    data: RoutineUpdate,
    repo: RoutineRepository = Depends(get_routine_repository),
):
    routine = await repo.get_routine(routine_id)
    if routine is None:
        raise HTTPException(status_code=404, detail="Routine not found")
    return await repo.update_routine(routine, data)


@router.delete("/{routine_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_routine(routine_id: int, repo: RoutineRepository = Depends(get_routine_repository)):
    routine = await repo.get_routine(routine_id)
    if routine is None:
        raise HTTPException(status_code=404, detail="Routine not found")
    await repo.delete(routine)
    logger.info(f"Удалена программа {routine_id}")
