from typing import List

from fastapi import APIRouter, Depends

from xq_fitness.core.dependencies import get_routine_repository
from xq_fitness.repositories.routine_repository import RoutineRepository
from xq_fitness.schemas.muscle_group import MuscleGroupRead

router = APIRouter(tags=["muscle-groups"])


@router.get("", response_model=List[MuscleGroupRead])
async def list_muscle_groups(repo: RoutineRepository = Depends(get_routine_repository)):
    return await repo.list_muscle_groups()
