import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from xq_fitness.core.config import settings
from xq_fitness.core.dependencies import get_routine_repository, get_snapshot_repository, get_today
from xq_fitness.repositories.routine_repository import RoutineRepository
from xq_fitness.repositories.snapshot_repository import SnapshotRepository
from xq_fitness.schemas.muscle_group import MuscleGroupRead
from xq_fitness.schemas.routine import RoutineDetail, RoutineRead, WorkoutDayRead
from xq_fitness.schemas.snapshot import WeeklyReportResponse
from xq_fitness.services.reporting import build_weekly_report, get_week_start

logger = logging.getLogger(__name__)

router = APIRouter(tags=["routines"])


async def _get_routine_or_404(repo: RoutineRepository, routine_id: int):
    routine = await repo.get_routine(routine_id)
    if routine is None:
        raise HTTPException(status_code=404, detail="Routine not found")
    return routine


@router.get("", response_model=List[RoutineRead])
async def list_routines(
    is_active: Optional[bool] = Query(None, alias="isActive"),
    repo: RoutineRepository = Depends(get_routine_repository),
):
    return await repo.list_routines(is_active=is_active)


@router.get("/{routine_id}", response_model=RoutineDetail)
async def get_routine(routine_id: int, repo: RoutineRepository = Depends(get_routine_repository)):
    return await _get_routine_or_404(repo, routine_id)


@router.get("/{routine_id}/days", response_model=List[WorkoutDayRead])
async def list_workout_days(routine_id: int, repo: RoutineRepository = Depends(get_routine_repository)):
    await _get_routine_or_404(repo, routine_id)
    return await repo.list_workout_days(routine_id)


@router.get("/{routine_id}/weekly-report", response_model=WeeklyReportResponse)
async def get_weekly_report(
    routine_id: int,
    today: date = Depends(get_today),
    repo: RoutineRepository = Depends(get_routine_repository),
    snapshots: SnapshotRepository = Depends(get_snapshot_repository),
):
    await _get_routine_or_404(repo, routine_id)

    week_start = get_week_start(today)
    snapshot = await snapshots.get_for_week(routine_id, week_start)

    reference_groups = None
    if settings.REPORT_INCLUDE_EMPTY_MUSCLE_GROUPS:
        reference_groups = [
            MuscleGroupRead.model_validate(group) for group in await repo.list_muscle_groups()
        ]

    report = build_weekly_report(
        routine_id=routine_id,
        week_start_date=week_start,
        snapshot=snapshot,
        reference_groups=reference_groups,
    )
    logger.debug(f"Отчёт за неделю {week_start} для программы {routine_id}: snapshot={report.has_snapshot}")
    return report
