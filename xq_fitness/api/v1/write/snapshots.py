import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status

from xq_fitness.core.dependencies import get_routine_repository, get_snapshot_repository, get_today
from xq_fitness.repositories.routine_repository import RoutineRepository
from xq_fitness.repositories.snapshot_repository import SnapshotRepository
from xq_fitness.schemas.routine import RoutineDetail
from xq_fitness.schemas.snapshot import WeeklySnapshotResponse
from xq_fitness.services.reporting import build_snapshot_payload, get_week_start

logger = logging.getLogger(__name__)

router = APIRouter(tags=["snapshots"])


@router.post(
    "/{routine_id}/snapshots",
    response_model=WeeklySnapshotResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_weekly_snapshot(
    routine_id: int,
    today: date = Depends(get_today),
    repo: RoutineRepository = Depends(get_routine_repository),
    snapshots: SnapshotRepository = Depends(get_snapshot_repository),
):
    routine = await repo.get_routine(routine_id)
    if routine is None:
        raise HTTPException(status_code=404, detail="Routine not found")

    week_start = get_week_start(today)
    payload = build_snapshot_payload(RoutineDetail.model_validate(routine))
    snapshot = await snapshots.replace_for_week(routine.id, week_start, payload)

    logger.info(f"Снимок недели {week_start} для программы {routine_id} сохранён (id={snapshot.id})")
    return snapshot
