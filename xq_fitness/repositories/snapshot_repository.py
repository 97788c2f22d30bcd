from datetime import date, datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from xq_fitness.models.snapshot import WeeklySnapshot


class SnapshotRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_for_week(self, routine_id: int, week_start_date: date) -> Optional[WeeklySnapshot]:
        result = await self.db.execute(
            select(WeeklySnapshot).where(
                WeeklySnapshot.routine_id == routine_id,
                WeeklySnapshot.week_start_date == week_start_date,
            )
        )
        return result.scalar_one_or_none()

    async def replace_for_week(self, routine_id: int, week_start_date: date, payload: dict) -> WeeklySnapshot:
        """
        Сохранить снимок недели. Прежний снимок той же программы за ту же неделю
        удаляется в той же транзакции — снимки не накапливаются.
        """
        existing = await self.get_for_week(routine_id, week_start_date)
        if existing is not None:
            await self.db.delete(existing)
            # delete должен уйти в БД раньше insert из-за уникального ключа
            await self.db.flush()

        snapshot = WeeklySnapshot(
            routine_id=routine_id,
            week_start_date=week_start_date,
            payload=payload,
            created_at=datetime.utcnow(),
        )
        self.db.add(snapshot)
        await self.db.commit()
        await self.db.refresh(snapshot)
        return snapshot
