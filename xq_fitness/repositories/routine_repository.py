from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from xq_fitness.models.muscle_group import MuscleGroup
from xq_fitness.models.routine import Routine, WorkoutDay, WorkoutDaySet
from xq_fitness.schemas.routine import (
    RoutineCreate,
    RoutineUpdate,
    WorkoutDayCreate,
    WorkoutDayUpdate,
    WorkoutDaySetCreate,
    WorkoutDaySetUpdate,
)


class RoutineRepository:
    """Программа — корневой агрегат: дни и подходы живут через неё."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Группы мышц (справочник)
    # ------------------------------------------------------------------

    async def list_muscle_groups(self) -> List[MuscleGroup]:
        result = await self.db.execute(select(MuscleGroup).order_by(MuscleGroup.id))
        return list(result.scalars().all())

    async def get_muscle_group(self, muscle_group_id: int) -> Optional[MuscleGroup]:
        result = await self.db.execute(select(MuscleGroup).where(MuscleGroup.id == muscle_group_id))
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------
    # Программы
    # ------------------------------------------------------------------

    async def list_routines(self, is_active: Optional[bool] = None) -> List[Routine]:
        query = select(Routine).order_by(Routine.id)
        if is_active is not None:
            query = query.where(Routine.is_active == is_active)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_routine(self, routine_id: int) -> Optional[Routine]:
        result = await self.db.execute(
            select(Routine)
            .where(Routine.id == routine_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_routine(self, data: RoutineCreate) -> Routine:
        routine = Routine(
            name=data.name,
            description=data.description,
            is_active=data.is_active,
        )
        for day_data in data.workout_days:
            day = WorkoutDay(
                day_number=day_data.day_number,
                day_name=day_data.day_name,
                notes=day_data.notes,
            )
            for set_data in day_data.sets:
                day.sets.append(WorkoutDaySet(
                    muscle_group_id=set_data.muscle_group_id,
                    number_of_sets=set_data.number_of_sets,
                ))
            routine.workout_days.append(day)

        self.db.add(routine)
        await self.db.commit()
        return await self._reload(self.get_routine, routine)

    async def update_routine(self, routine: Routine, data: RoutineUpdate) -> Routine:
        routine.name = data.name
        routine.description = data.description
        routine.is_active = data.is_active
        await self.db.commit()
        return await self.get_routine(routine.id)

    async def _reload(self, getter, obj):
        # Связи нового объекта не загружены: перечитываем его целиком, без ленивых загрузок
        obj_id = obj.id
        self.db.expire_all()
        return await getter(obj_id)

    async def delete(self, obj) -> None:
        await self.db.delete(obj)
        await self.db.commit()

    # ------------------------------------------------------------------
    # Дни тренировок
    # ------------------------------------------------------------------

    async def list_workout_days(self, routine_id: int) -> List[WorkoutDay]:
        result = await self.db.execute(
            select(WorkoutDay)
            .where(WorkoutDay.routine_id == routine_id)
            .order_by(WorkoutDay.day_number, WorkoutDay.id)
        )
        return list(result.scalars().all())

    async def get_workout_day(self, workout_day_id: int) -> Optional[WorkoutDay]:
        result = await self.db.execute(
            select(WorkoutDay)
            .where(WorkoutDay.id == workout_day_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_workout_day(self, data: WorkoutDayCreate) -> WorkoutDay:
        day = WorkoutDay(
            routine_id=data.routine_id,
            day_number=data.day_number,
            day_name=data.day_name,
            notes=data.notes,
        )
        self.db.add(day)
        await self.db.commit()
        return await self._reload(self.get_workout_day, day)

    async def update_workout_day(self, day: WorkoutDay, data: WorkoutDayUpdate) -> WorkoutDay:
        day.day_number = data.day_number
        day.day_name = data.day_name
        day.notes = data.notes
        await self.db.commit()
        return await self.get_workout_day(day.id)

    # ------------------------------------------------------------------
    # Подходы по группам мышц
    # ------------------------------------------------------------------

    async def get_set(self, set_id: int) -> Optional[WorkoutDaySet]:
        result = await self.db.execute(
            select(WorkoutDaySet)
            .where(WorkoutDaySet.id == set_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_set_by_day_and_muscle_group(
        self,
        workout_day_id: int,
        muscle_group_id: int,
    ) -> Optional[WorkoutDaySet]:
        """Поиск по составному ключу (день, группа мышц)."""
        result = await self.db.execute(
            select(WorkoutDaySet)
            .where(
                WorkoutDaySet.workout_day_id == workout_day_id,
                WorkoutDaySet.muscle_group_id == muscle_group_id,
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_set(self, data: WorkoutDaySetCreate) -> WorkoutDaySet:
        day_set = WorkoutDaySet(
            workout_day_id=data.workout_day_id,
            muscle_group_id=data.muscle_group_id,
            number_of_sets=data.number_of_sets,
            notes=data.notes,
        )
        self.db.add(day_set)
        await self.db.commit()
        return await self._reload(self.get_set, day_set)

    async def update_set(self, day_set: WorkoutDaySet, data: WorkoutDaySetUpdate) -> WorkoutDaySet:
        day_set.number_of_sets = data.number_of_sets
        if "notes" in data.model_fields_set:
            day_set.notes = data.notes
        await self.db.commit()
        return await self.get_set(day_set.id)
