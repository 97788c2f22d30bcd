from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from xq_fitness.models.exercise import Exercise
from xq_fitness.schemas.exercise import ExerciseCreate, ExerciseUpdate


class ExerciseRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_workout_day(self, workout_day_id: int) -> List[Exercise]:
        result = await self.db.execute(
            select(Exercise)
            .where(Exercise.workout_day_id == workout_day_id)
            .order_by(Exercise.id)
        )
        return list(result.scalars().all())

    async def get(self, exercise_id: int) -> Optional[Exercise]:
        result = await self.db.execute(
            select(Exercise)
            .where(Exercise.id == exercise_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(self, data: ExerciseCreate) -> Exercise:
        exercise = Exercise(
            workout_day_id=data.workout_day_id,
            muscle_group_id=data.muscle_group_id,
            exercise_name=data.exercise_name,
            total_reps=data.total_reps,
            weight=data.weight,
            total_sets=data.total_sets,
            notes=data.notes,
        )
        self.db.add(exercise)
        await self.db.commit()
        return await self._reload(exercise)

    async def update(self, exercise: Exercise, data: ExerciseUpdate) -> Exercise:
        exercise.exercise_name = data.exercise_name
        exercise.total_reps = data.total_reps
        exercise.weight = data.weight
        exercise.total_sets = data.total_sets
        exercise.notes = data.notes
        if data.muscle_group_id is not None:
            exercise.muscle_group_id = data.muscle_group_id
        await self.db.commit()
        return await self._reload(exercise)

    async def _reload(self, exercise: Exercise) -> Exercise:
        # muscle_group мог устареть или не загружаться: читаем заново
        exercise_id = exercise.id
        self.db.expire_all()
        return await self.get(exercise_id)

    async def delete(self, exercise: Exercise) -> None:
        await self.db.delete(exercise)
        await self.db.commit()
