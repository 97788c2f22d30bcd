from fastapi import APIRouter

from xq_fitness.api.v1.read.muscle_groups import router as muscle_groups_router
from xq_fitness.api.v1.read.routines import router as read_routines_router
from xq_fitness.api.v1.read.workout_days import router as read_workout_days_router
from xq_fitness.api.v1.write.exercises import router as exercises_router
from xq_fitness.api.v1.write.routines import router as write_routines_router
from xq_fitness.api.v1.write.snapshots import router as snapshots_router
from xq_fitness.api.v1.write.workout_day_sets import router as workout_day_sets_router
from xq_fitness.api.v1.write.workout_days import router as write_workout_days_router

# read-service: только GET
read_router = APIRouter()

read_router.include_router(muscle_groups_router, prefix="/muscle-groups")
read_router.include_router(read_routines_router, prefix="/routines")
read_router.include_router(read_workout_days_router, prefix="/workout-days")

# write-service: изменения данных
write_router = APIRouter()

write_router.include_router(write_routines_router, prefix="/routines")
write_router.include_router(snapshots_router, prefix="/routines")
write_router.include_router(write_workout_days_router, prefix="/workout-days")
write_router.include_router(workout_day_sets_router, prefix="/workout-day-sets")
write_router.include_router(exercises_router, prefix="/exercises")
