"""
Снимки программы и недельный отчёт.

Неделя начинается в понедельник (ISO). Воскресенье относится к неделе,
которая началась в предыдущий понедельник.

Снимок — это JSON-копия дней, подходов и упражнений программы на момент вызова.
Отчёт считается только по снимку, поэтому правки живой программы после снимка
на отчёт не влияют.
"""
from collections import OrderedDict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from xq_fitness.core.config import settings
from xq_fitness.schemas.muscle_group import MuscleGroupRead
from xq_fitness.schemas.routine import RoutineDetail
from xq_fitness.schemas.snapshot import ExerciseTotal, MuscleGroupTotal, WeeklyReportResponse

WEIGHT_POLICIES = ("max", "sum", "average", "latest")


def get_week_start(day: Optional[date] = None) -> date:
    """Понедельник недели, в которую попадает day."""
    if day is None:
        day = date.today()
    if isinstance(day, datetime):
        day = day.date()
    return day - timedelta(days=day.weekday())


# ---------------------------------------------------------------------------
# Снимок
# ---------------------------------------------------------------------------

def _muscle_group_payload(muscle_group) -> Optional[Dict]:
    if muscle_group is None:
        return None
    return {
        "id": muscle_group.id,
        "name": muscle_group.name,
        "description": muscle_group.description,
    }


def build_snapshot_payload(routine: RoutineDetail) -> Dict:
    """Глубокая копия состояния программы, достаточная для построения отчёта."""
    days = sorted(routine.workout_days, key=lambda d: (d.day_number, d.id))
    return {
        "routine": {
            "id": routine.id,
            "name": routine.name,
            "description": routine.description,
            "isActive": routine.is_active,
        },
        "workoutDays": [
            {
                "id": day.id,
                "dayNumber": day.day_number,
                "dayName": day.day_name,
                "notes": day.notes,
                "sets": [
                    {
                        "id": day_set.id,
                        "muscleGroupId": day_set.muscle_group_id,
                        "muscleGroup": _muscle_group_payload(day_set.muscle_group),
                        "numberOfSets": day_set.number_of_sets,
                    }
                    for day_set in day.sets
                ],
                "exercises": [
                    {
                        "id": exercise.id,
                        "exerciseName": exercise.exercise_name,
                        "muscleGroupId": exercise.muscle_group_id,
                        "muscleGroup": _muscle_group_payload(exercise.muscle_group),
                        "totalReps": exercise.total_reps,
                        "weight": exercise.weight,
                        "totalSets": exercise.total_sets,
                    }
                    for exercise in sorted(day.exercises, key=lambda e: e.id)
                ],
            }
            for day in days
        ],
    }


def _snapshot_days(payload: Dict) -> List[Dict]:
    days = payload.get("workoutDays") or []
    return sorted(days, key=lambda d: (d.get("dayNumber", 0), d.get("id", 0)))


def _muscle_group_from(item: Dict) -> Optional[MuscleGroupRead]:
    data = item.get("muscleGroup")
    if data:
        return MuscleGroupRead.model_validate(data)
    if item.get("muscleGroupId") is not None:
        return MuscleGroupRead(id=item["muscleGroupId"], name=f"Muscle group {item['muscleGroupId']}")
    return None


# ---------------------------------------------------------------------------
# Агрегация
# ---------------------------------------------------------------------------

def aggregate_muscle_group_totals(
    payload: Dict,
    reference_groups: Optional[Iterable[MuscleGroupRead]] = None,
    include_empty: bool = False,
) -> List[MuscleGroupTotal]:
    """
    Сумма numberOfSets по каждой группе мышц через все дни снимка.
    При include_empty группы из справочника без подходов попадают в отчёт с нулём.
    """
    groups: Dict[int, MuscleGroupRead] = {}
    totals: Dict[int, int] = {}

    for day in _snapshot_days(payload):
        for day_set in day.get("sets") or []:
            muscle_group = _muscle_group_from(day_set)
            if muscle_group is None:
                continue
            groups.setdefault(muscle_group.id, muscle_group)
            totals[muscle_group.id] = totals.get(muscle_group.id, 0) + int(day_set.get("numberOfSets") or 0)

    if include_empty and reference_groups is not None:
        for muscle_group in reference_groups:
            groups.setdefault(muscle_group.id, muscle_group)
            totals.setdefault(muscle_group.id, 0)

    return [
        MuscleGroupTotal(muscle_group=groups[group_id], total_sets=totals[group_id])
        for group_id in sorted(totals)
    ]


def aggregate_weight(weights: List[float], policy: str = "max") -> float:
    if not weights:
        return 0.0
    if policy == "max":
        return max(weights)
    if policy == "sum":
        return sum(weights)
    if policy == "average":
        return round(sum(weights) / len(weights), 2)
    if policy == "latest":
        return weights[-1]
    raise ValueError(f"Unknown weight aggregation policy: {policy}")


def aggregate_exercise_totals(payload: Dict, weight_policy: str = "max") -> List[ExerciseTotal]:
    """
    Упражнения группируются по точному совпадению exerciseName (с учётом регистра).
    Повторы и подходы суммируются, вес сводится по weight_policy.
    """
    grouped: "OrderedDict[str, Dict]" = OrderedDict()

    for day in _snapshot_days(payload):
        exercises = sorted(day.get("exercises") or [], key=lambda e: e.get("id", 0))
        for exercise in exercises:
            name = exercise.get("exerciseName")
            if name is None:
                continue
            entry = grouped.get(name)
            if entry is None:
                entry = {
                    "muscle_group": _muscle_group_from(exercise),
                    "total_reps": 0,
                    "total_sets": 0,
                    "weights": [],
                }
                grouped[name] = entry
            entry["total_reps"] += int(exercise.get("totalReps") or 0)
            entry["total_sets"] += int(exercise.get("totalSets") or 0)
            entry["weights"].append(float(exercise.get("weight") or 0))

    return [
        ExerciseTotal(
            exercise_name=name,
            muscle_group=entry["muscle_group"],
            total_reps=entry["total_reps"],
            total_weight=aggregate_weight(entry["weights"], weight_policy),
            total_sets=entry["total_sets"],
        )
        for name, entry in grouped.items()
    ]


def build_weekly_report(
    routine_id: int,
    week_start_date: date,
    snapshot=None,
    reference_groups: Optional[Iterable[MuscleGroupRead]] = None,
    include_empty: Optional[bool] = None,
    weight_policy: Optional[str] = None,
) -> WeeklyReportResponse:
    if include_empty is None:
        include_empty = settings.REPORT_INCLUDE_EMPTY_MUSCLE_GROUPS
    if weight_policy is None:
        weight_policy = settings.EXERCISE_WEIGHT_AGGREGATION

    if snapshot is None:
        return WeeklyReportResponse(
            routine_id=routine_id,
            week_start_date=week_start_date,
            has_snapshot=False,
            snapshot_created_at=None,
            muscle_group_totals=[],
            exercise_totals=[],
        )

    return WeeklyReportResponse(
        routine_id=routine_id,
        week_start_date=week_start_date,
        has_snapshot=True,
        snapshot_created_at=snapshot.created_at,
        muscle_group_totals=aggregate_muscle_group_totals(
            snapshot.payload,
            reference_groups=reference_groups,
            include_empty=include_empty,
        ),
        exercise_totals=aggregate_exercise_totals(snapshot.payload, weight_policy=weight_policy),
    )
