"""
E2E-тесты: клиентские оркестраторы → GatewayClient → read/write backend → SQLite.

Сценарии:
1. Программа → день → подходы (4) → снимок → отчёт {muscleGroup.id: 1, totalSets: 4}
2. Повторный снимок в ту же неделю заменяет первый
3. Правки программы после снимка не меняют отчёт
4. Новая неделя без снимка → пустой отчёт; воскресенье относится к прошлой неделе
5. Отчёт и снимок для несуществующей программы → NOT_FOUND с сообщением сервера
"""

import pytest
from datetime import date

from xq_fitness.core.config import settings
from xq_fitness.core.errors import ErrorKind
from xq_fitness.services.exercise_manager import ExerciseManager
from xq_fitness.services.routine_editor import RoutineEditor
from xq_fitness.services.routine_loader import RoutineLoader
from xq_fitness.services.snapshot_orchestrator import SnapshotOrchestrator, SnapshotState
from xq_fitness.services.weekly_report_reader import WeeklyReportReader
from xq_fitness.services.workout_day_editor import WorkoutDayEditor

pytestmark = pytest.mark.e2e


# ---------------------------------------------------------------------------
# Вспомогательные функции
# ---------------------------------------------------------------------------

async def build_routine(gateway, sets: dict = None) -> tuple:
    """Создать программу с одним днём; вернуть (routine_id, workout_day_id)."""
    routine = await RoutineEditor(gateway).create_routine("Push Pull")
    assert routine.ok, routine
    routine_id = routine.value.id

    day = await WorkoutDayEditor(gateway).save_workout_day(
        str(routine_id), "1", "Push", sets or {"1": "4"},
    )
    assert day.ok, day
    return routine_id, day.value.workout_day_id


async def load_day(gateway, routine_id: int):
    loaded = await RoutineLoader(gateway).get_routine_by_id(routine_id)
    assert loaded.ok, loaded
    return loaded.value.workout_days[0]


# ---------------------------------------------------------------------------
# Основной сценарий
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_routine_to_report_flow(gateway, today):
    routine_id, _ = await build_routine(gateway)

    snapshot = await SnapshotOrchestrator(gateway).create_weekly_snapshot(routine_id)
    assert snapshot.ok is True
    assert snapshot.message == "Weekly snapshot created successfully"
    assert snapshot.value.week_start_date == date(2025, 1, 13)

    report = await WeeklyReportReader(gateway).get_weekly_report(routine_id)

    assert report.ok is True
    assert report.value.has_snapshot is True
    assert report.value.week_start_date == date(2025, 1, 13)
    totals = [(t.muscle_group.id, t.total_sets) for t in report.value.muscle_group_totals]
    assert totals == [(1, 4)]
    assert report.value.muscle_group_totals[0].muscle_group.name == "Chest"


@pytest.mark.asyncio
async def test_exercises_are_merged_by_name_in_report(gateway):
    routine_id, first_day_id = await build_routine(gateway)
    second = await WorkoutDayEditor(gateway).save_workout_day(routine_id, 2, "Push B", {1: 2})
    manager = ExerciseManager(gateway)

    first_day = await load_day(gateway, routine_id)
    added_first = await manager.save_exercise(first_day, "Bench Press", "30", "60", "3")
    loaded = await RoutineLoader(gateway).get_routine_by_id(routine_id)
    second_day = loaded.value.workout_days[1]
    added_second = await manager.save_exercise(second_day, "Bench Press", "25", "70", "3")
    assert added_first.ok and added_second.ok
    assert second.value.workout_day_id == second_day.id

    await SnapshotOrchestrator(gateway).create_weekly_snapshot(routine_id)
    report = await WeeklyReportReader(gateway).get_weekly_report(routine_id)

    assert [(t.muscle_group.id, t.total_sets) for t in report.value.muscle_group_totals] == [(1, 6)]
    exercises = report.value.exercise_totals
    assert len(exercises) == 1
    assert exercises[0].exercise_name == "Bench Press"
    assert exercises[0].total_reps == 55
    assert exercises[0].total_sets == 6
    assert exercises[0].total_weight == 70.0


# ---------------------------------------------------------------------------
# Замена и неизменность снимка
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_second_snapshot_same_week_replaces_first(gateway, clock):
    routine_id, _ = await build_routine(gateway)
    orchestrator = SnapshotOrchestrator(gateway)

    first = await orchestrator.create_weekly_snapshot(routine_id)

    day = await load_day(gateway, routine_id)
    edited = await WorkoutDayEditor(gateway).save_workout_day(
        routine_id, 1, "Push", {1: 4, 2: 3}, workout_day=day,
    )
    assert edited.ok, edited

    clock["today"] = date(2025, 1, 19)  # воскресенье той же недели
    second = await orchestrator.create_weekly_snapshot(routine_id)

    assert first.value.week_start_date == second.value.week_start_date
    report = await WeeklyReportReader(gateway).get_weekly_report(routine_id)
    assert [(t.muscle_group.id, t.total_sets) for t in report.value.muscle_group_totals] == [(1, 4), (2, 3)]
    assert report.value.snapshot_created_at == second.value.created_at


@pytest.mark.asyncio
async def test_snapshot_is_not_affected_by_later_edits(gateway):
    routine_id, _ = await build_routine(gateway)
    await SnapshotOrchestrator(gateway).create_weekly_snapshot(routine_id)

    day = await load_day(gateway, routine_id)
    edited = await WorkoutDayEditor(gateway).save_workout_day(
        routine_id, 1, "Push", {1: 10}, workout_day=day,
    )
    assert edited.ok, edited
    assert (await load_day(gateway, routine_id)).sets[0].number_of_sets == 10

    report = await WeeklyReportReader(gateway).get_weekly_report(routine_id)

    assert report.value.muscle_group_totals[0].total_sets == 4


@pytest.mark.asyncio
async def test_new_week_without_snapshot_is_empty(gateway, clock):
    routine_id, _ = await build_routine(gateway)
    await SnapshotOrchestrator(gateway).create_weekly_snapshot(routine_id)

    clock["today"] = date(2025, 1, 20)  # понедельник следующей недели
    report = await WeeklyReportReader(gateway).get_weekly_report(routine_id)

    assert report.ok is True
    assert report.value.has_snapshot is False
    assert report.value.week_start_date == date(2025, 1, 20)
    assert report.value.snapshot_created_at is None
    assert report.value.muscle_group_totals == []
    assert report.value.exercise_totals == []


@pytest.mark.asyncio
async def test_report_can_include_empty_muscle_groups(gateway, monkeypatch):
    monkeypatch.setattr(settings, "REPORT_INCLUDE_EMPTY_MUSCLE_GROUPS", True)
    routine_id, _ = await build_routine(gateway)
    await SnapshotOrchestrator(gateway).create_weekly_snapshot(routine_id)

    report = await WeeklyReportReader(gateway).get_weekly_report(routine_id)

    totals = report.value.muscle_group_totals
    assert len(totals) == 10
    assert totals[0].total_sets == 4
    assert all(t.total_sets == 0 for t in totals[1:])


# ---------------------------------------------------------------------------
# Ошибки
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_report_for_missing_routine_is_not_found(gateway):
    report = await WeeklyReportReader(gateway).get_weekly_report(999)

    assert report.ok is False
    assert report.kind == ErrorKind.not_found
    assert report.message == "Routine not found"


@pytest.mark.asyncio
async def test_snapshot_for_missing_routine_is_not_found(gateway):
    orchestrator = SnapshotOrchestrator(gateway)

    result = await orchestrator.create_weekly_snapshot(999)

    assert result.is_not_found
    assert result.message == "Routine not found"
    assert orchestrator.status(999).state == SnapshotState.error
