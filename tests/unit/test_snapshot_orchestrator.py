"""
Модульные тесты для SnapshotOrchestrator.

Тестируются:
- переходы состояния idle → pending → success | error
- повторный запуск во время pending отклоняется без сетевого вызова
- NOT_FOUND отдаёт сообщение сервера, прочие ошибки — общий текст
- неожиданное тело ответа или отмена не оставляют программу в pending
"""

import asyncio

import httpx
import pytest

from xq_fitness.core.errors import ApiError, ErrorKind
from xq_fitness.services.gateway_client import GatewayClient
from xq_fitness.services.snapshot_orchestrator import SnapshotOrchestrator, SnapshotState

pytestmark = pytest.mark.unit


SNAPSHOT = {
    "id": 5,
    "routineId": 1,
    "weekStartDate": "2025-01-13",
    "createdAt": "2025-01-15T10:00:00",
}


@pytest.mark.asyncio
async def test_initial_status_is_idle(mock_gateway):
    orchestrator = SnapshotOrchestrator(mock_gateway)

    assert orchestrator.status(1).state == SnapshotState.idle
    assert orchestrator.is_pending(1) is False


@pytest.mark.asyncio
async def test_create_snapshot_success(mock_gateway):
    mock_gateway.create_weekly_snapshot.return_value = SNAPSHOT
    orchestrator = SnapshotOrchestrator(mock_gateway)

    result = await orchestrator.create_weekly_snapshot("1")

    assert result.ok is True
    assert result.message == "Weekly snapshot created successfully"
    assert result.value.id == 5
    assert str(result.value.week_start_date) == "2025-01-13"
    mock_gateway.create_weekly_snapshot.assert_awaited_once_with(1)

    status = orchestrator.status(1)
    assert status.state == SnapshotState.success
    assert status.snapshot.id == 5


@pytest.mark.asyncio
async def test_create_snapshot_rejects_reentrant_call(mock_gateway):
    release = asyncio.Event()

    async def slow_snapshot(routine_id):
        await release.wait()
        return SNAPSHOT

    mock_gateway.create_weekly_snapshot.side_effect = slow_snapshot
    orchestrator = SnapshotOrchestrator(mock_gateway)

    first = asyncio.ensure_future(orchestrator.create_weekly_snapshot(1))
    await asyncio.sleep(0)
    assert orchestrator.is_pending(1) is True

    second = await orchestrator.create_weekly_snapshot(1)

    assert second.ok is False
    assert second.kind == ErrorKind.validation
    assert second.message == "Snapshot creation already in progress"
    assert mock_gateway.create_weekly_snapshot.await_count == 1

    release.set()
    result = await first
    assert result.ok is True
    assert orchestrator.is_pending(1) is False


@pytest.mark.asyncio
async def test_pending_state_is_per_routine(mock_gateway):
    release = asyncio.Event()

    async def slow_snapshot(routine_id):
        await release.wait()
        return {**SNAPSHOT, "routineId": routine_id}

    mock_gateway.create_weekly_snapshot.side_effect = slow_snapshot
    orchestrator = SnapshotOrchestrator(mock_gateway)

    first = asyncio.ensure_future(orchestrator.create_weekly_snapshot(1))
    second = asyncio.ensure_future(orchestrator.create_weekly_snapshot(2))
    await asyncio.sleep(0)
    release.set()

    results = await asyncio.gather(first, second)

    assert all(result.ok for result in results)
    assert mock_gateway.create_weekly_snapshot.await_count == 2


@pytest.mark.asyncio
async def test_not_found_surfaces_server_message(mock_gateway):
    mock_gateway.create_weekly_snapshot.side_effect = ApiError(
        ErrorKind.not_found, "Routine not found", status_code=404, server_message="Routine not found",
    )
    orchestrator = SnapshotOrchestrator(mock_gateway)

    result = await orchestrator.create_weekly_snapshot(42)

    assert result.ok is False
    assert result.is_not_found
    assert result.message == "Routine not found"
    assert orchestrator.status(42).state == SnapshotState.error
    assert orchestrator.status(42).message == "Routine not found"


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [
    ApiError(ErrorKind.server, "Request failed with status code 500", status_code=500),
    ApiError(ErrorKind.network, "Network Error"),
])
async def test_other_failures_surface_generic_message(mock_gateway, error):
    mock_gateway.create_weekly_snapshot.side_effect = error
    orchestrator = SnapshotOrchestrator(mock_gateway)

    result = await orchestrator.create_weekly_snapshot(1)

    assert result.ok is False
    assert result.kind == error.kind
    assert result.message == "Failed to create snapshot"


@pytest.mark.asyncio
async def test_retry_allowed_after_error(mock_gateway):
    mock_gateway.create_weekly_snapshot.side_effect = [ApiError(ErrorKind.network, "Network Error"), SNAPSHOT]
    orchestrator = SnapshotOrchestrator(mock_gateway)

    first = await orchestrator.create_weekly_snapshot(1)
    second = await orchestrator.create_weekly_snapshot(1)

    assert first.ok is False
    assert second.ok is True
    assert orchestrator.status(1).state == SnapshotState.success


# ---------------------------------------------------------------------------
# Неожиданные ответы и отмена
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
@pytest.mark.parametrize("outcome", [
    ValueError("bad body"),
    {"id": 1},
    None,
])
async def test_unexpected_response_is_error_and_retry_allowed(mock_gateway, outcome):
    """Тело не того вида или чужое исключение не оставляют программу в pending."""
    mock_gateway.create_weekly_snapshot.side_effect = [outcome, SNAPSHOT]
    orchestrator = SnapshotOrchestrator(mock_gateway)

    first = await orchestrator.create_weekly_snapshot(1)

    assert first.ok is False
    assert first.kind == ErrorKind.server
    assert first.message == "Failed to create snapshot"
    assert orchestrator.is_pending(1) is False
    assert orchestrator.status(1).state == SnapshotState.error

    second = await orchestrator.create_weekly_snapshot(1)

    assert second.ok is True
    assert mock_gateway.create_weekly_snapshot.await_count == 2


@pytest.mark.asyncio
async def test_cancelled_call_returns_to_idle(mock_gateway):
    started = asyncio.Event()

    async def hanging_snapshot(routine_id):
        started.set()
        await asyncio.Event().wait()

    mock_gateway.create_weekly_snapshot.side_effect = hanging_snapshot
    orchestrator = SnapshotOrchestrator(mock_gateway)

    task = asyncio.ensure_future(orchestrator.create_weekly_snapshot(1))
    await started.wait()
    assert orchestrator.is_pending(1) is True

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert orchestrator.status(1).state == SnapshotState.idle


@pytest.mark.asyncio
async def test_non_json_success_through_real_client_allows_retry():
    """2xx с HTML вместо JSON: ошибка сервера, следующий запуск снова идёт в сеть."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if len(requests) == 1:
            return httpx.Response(201, text="<html>proxy ok</html>")
        return httpx.Response(201, json=SNAPSHOT)

    transport = httpx.MockTransport(handler)
    client = GatewayClient(
        read_base_url="http://gateway/read",
        write_base_url="http://gateway/write",
        read_transport=transport,
        write_transport=transport,
    )
    orchestrator = SnapshotOrchestrator(client)

    first = await orchestrator.create_weekly_snapshot(1)

    assert first.ok is False
    assert first.kind == ErrorKind.server
    assert first.status_code == 201
    assert first.message == "Failed to create snapshot"
    assert orchestrator.status(1).state == SnapshotState.error

    second = await orchestrator.create_weekly_snapshot(1)

    assert second.ok is True
    assert len(requests) == 2
    await client.close()
