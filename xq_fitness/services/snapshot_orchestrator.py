"""
Создание снимка недели.

На каждую программу хранится состояние: idle → pending → success | error.
Пока вызов для программы в полёте, повторный запуск отклоняется без обращения к сети.
"""
import enum
import logging
from typing import Dict, Optional

from pydantic import BaseModel

from xq_fitness.core.errors import ApiError, ErrorKind
from xq_fitness.core.result import Failure, Result, Success
from xq_fitness.schemas.snapshot import WeeklySnapshotResponse
from xq_fitness.services.gateway_client import GatewayClient

logger = logging.getLogger(__name__)


class SnapshotState(str, enum.Enum):
    idle = "idle"
    pending = "pending"
    success = "success"
    error = "error"


class SnapshotStatus(BaseModel):
    state: SnapshotState = SnapshotState.idle
    message: Optional[str] = None
    snapshot: Optional[WeeklySnapshotResponse] = None


class SnapshotOrchestrator:
    SUCCESS_MESSAGE = "Weekly snapshot created successfully"
    FAILURE_MESSAGE = "Failed to create snapshot"
    IN_PROGRESS_MESSAGE = "Snapshot creation already in progress"

    def __init__(self, gateway: GatewayClient):
        self.gateway = gateway
        self._statuses: Dict[int, SnapshotStatus] = {}

    def status(self, routine_id) -> SnapshotStatus:
        return self._statuses.get(int(routine_id), SnapshotStatus())

    def is_pending(self, routine_id) -> bool:
        return self.status(routine_id).state == SnapshotState.pending

    async def create_weekly_snapshot(self, routine_id) -> Result:
        routine_id = int(routine_id)

        # Проверка и установка pending идут до первого await
        if self.is_pending(routine_id):
            logger.warning(f"Снимок для программы {routine_id} уже создаётся, повторный запуск отклонён")
            return Failure.validation(self.IN_PROGRESS_MESSAGE)
        self._statuses[routine_id] = SnapshotStatus(state=SnapshotState.pending)

        try:
            data = await self.gateway.create_weekly_snapshot(routine_id)
            snapshot = WeeklySnapshotResponse.model_validate(data)
        except ApiError as e:
            logger.error(f"Ошибка создания снимка для программы {routine_id}: {e.message}")
            message = e.message if e.is_not_found else self.FAILURE_MESSAGE
            self._statuses[routine_id] = SnapshotStatus(state=SnapshotState.error, message=message)
            return Failure.from_error(e, message=message)
        except Exception as e:
            logger.error(f"Неожиданный ответ при создании снимка для программы {routine_id}: {e}")
            self._statuses[routine_id] = SnapshotStatus(state=SnapshotState.error, message=self.FAILURE_MESSAGE)
            return Failure(kind=ErrorKind.server, message=self.FAILURE_MESSAGE)
        finally:
            # Отмена вызова тоже не должна оставлять программу в pending
            if self.is_pending(routine_id):
                self._statuses[routine_id] = SnapshotStatus(state=SnapshotState.idle)

        self._statuses[routine_id] = SnapshotStatus(
            state=SnapshotState.success,
            message=self.SUCCESS_MESSAGE,
            snapshot=snapshot,
        )
        return Success(value=snapshot, message=self.SUCCESS_MESSAGE)
