import logging

from xq_fitness.core.errors import ApiError
from xq_fitness.core.result import Failure, Result, Success
from xq_fitness.schemas.snapshot import WeeklyReportResponse
from xq_fitness.services.gateway_client import GatewayClient

logger = logging.getLogger(__name__)


class WeeklyReportReader:
    """Отчёт за текущую неделю считается сервером по последнему снимку."""

    FAILURE_MESSAGE = "Failed to load report"

    def __init__(self, gateway: GatewayClient):
        self.gateway = gateway

    async def get_weekly_report(self, routine_id) -> Result:
        try:
            data = await self.gateway.get_weekly_report(int(routine_id))
        except ApiError as e:
            logger.error(f"Ошибка загрузки отчёта за неделю для программы {routine_id}: {e.message}")
            if e.is_not_found:
                return Failure.from_error(e)
            return Failure.from_error(e, message=e.server_message or self.FAILURE_MESSAGE)
        return Success(value=WeeklyReportResponse.model_validate(data))
