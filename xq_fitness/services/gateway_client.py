"""
HTTP-клиент к read- и write-сервисам XQ Fitness.

Особенности:
- Два httpx.AsyncClient (по одному на сервис), создаются лениво
- Timeout 10с на каждый вызов; таймаут неотличим от сетевой ошибки
- Любая неудача (сеть, не-2xx, тело не JSON) поднимается как ApiError с тегом ErrorKind
- Без повторов: решение о повторе принимает пользователь
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from xq_fitness.core.config import settings
from xq_fitness.core.errors import ApiError, ErrorKind

logger = logging.getLogger(__name__)


class GatewayClient:
    HEADERS = {"Content-Type": "application/json"}

    def __init__(
        self,
        read_base_url: Optional[str] = None,
        write_base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        read_transport: Optional[httpx.AsyncBaseTransport] = None,
        write_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.read_base_url = read_base_url or settings.read_service_url
        self.write_base_url = write_base_url or settings.write_service_url
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._read_transport = read_transport
        self._write_transport = write_transport
        self._read_http: Optional[httpx.AsyncClient] = None
        self._write_http: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------
    # Внутренние клиенты (ленивая инициализация)
    # ------------------------------------------------------------------

    def _make_http(self, base_url: str, transport) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=base_url,
            timeout=self.timeout,
            headers=self.HEADERS,
            transport=transport,
        )

    async def _get_read_http(self) -> httpx.AsyncClient:
        if self._read_http is None:
            self._read_http = self._make_http(self.read_base_url, self._read_transport)
        return self._read_http

    async def _get_write_http(self) -> httpx.AsyncClient:
        if self._write_http is None:
            self._write_http = self._make_http(self.write_base_url, self._write_transport)
        return self._write_http

    # ------------------------------------------------------------------
    # Разбор ошибок
    # ------------------------------------------------------------------

    @staticmethod
    def _server_message(response: httpx.Response) -> Optional[str]:
        """Сообщение из тела ответа: сначала message, затем detail."""
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
        detail = body.get("detail")
        if isinstance(detail, str) and detail:
            return detail
        return None

    def _error_from_response(self, response: httpx.Response) -> ApiError:
        server_message = self._server_message(response)
        kind = ErrorKind.not_found if response.status_code == 404 else ErrorKind.server
        message = server_message or f"Request failed with status code {response.status_code}"
        return ApiError(kind, message, status_code=response.status_code, server_message=server_message)

    async def _request(
        self,
        service: str,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        client = await (self._get_read_http() if service == "read" else self._get_write_http())

        try:
            response = await client.request(method, path, json=json, params=params)
        except httpx.TimeoutException as e:
            logger.error(f"{service}-service timeout: {method} {path}")
            raise ApiError(ErrorKind.network, str(e) or "Network Error") from e
        except httpx.TransportError as e:
            logger.error(f"{service}-service network error: {method} {path}: {e}")
            raise ApiError(ErrorKind.network, str(e) or "Network Error") from e

        if not response.is_success:
            error = self._error_from_response(response)
            logger.error(f"{service}-service HTTP {response.status_code}: {method} {path}: {error.message}")
            raise error

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{service}-service вернул не JSON: {method} {path} (HTTP {response.status_code})")
            raise ApiError(
                ErrorKind.server,
                "Invalid response from server",
                status_code=response.status_code,
            ) from e

    async def _read(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._request("read", "GET", path, params=params)

    async def _write(self, method: str, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._request("write", method, path, json=json, params=params)

    # ------------------------------------------------------------------
    # read-service
    # ------------------------------------------------------------------

    async def get_muscle_groups(self) -> List[Dict]:
        return await self._read("/muscle-groups")

    async def get_routines(self, is_active: Optional[bool] = None) -> List[Dict]:
        params = {"isActive": "true" if is_active else "false"} if is_active is not None else None
        return await self._read("/routines", params=params)

    async def get_routine_by_id(self, routine_id) -> Dict:
        return await self._read(f"/routines/{int(routine_id)}")

    async def get_workout_days(self, routine_id) -> List[Dict]:
        return await self._read(f"/routines/{int(routine_id)}/days")

    async def get_exercises(self, workout_day_id) -> List[Dict]:
        return await self._read(f"/workout-days/{int(workout_day_id)}/exercises")

    async def get_weekly_report(self, routine_id) -> Dict:
        return await self._read(f"/routines/{int(routine_id)}/weekly-report")

    # ------------------------------------------------------------------
    # write-service
    # ------------------------------------------------------------------

    async def create_routine(self, data: Dict) -> Dict:
        return await self._write("POST", "/routines", json=data)

    async def update_routine(self, routine_id, data: Dict) -> Dict:
        return await self._write("PUT", f"/routines/{int(routine_id)}", json=data)

    async def delete_routine(self, routine_id) -> None:
        await self._write("DELETE", f"/routines/{int(routine_id)}")

    async def create_workout_day(self, data: Dict) -> Dict:
        return await self._write("POST", "/workout-days", json=data)

    async def update_workout_day(self, workout_day_id, data: Dict) -> Dict:
        return await self._write("PUT", f"/workout-days/{int(workout_day_id)}", json=data)

    async def delete_workout_day(self, workout_day_id) -> None:
        await self._write("DELETE", f"/workout-days/{int(workout_day_id)}")

    async def create_workout_day_set(self, data: Dict) -> Dict:
        return await self._write("POST", "/workout-day-sets", json=data)

    async def update_workout_day_set(
        self,
        set_id,
        data: Dict,
        workout_day_id=None,
        muscle_group_id=None,
    ) -> Dict:
        """
        С workout_day_id и muscle_group_id сервер ищет запись по составному ключу
        и игнорирует set_id в пути (принято передавать 0).
        """
        params = None
        if workout_day_id is not None and muscle_group_id is not None:
            params = {"workoutDayId": int(workout_day_id), "muscleGroupId": int(muscle_group_id)}
        return await self._write("PUT", f"/workout-day-sets/{int(set_id)}", json=data, params=params)

    async def delete_workout_day_set(self, set_id) -> None:
        await self._write("DELETE", f"/workout-day-sets/{int(set_id)}")

    async def create_exercise(self, data: Dict) -> Dict:
        return await self._write("POST", "/exercises", json=data)

    async def update_exercise(self, exercise_id, data: Dict) -> Dict:
        return await self._write("PUT", f"/exercises/{int(exercise_id)}", json=data)

    async def delete_exercise(self, exercise_id) -> None:
        await self._write("DELETE", f"/exercises/{int(exercise_id)}")

    async def create_weekly_snapshot(self, routine_id) -> Dict:
        return await self._write("POST", f"/routines/{int(routine_id)}/snapshots")

    async def close(self) -> None:
        """Закрыть соединения."""
        if self._read_http:
            await self._read_http.aclose()
            self._read_http = None
        if self._write_http:
            await self._write_http.aclose()
            self._write_http = None
