from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Шлюз, за которым живут read- и write-сервисы
    GATEWAY_URL: str = "http://localhost:8080"
    READ_SERVICE_NAME: str = "xq-fitness-read-service"
    WRITE_SERVICE_NAME: str = "xq-fitness-write-service"
    # Прямые адреса сервисов (перекрывают GATEWAY_URL, например для локальной разработки)
    READ_SERVICE_URL: Optional[str] = None
    WRITE_SERVICE_URL: Optional[str] = None
    API_PREFIX: str = "/api/v1"
    REQUEST_TIMEOUT: float = 10.0

    DATABASE_URL: str = "sqlite+aiosqlite:///./xq_fitness.db"
    RESET_DATABASE: bool = False
    LOG_LEVEL: str = "INFO"

    # Политики отчёта за неделю
    REPORT_INCLUDE_EMPTY_MUSCLE_GROUPS: bool = False
    EXERCISE_WEIGHT_AGGREGATION: Literal["max", "sum", "average", "latest"] = "max"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def read_service_url(self) -> str:
        if self.READ_SERVICE_URL:
            return self.READ_SERVICE_URL
        return f"{self.GATEWAY_URL}/{self.READ_SERVICE_NAME}{self.API_PREFIX}"

    @property
    def write_service_url(self) -> str:
        if self.WRITE_SERVICE_URL:
            return self.WRITE_SERVICE_URL
        return f"{self.GATEWAY_URL}/{self.WRITE_SERVICE_NAME}{self.API_PREFIX}"

    @property
    def async_database_url(self) -> str:
        return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")


settings = Settings()
