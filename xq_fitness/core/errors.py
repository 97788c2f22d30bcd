"""
Таксономия ошибок обращения к сервисам и обработчики ошибок для backend.

Клиент: каждая неудача HTTP-вызова превращается в ApiError с тегом ErrorKind.
Вызывающий код не разбирает тело ответа сам — сообщение уже извлечено.

Backend: все ошибки отдаются в форме {"message": "..."}.
"""
import enum
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    not_found = "not_found"
    validation = "validation"
    server = "server"
    network = "network"


class ApiError(Exception):
    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: Optional[int] = None,
        server_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        # Текст, присланный сервером в теле ответа (если был)
        self.server_message = server_message

    @property
    def is_not_found(self) -> bool:
        return self.kind == ErrorKind.not_found

    def __repr__(self) -> str:
        return f"ApiError(kind={self.kind.value}, status_code={self.status_code}, message={self.message!r})"


def _format_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if location:
        return f"{location}: {first.get('msg')}"
    return str(first.get("msg"))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _format_validation_error(exc)
    logger.info(f"Невалидный запрос {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"message": message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
