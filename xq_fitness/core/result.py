"""
Результаты операций оркестраторов.

Оркестраторы не показывают алерты сами: они возвращают Success или Failure,
а слой представления решает, как это отобразить.
"""
from typing import Any, Optional, Union

from pydantic import BaseModel

from xq_fitness.core.errors import ApiError, ErrorKind


class Success(BaseModel):
    ok: bool = True
    value: Any = None
    message: Optional[str] = None


class Failure(BaseModel):
    ok: bool = False
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    # True: часть изменений уже применена на сервере, отката нет
    partial: bool = False

    @classmethod
    def validation(cls, message: str) -> "Failure":
        return cls(kind=ErrorKind.validation, message=message)

    @classmethod
    def from_error(cls, error: ApiError, message: Optional[str] = None, partial: bool = False) -> "Failure":
        return cls(
            kind=error.kind,
            message=message or error.message,
            status_code=error.status_code,
            partial=partial,
        )

    @property
    def is_not_found(self) -> bool:
        return self.kind == ErrorKind.not_found


Result = Union[Success, Failure]
