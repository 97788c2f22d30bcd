from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Базовая схема: snake_case в Python, camelCase на проводе."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_payload(self) -> dict:
        """Тело запроса в том виде, в каком его ждут сервисы."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
