from typing import Optional

from xq_fitness.schemas.base import CamelModel


class MuscleGroupRead(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
