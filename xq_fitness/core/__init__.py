from xq_fitness.core.config import settings
from xq_fitness.core.base import Base
from xq_fitness.core.db import engine, get_db

__all__ = ["settings", "engine", "Base", "get_db"]
