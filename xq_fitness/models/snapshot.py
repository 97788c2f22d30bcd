from datetime import datetime

from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from xq_fitness.core.base import Base


class WeeklySnapshot(Base):
    """
    Снимок состояния программы на неделю.

    payload хранит копию дней, подходов и упражнений (вместе с названиями групп мышц),
    а не ссылки на живые строки: последующие правки программы отчёт не меняют.
    """
    __tablename__ = "weekly_snapshots"
    __table_args__ = (
        UniqueConstraint("routine_id", "week_start_date", name="uq_snapshot_routine_week"),
    )

    id = Column(Integer, primary_key=True, index=True)
    routine_id = Column(Integer, ForeignKey("routines.id"), nullable=False, index=True)
    week_start_date = Column(Date, nullable=False)
    payload = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    routine = relationship("Routine", back_populates="snapshots")
