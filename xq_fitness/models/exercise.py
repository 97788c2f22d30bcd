from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Float
from sqlalchemy.orm import relationship

from xq_fitness.core.base import Base


class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, index=True)
    workout_day_id = Column(Integer, ForeignKey("workout_days.id"), nullable=False, index=True)
    muscle_group_id = Column(Integer, ForeignKey("muscle_groups.id"), nullable=False)
    exercise_name = Column(String, nullable=False)
    total_reps = Column(Integer, default=0, nullable=False)
    weight = Column(Float, default=0, nullable=False)  # кг
    total_sets = Column(Integer, default=0, nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    workout_day = relationship("WorkoutDay", back_populates="exercises")
    muscle_group = relationship("MuscleGroup", lazy="selectin")
