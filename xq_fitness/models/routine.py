from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship

from xq_fitness.core.base import Base


class Routine(Base):
    __tablename__ = "routines"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    workout_days = relationship(
        "WorkoutDay",
        back_populates="routine",
        cascade="all, delete-orphan",
        order_by="WorkoutDay.day_number",
        lazy="selectin",
    )
    snapshots = relationship(
        "WeeklySnapshot",
        back_populates="routine",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class WorkoutDay(Base):
    __tablename__ = "workout_days"

    id = Column(Integer, primary_key=True, index=True)
    routine_id = Column(Integer, ForeignKey("routines.id"), nullable=False, index=True)
    day_number = Column(Integer, nullable=False)
    day_name = Column(String, nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    routine = relationship("Routine", back_populates="workout_days")
    sets = relationship(
        "WorkoutDaySet",
        back_populates="workout_day",
        cascade="all, delete-orphan",
        order_by="WorkoutDaySet.id",
        lazy="selectin",
    )
    exercises = relationship(
        "Exercise",
        back_populates="workout_day",
        cascade="all, delete-orphan",
        order_by="Exercise.id",
        lazy="selectin",
    )


class WorkoutDaySet(Base):
    __tablename__ = "workout_day_sets"
    __table_args__ = (
        # Не больше одной записи на пару (день, группа мышц)
        UniqueConstraint("workout_day_id", "muscle_group_id", name="uq_workout_day_muscle_group"),
    )

    id = Column(Integer, primary_key=True, index=True)
    workout_day_id = Column(Integer, ForeignKey("workout_days.id"), nullable=False, index=True)
    muscle_group_id = Column(Integer, ForeignKey("muscle_groups.id"), nullable=False)
    number_of_sets = Column(Integer, nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    workout_day = relationship("WorkoutDay", back_populates="sets")
    muscle_group = relationship("MuscleGroup", lazy="selectin")
