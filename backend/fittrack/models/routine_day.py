# backend/fittrack/models/routine_day.py
from __future__ import annotations

from datetime import datetime, timezone
from sqlalchemy import Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fittrack.db import Base


class RoutineDay(Base):
    __tablename__ = "routine_days"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    routine_id: Mapped[int] = mapped_column(
        ForeignKey("workout_routines.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # 1-based ordering key within the routine
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("routine_id", "day_number", name="uq_routine_day_number"),
    )

    routine = relationship("Routine", back_populates="routine_days")
    exercises = relationship(
        "RoutineExercise",
        back_populates="routine_day",
        cascade="all, delete-orphan",
        order_by="RoutineExercise.order_index",
        lazy="selectin",
    )
