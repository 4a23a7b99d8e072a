# backend/fittrack/models/routine_exercise.py
from __future__ import annotations

from datetime import datetime, timezone
from sqlalchemy import Integer, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fittrack.db import Base


class RoutineExercise(Base):
    """Planned exercise on a routine day (prescription, not a log)."""
    __tablename__ = "routine_exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    routine_day_id: Mapped[int] = mapped_column(
        ForeignKey("routine_days.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # 0-based position within the day
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    exercise_name: Mapped[str] = mapped_column(String(128), nullable=False)
    sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # free text: "8-12", "AMRAP", "30s"
    reps: Mapped[str | None] = mapped_column(String(32), nullable=True)
    weight_suggestion: Mapped[str | None] = mapped_column(String(64), nullable=True)
    rest_time_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    __table_args__ = (
        CheckConstraint("sets IS NULL OR sets >= 1", name="chk_routine_exercise_sets"),
        CheckConstraint(
            "rest_time_seconds IS NULL OR rest_time_seconds >= 0",
            name="chk_routine_exercise_rest",
        ),
    )

    routine_day = relationship("RoutineDay", back_populates="exercises")
