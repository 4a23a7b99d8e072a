# backend/fittrack/models/workout_session.py
from datetime import datetime
from sqlalchemy import ForeignKey, Integer, String, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from fittrack.db import Base


class WorkoutSession(Base):
    __tablename__ = "workout_sessions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)

    # naive local datetimes, same convention as the schedule dates
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    # free-form sessions have no routine linkage
    routine_id: Mapped[int | None] = mapped_column(
        ForeignKey("workout_routines.id", ondelete="SET NULL"), nullable=True
    )
    routine_day_id: Mapped[int | None] = mapped_column(
        ForeignKey("routine_days.id", ondelete="SET NULL"), nullable=True
    )
    assignment_id: Mapped[int | None] = mapped_column(
        ForeignKey("client_routine_assignments.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        default=lambda: datetime.now(),
        nullable=False
    )

    __table_args__ = (
        Index("ix_workout_sessions_user_start", "user_id", "start_time"),
    )

    routine_day = relationship("RoutineDay")
    exercises = relationship(
        "WorkoutExercise",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.order_index",
    )

    @property
    def is_completed(self) -> bool:
        return self.end_time is not None
