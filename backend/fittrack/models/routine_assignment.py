# backend/fittrack/models/routine_assignment.py
from datetime import datetime, date, timezone
from sqlalchemy import ForeignKey, Integer, String, Boolean, Date, DateTime, Index, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from fittrack.db import Base


PLAN_TYPES = ("strict", "flexible")


class RoutineAssignment(Base):
    __tablename__ = "client_routine_assignments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    routine_id: Mapped[int] = mapped_column(ForeignKey("workout_routines.id"), nullable=False)
    client_id: Mapped[int] = mapped_column(Integer, nullable=False)
    plan_type: Mapped[str] = mapped_column(String(16), default="strict", nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    # superseded/ended assignments are deactivated, never deleted
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("plan_type IN ('strict', 'flexible')", name="chk_valid_plan_type"),
        Index("ix_assignments_client_active", "client_id", "is_active"),
    )

    routine = relationship("Routine")
