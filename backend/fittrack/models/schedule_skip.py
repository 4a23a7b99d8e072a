from datetime import datetime, date, timezone
from sqlalchemy import ForeignKey, Integer, Date, DateTime, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from fittrack.db import Base

class ScheduleSkip(Base):
    __tablename__ = "schedule_skips"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(Integer, nullable=False)
    assignment_id: Mapped[int] = mapped_column(
        ForeignKey("client_routine_assignments.id", ondelete="CASCADE"), nullable=False
    )
    scheduled_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("client_id", "assignment_id", "scheduled_date", name="uq_schedule_skip"),
    )

    assignment = relationship("RoutineAssignment")

# helpful index for queries
Index("ix_schedule_skips_client", ScheduleSkip.client_id, ScheduleSkip.scheduled_date)
