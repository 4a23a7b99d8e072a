# backend/fittrack/models/routine_recommendation.py
from datetime import datetime, timezone
from sqlalchemy import ForeignKey, Integer, String, DateTime, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from fittrack.db import Base

RECOMMENDATION_STATUSES = ("pending", "accepted", "declined")


class RoutineRecommendation(Base):
    """A trainer suggesting a routine to a client; accepting it starts an assignment."""
    __tablename__ = "routine_recommendations"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    trainer_id: Mapped[int] = mapped_column(Integer, nullable=False)
    client_id: Mapped[int] = mapped_column(Integer, nullable=False)
    routine_id: Mapped[int] = mapped_column(
        ForeignKey("workout_routines.id", ondelete="CASCADE"), nullable=False
    )
    message: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    # set once accepted
    assignment_id: Mapped[int | None] = mapped_column(
        ForeignKey("client_routine_assignments.id", ondelete="SET NULL"), nullable=True
    )

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
        CheckConstraint(
            "status IN ('pending', 'accepted', 'declined')",
            name="chk_recommendation_status",
        ),
        Index("ix_recommendations_client_status", "client_id", "status"),
    )

    routine = relationship("Routine")
