# backend/fittrack/services/schedule_data.py
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import List

from sqlalchemy import select, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from fittrack.models.routine import Routine
from fittrack.models.routine_assignment import RoutineAssignment
from fittrack.models.schedule_skip import ScheduleSkip
from fittrack.models.workout_session import WorkoutSession
from fittrack.schemas.schedule import AssignmentSnapshot, SessionSnapshot, SkipSnapshot

logger = logging.getLogger(__name__)


def _window_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    # inclusive date window -> [start 00:00, day after end 00:00)
    start_local = datetime(start.year, start.month, start.day)
    end_local = datetime(end.year, end.month, end.day) + timedelta(days=1)
    return start_local, end_local


def get_active_assignments(db: Session, client_id: int) -> List[AssignmentSnapshot]:
    rows = db.execute(
        select(RoutineAssignment)
        .options(selectinload(RoutineAssignment.routine).selectinload(Routine.routine_days))
        .where(
            and_(
                RoutineAssignment.client_id == client_id,
                RoutineAssignment.is_active.is_(True),
            )
        )
        .order_by(RoutineAssignment.start_date, RoutineAssignment.id)
    ).scalars().all()
    return [AssignmentSnapshot.model_validate(a) for a in rows if a.routine is not None]


def get_sessions(db: Session, client_id: int, start: date, end: date) -> List[SessionSnapshot]:
    """Completed sessions (end_time set) that started inside [start, end]."""
    start_at, end_at = _window_bounds(start, end)
    rows = db.execute(
        select(WorkoutSession)
        .where(
            and_(
                WorkoutSession.user_id == client_id,
                WorkoutSession.start_time >= start_at,
                WorkoutSession.start_time < end_at,
                WorkoutSession.end_time.is_not(None),
            )
        )
        .order_by(WorkoutSession.start_time, WorkoutSession.id)
    ).scalars().all()
    return [SessionSnapshot.model_validate(s) for s in rows]


def get_skips(db: Session, client_id: int) -> List[SkipSnapshot]:
    rows = db.execute(
        select(ScheduleSkip)
        .where(ScheduleSkip.client_id == client_id)
        .order_by(ScheduleSkip.scheduled_date, ScheduleSkip.id)
    ).scalars().all()
    return [SkipSnapshot.model_validate(s) for s in rows]


def append_skip(db: Session, client_id: int, scheduled_date: date, assignment_id: int) -> bool:
    """
    Append a skip record. Returns False when the same (client, assignment, date)
    was already in the log; the log is append-only so that is not an error.
    """
    db.add(ScheduleSkip(client_id=client_id, assignment_id=assignment_id, scheduled_date=scheduled_date))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(
            "Skip already recorded client=%s assignment=%s date=%s",
            client_id, assignment_id, scheduled_date,
        )
        return False
    return True
