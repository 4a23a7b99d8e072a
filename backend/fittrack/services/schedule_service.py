# backend/fittrack/services/schedule_service.py
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fittrack.models.routine_assignment import RoutineAssignment
from fittrack.schemas.schedule import WeekScheduleResponse
from fittrack.services import schedule_data
from fittrack.services.schedule import (
    can_skip_day,
    flatten_schedules,
    generate_routine_schedules,
    week_bounds,
)

logger = logging.getLogger(__name__)


def _load_week(db: Session, client_id: int, week_start: date, week_end: date, today: date) -> WeekScheduleResponse:
    # fetch assignments -> fetch sessions -> read skip log -> generate
    assignments = schedule_data.get_active_assignments(db, client_id)
    sessions = schedule_data.get_sessions(db, client_id, week_start, week_end)
    skips = schedule_data.get_skips(db, client_id)

    routines = generate_routine_schedules(
        assignments, sessions, skips, week_start, week_end, today=today
    )
    logger.info(
        "Generated %d routine schedule(s) for client %s week %s",
        len(routines), client_id, week_start,
    )
    return WeekScheduleResponse(
        client_id=client_id,
        week_start=week_start,
        week_end=week_end,
        routines=routines,
        schedule=flatten_schedules(routines),
    )


def build_week_schedule(
    db: Session,
    client_id: int,
    week_date: date,
    today: Optional[date] = None,
) -> WeekScheduleResponse:
    """
    Schedule for the Monday..Sunday week containing `week_date`.
    A failed fetch degrades to an empty schedule; nothing is retried.
    """
    week_start, week_end = week_bounds(week_date)
    logger.debug("Building schedule client=%s week=%s..%s", client_id, week_start, week_end)

    try:
        return _load_week(db, client_id, week_start, week_end, today or date.today())
    except SQLAlchemyError:
        logger.exception("Error fetching schedule data for client %s", client_id)
        return WeekScheduleResponse(
            client_id=client_id, week_start=week_start, week_end=week_end, routines=[], schedule=[]
        )


def skip_day(
    db: Session,
    client_id: int,
    scheduled_date: date,
    assignment_id: int,
    today: Optional[date] = None,
) -> WeekScheduleResponse:
    """
    Append a skip for (date, assignment) and return the regenerated week.
    A data-access failure here raises 503 instead of degrading to an empty week.
    """
    today = today or date.today()
    week_start, week_end = week_bounds(scheduled_date)

    a = db.get(RoutineAssignment, assignment_id)
    if not a or a.client_id != client_id:
        raise HTTPException(status_code=404, detail="Assignment not found")
    if not a.is_active:
        raise HTTPException(status_code=400, detail="Assignment is not active")

    try:
        current = _load_week(db, client_id, week_start, week_end, today)
    except SQLAlchemyError as e:
        logger.exception("Error fetching schedule data for client %s", client_id)
        raise HTTPException(status_code=503, detail="Schedule data unavailable") from e

    target = next(
        (
            d for d in current.schedule
            if d.assignment_id == assignment_id and d.scheduled_date == scheduled_date
        ),
        None,
    )
    if target is None:
        raise HTTPException(status_code=400, detail="Day is not on this assignment's schedule")
    if target.was_skipped:
        # already in the log: nothing to append
        return current
    if not can_skip_day(target, today):
        raise HTTPException(status_code=400, detail="Day cannot be skipped")

    schedule_data.append_skip(db, client_id, scheduled_date, assignment_id)
    logger.info("Skipped %s for assignment %s (client %s)", scheduled_date, assignment_id, client_id)

    return build_week_schedule(db, client_id, scheduled_date, today=today)
