# backend/fittrack/services/assignments.py
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import update, and_
from sqlalchemy.orm import Session

from fittrack.models.routine import Routine
from fittrack.models.routine_assignment import RoutineAssignment

logger = logging.getLogger(__name__)


def start_assignment(
    db: Session,
    client_id: int,
    routine: Routine,
    plan_type: str,
    start_date: Optional[date] = None,
) -> RoutineAssignment:
    """
    Create an active assignment of `routine` for `client_id`. An active
    assignment of the same routine for the same client is superseded
    (deactivated, kept for history). Flushes; the caller commits.
    """
    if not routine.routine_days:
        raise HTTPException(status_code=400, detail="Routine has no days")

    superseded = db.execute(
        update(RoutineAssignment)
        .where(
            and_(
                RoutineAssignment.client_id == client_id,
                RoutineAssignment.routine_id == routine.id,
                RoutineAssignment.is_active.is_(True),
            )
        )
        .values(is_active=False)
    ).rowcount

    a = RoutineAssignment(
        routine_id=routine.id,
        client_id=client_id,
        plan_type=plan_type,
        start_date=start_date or date.today(),
        is_active=True,
    )
    db.add(a)
    db.flush()

    if superseded:
        logger.info(
            "Assignment %s supersedes %d earlier assignment(s) of routine %s for client %s",
            a.id, superseded, routine.id, client_id,
        )
    return a
