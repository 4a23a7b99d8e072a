# backend/fittrack/routers/assignments.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from fittrack.db import get_db
from fittrack.models.routine import Routine
from fittrack.models.routine_assignment import RoutineAssignment
from fittrack.schemas.assignment import AssignmentCreate, AssignmentOut
from fittrack.services.assignments import start_assignment

router = APIRouter(prefix="/assignments", tags=["assignments"])


def _serialize(a: RoutineAssignment) -> AssignmentOut:
    return AssignmentOut(
        id=a.id,
        routine_id=a.routine_id,
        routine_name=a.routine.name if a.routine else None,
        days_per_week=a.routine.days_per_week if a.routine else None,
        client_id=a.client_id,
        plan_type=a.plan_type,
        start_date=a.start_date,
        is_active=a.is_active,
        created_at=a.created_at,
    )


@router.post("", response_model=AssignmentOut, status_code=201)
def activate_routine(body: AssignmentCreate, db: Session = Depends(get_db)):
    """
    Start following a routine: the client's own or a public one. An active
    assignment of the same routine for the same client is superseded
    (deactivated, kept for history). Trainer routines reach clients through
    recommendations instead.
    """
    routine = db.get(Routine, body.routine_id)
    if not routine:
        raise HTTPException(status_code=404, detail="Routine not found")
    if not routine.is_public and routine.user_id != body.client_id:
        raise HTTPException(status_code=403, detail="Routine is not public")

    a = start_assignment(db, body.client_id, routine, body.plan_type, body.start_date)
    db.commit()
    db.refresh(a)
    return _serialize(a)


@router.get("", response_model=List[AssignmentOut])
def list_assignments(
    client_id: int = Query(...),
    active_only: bool = Query(True),
    db: Session = Depends(get_db),
):
    q = (
        select(RoutineAssignment)
        .options(joinedload(RoutineAssignment.routine))
        .where(RoutineAssignment.client_id == client_id)
        .order_by(RoutineAssignment.start_date.desc(), RoutineAssignment.id.desc())
    )
    if active_only:
        q = q.where(RoutineAssignment.is_active.is_(True))
    rows = db.execute(q).unique().scalars().all()
    return [_serialize(a) for a in rows]


@router.get("/{assignment_id}", response_model=AssignmentOut)
def get_assignment(assignment_id: int, db: Session = Depends(get_db)):
    a = db.get(RoutineAssignment, assignment_id)
    if not a:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return _serialize(a)


@router.post("/{assignment_id}/deactivate", response_model=AssignmentOut)
def deactivate_assignment(assignment_id: int, db: Session = Depends(get_db)):
    a = db.get(RoutineAssignment, assignment_id)
    if not a:
        raise HTTPException(status_code=404, detail="Assignment not found")
    if a.is_active:
        a.is_active = False
        db.commit()
        db.refresh(a)
    return _serialize(a)
