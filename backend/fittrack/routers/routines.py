# backend/fittrack/routers/routines.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Path
from sqlalchemy import select, update, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fittrack.db import get_db
from fittrack.models.routine import Routine
from fittrack.models.routine_day import RoutineDay
from fittrack.models.routine_exercise import RoutineExercise
from fittrack.models.routine_assignment import RoutineAssignment
from fittrack.schemas.routine import (
    RoutineCopyRequest,
    RoutineCreate,
    RoutineDayIn,
    RoutineOut,
    RoutineUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routines", tags=["routines"])


def _get_or_404(db: Session, routine_id: int) -> Routine:
    r = db.get(Routine, routine_id)
    if not r:
        raise HTTPException(status_code=404, detail="Routine not found")
    return r


def _build_days(days: List[RoutineDayIn]) -> List[RoutineDay]:
    # day_number follows list order, 1-based; exercises 0-based
    out: List[RoutineDay] = []
    for i, d in enumerate(days, start=1):
        rd = RoutineDay(day_number=i, name=d.name.strip(), description=d.description)
        rd.exercises = [
            RoutineExercise(
                order_index=j,
                exercise_name=e.exercise_name.strip(),
                sets=e.sets,
                reps=e.reps,
                weight_suggestion=e.weight_suggestion,
                rest_time_seconds=e.rest_time_seconds,
                notes=e.notes,
            )
            for j, e in enumerate(d.exercises)
        ]
        out.append(rd)
    return out


def _copy_day(src: RoutineDay, day_number: int) -> RoutineDay:
    rd = RoutineDay(day_number=day_number, name=src.name, description=src.description)
    rd.exercises = [
        RoutineExercise(
            order_index=e.order_index,
            exercise_name=e.exercise_name,
            sets=e.sets,
            reps=e.reps,
            weight_suggestion=e.weight_suggestion,
            rest_time_seconds=e.rest_time_seconds,
            notes=e.notes,
        )
        for e in src.exercises
    ]
    return rd


@router.get("", response_model=List[RoutineOut])
def list_routines(
    user_id: Optional[int] = Query(None),
    include_public: bool = Query(False),
    db: Session = Depends(get_db),
):
    """
    GET /routines?user_id=1
    GET /routines?user_id=1&include_public=true   (own + everyone's public ones)
    Active routines first.
    """
    q = select(Routine).order_by(Routine.is_active.desc(), Routine.created_at.desc(), Routine.id.desc())
    if user_id is not None:
        if include_public:
            q = q.where(or_(Routine.user_id == user_id, Routine.is_public.is_(True)))
        else:
            q = q.where(Routine.user_id == user_id)
    elif include_public:
        q = q.where(Routine.is_public.is_(True))
    return db.execute(q).scalars().all()


@router.post("", response_model=RoutineOut, status_code=201)
def create_routine(payload: RoutineCreate, db: Session = Depends(get_db)):
    r = Routine(
        user_id=payload.user_id,
        name=payload.name,
        description=payload.description,
        days_per_week=payload.days_per_week,
        is_public=payload.is_public,
        is_active=False,
    )
    r.routine_days = _build_days(payload.days)
    db.add(r)
    db.commit()
    db.refresh(r)
    logger.info("Created routine %s (%d days) for user %s", r.id, len(r.routine_days), r.user_id)
    return r


@router.get("/{routine_id}", response_model=RoutineOut)
def get_routine(routine_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return _get_or_404(db, routine_id)


@router.patch("/{routine_id}", response_model=RoutineOut)
def update_routine(routine_id: int, payload: RoutineUpdate, db: Session = Depends(get_db)):
    r = _get_or_404(db, routine_id)

    if payload.name is not None:
        r.name = payload.name.strip()
    # nullable fields: an explicit null clears them, omission leaves them alone
    if "description" in payload.model_fields_set:
        r.description = payload.description
    if "days_per_week" in payload.model_fields_set:
        r.days_per_week = payload.days_per_week
    if payload.is_public is not None:
        r.is_public = payload.is_public

    if payload.days is not None:
        # replace the day list; existing days are not edited in place
        r.routine_days.clear()
        db.flush()
        r.routine_days.extend(_build_days(payload.days))

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail="Routine days conflict") from e

    db.refresh(r)
    return r


@router.post("/{routine_id}/toggle-active", response_model=RoutineOut)
def toggle_routine_active(routine_id: int, db: Session = Depends(get_db)):
    """Activating a routine deactivates every other routine of the same owner."""
    r = _get_or_404(db, routine_id)
    if not r.is_active:
        db.execute(
            update(Routine)
            .where(Routine.user_id == r.user_id, Routine.id != r.id)
            .values(is_active=False)
        )
    r.is_active = not r.is_active
    db.commit()
    db.refresh(r)
    return r


@router.post("/{routine_id}/copy", response_model=RoutineOut, status_code=201)
def copy_routine(routine_id: int, payload: RoutineCopyRequest, db: Session = Depends(get_db)):
    src = _get_or_404(db, routine_id)
    if not src.is_public and src.user_id != payload.user_id:
        raise HTTPException(status_code=403, detail="Routine is not public")

    copy = Routine(
        user_id=payload.user_id,
        name=f"{src.name} (Copy)",
        description=src.description,
        days_per_week=src.days_per_week,
        is_public=False,
        is_active=False,
    )
    copy.routine_days = [_copy_day(d, i) for i, d in enumerate(src.routine_days, start=1)]
    db.add(copy)
    db.commit()
    db.refresh(copy)
    return copy


@router.delete("/{routine_id}", status_code=204)
def delete_routine(routine_id: int, db: Session = Depends(get_db)):
    r = _get_or_404(db, routine_id)

    # Block if a client still follows it
    active = db.execute(
        select(func.count())
        .select_from(RoutineAssignment)
        .where(RoutineAssignment.routine_id == routine_id, RoutineAssignment.is_active.is_(True))
    ).scalar_one()
    if active:
        raise HTTPException(status_code=409, detail="Routine has active assignments; end them first")

    try:
        db.delete(r)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail="Routine is still referenced") from e
    return None
