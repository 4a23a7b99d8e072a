# backend/fittrack/routers/sessions.py
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fittrack.db import get_db
from fittrack.models.routine_assignment import RoutineAssignment
from fittrack.models.routine_day import RoutineDay
from fittrack.models.workout_exercise import WorkoutExercise, WorkoutSet
from fittrack.models.workout_session import WorkoutSession
from fittrack.schemas.session import (
    CompletedTodayResponse,
    WorkoutExerciseIn,
    WorkoutExerciseOut,
    WorkoutSessionFinish,
    WorkoutSessionOut,
    WorkoutSessionStart,
    WorkoutSetIn,
    WorkoutSetOut,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _naive(dt: datetime) -> datetime:
    return dt if dt.tzinfo is None else dt.replace(tzinfo=None)


def _get_or_404(db: Session, session_id: int) -> WorkoutSession:
    s = db.get(WorkoutSession, session_id)
    if not s:
        raise HTTPException(status_code=404, detail="Session not found")
    return s


def _build_set(body: WorkoutSetIn) -> WorkoutSet:
    return WorkoutSet(
        set_number=body.set_number,
        weight=body.weight,
        reps=body.reps,
        rpe=body.rpe,
        duration_seconds=body.duration_seconds,
        distance=body.distance,
        completed=body.completed,
    )


def _is_empty_set(body: WorkoutSetIn) -> bool:
    recorded = (body.weight, body.reps, body.rpe, body.duration_seconds, body.distance)
    return not body.completed and all(v is None for v in recorded)


def _append_exercise(s: WorkoutSession, body: WorkoutExerciseIn, drop_empty_sets: bool) -> WorkoutExercise:
    ex = WorkoutExercise(
        exercise_name=body.exercise_name.strip(),
        notes=body.notes,
        order_index=len(s.exercises),
    )
    ex.sets = [
        _build_set(st) for st in body.sets
        if not (drop_empty_sets and _is_empty_set(st))
    ]
    s.exercises.append(ex)
    return ex


def _commit_or_409(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail="Duplicate set_number for exercise") from e


def _day_bounds(d: date) -> tuple[datetime, datetime]:
    start_local = datetime(d.year, d.month, d.day)
    end_local = start_local + timedelta(days=1)
    return start_local, end_local


def _parse_day(day_str: str) -> date:
    try:
        return date.fromisoformat(day_str)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid day format; expected YYYY-MM-DD")


@router.post("", response_model=WorkoutSessionOut, status_code=201)
def start_session(body: WorkoutSessionStart, db: Session = Depends(get_db)):
    routine_id: Optional[int] = None
    name = (body.name or "").strip()

    if body.routine_day_id is not None:
        rd = db.get(RoutineDay, body.routine_day_id)
        if not rd:
            raise HTTPException(status_code=404, detail="Routine day not found")
        routine_id = rd.routine_id
        name = name or rd.name

    if body.assignment_id is not None:
        a = db.get(RoutineAssignment, body.assignment_id)
        if not a or a.client_id != body.user_id:
            raise HTTPException(status_code=404, detail="Assignment not found")
        if routine_id is not None and a.routine_id != routine_id:
            raise HTTPException(status_code=400, detail="Routine day does not belong to the assignment's routine")

    if not name:
        raise HTTPException(status_code=400, detail="name is required for free-form sessions")

    s = WorkoutSession(
        user_id=body.user_id,
        name=name,
        start_time=_naive(body.start_time) if body.start_time else datetime.now(),
        notes=body.notes,
        routine_id=routine_id,
        routine_day_id=body.routine_day_id,
        assignment_id=body.assignment_id,
    )
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


@router.post("/{session_id}/finish", response_model=WorkoutSessionOut)
def finish_session(session_id: int, body: WorkoutSessionFinish, db: Session = Depends(get_db)):
    s = _get_or_404(db, session_id)
    if s.end_time is not None:
        raise HTTPException(status_code=409, detail="Session already finished")

    end_time = _naive(body.end_time) if body.end_time else datetime.now()
    if end_time < s.start_time:
        raise HTTPException(status_code=400, detail="end_time must be on/after start_time")

    s.end_time = end_time
    if body.notes is not None:
        s.notes = body.notes
    for ex in body.exercises:
        if ex.exercise_name.strip():
            _append_exercise(s, ex, drop_empty_sets=True)
    _commit_or_409(db)
    db.refresh(s)
    return s


@router.get("", response_model=List[WorkoutSessionOut])
def list_sessions(
    user_id: int = Query(...),
    start: Optional[str] = Query(None, description="YYYY-MM-DD, inclusive"),
    end: Optional[str] = Query(None, description="YYYY-MM-DD, inclusive"),
    db: Session = Depends(get_db),
):
    q = (
        select(WorkoutSession)
        .where(WorkoutSession.user_id == user_id)
        .order_by(WorkoutSession.start_time.desc(), WorkoutSession.id.desc())
    )
    if start:
        q = q.where(WorkoutSession.start_time >= _day_bounds(_parse_day(start))[0])
    if end:
        q = q.where(WorkoutSession.start_time < _day_bounds(_parse_day(end))[1])
    return db.execute(q).scalars().all()


@router.get("/completed-today", response_model=CompletedTodayResponse)
def completed_today(
    user_id: int = Query(...),
    day: Optional[str] = Query(None, description="YYYY-MM-DD; defaults to today"),
    db: Session = Depends(get_db),
):
    """Routine days the user already has a session for on the given day."""
    the_day = _parse_day(day) if day else date.today()
    start, end = _day_bounds(the_day)
    ids = db.execute(
        select(WorkoutSession.routine_day_id)
        .where(
            and_(
                WorkoutSession.user_id == user_id,
                WorkoutSession.start_time >= start,
                WorkoutSession.start_time < end,
                WorkoutSession.routine_day_id.is_not(None),
            )
        )
    ).scalars().all()
    return CompletedTodayResponse(day=the_day.isoformat(), routine_day_ids=sorted(set(ids)))


@router.get("/{session_id}", response_model=WorkoutSessionOut)
def get_session(session_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, session_id)


@router.get("/{session_id}/exercises", response_model=List[WorkoutExerciseOut])
def list_session_exercises(session_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, session_id).exercises


@router.post("/{session_id}/exercises", response_model=WorkoutExerciseOut, status_code=201)
def log_exercise(session_id: int, body: WorkoutExerciseIn, db: Session = Depends(get_db)):
    """Log one exercise (with any sets so far) while the session is running."""
    s = _get_or_404(db, session_id)
    if not body.exercise_name.strip():
        raise HTTPException(status_code=400, detail="exercise_name must not be blank")

    ex = _append_exercise(s, body, drop_empty_sets=False)
    _commit_or_409(db)
    db.refresh(ex)
    return ex


@router.post(
    "/{session_id}/exercises/{exercise_id}/sets",
    response_model=WorkoutSetOut,
    status_code=201,
)
def log_set(session_id: int, exercise_id: int, body: WorkoutSetIn, db: Session = Depends(get_db)):
    ex = db.get(WorkoutExercise, exercise_id)
    if not ex or ex.session_id != session_id:
        raise HTTPException(status_code=404, detail="Exercise not found")

    st = _build_set(body)
    ex.sets.append(st)
    _commit_or_409(db)
    db.refresh(st)
    return st
