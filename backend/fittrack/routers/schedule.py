# backend/fittrack/routers/schedule.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from fittrack.db import get_db
from fittrack.models.schedule_skip import ScheduleSkip
from fittrack.schemas.schedule import SkipOut, SkipRequest, WeekScheduleResponse
from fittrack.services.schedule_service import build_week_schedule, skip_day

router = APIRouter(prefix="/clients", tags=["schedule"])


def _parse_day(day_str: Optional[str]) -> date:
    if not day_str:
        return date.today()
    try:
        return date.fromisoformat(day_str)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid day format; expected YYYY-MM-DD")


@router.get("/{client_id}/schedule", response_model=WeekScheduleResponse)
def get_week_schedule(
    client_id: int,
    week: Optional[str] = Query(None, description="Any YYYY-MM-DD inside the week; defaults to today"),
    db: Session = Depends(get_db),
):
    """
    GET /clients/1/schedule?week=2024-01-03
    Monday-anchored week, one row per active assignment plus a flat list.
    """
    return build_week_schedule(db, client_id, _parse_day(week))


@router.post("/{client_id}/schedule/skips", response_model=WeekScheduleResponse)
def create_skip(client_id: int, payload: SkipRequest, db: Session = Depends(get_db)):
    """
    POST /clients/1/schedule/skips
    Body: { "scheduled_date": "YYYY-MM-DD", "assignment_id": 3 }
    Returns the regenerated week that contains the skipped date.
    """
    return skip_day(db, client_id, payload.scheduled_date, payload.assignment_id)


@router.get("/{client_id}/schedule/skips", response_model=List[SkipOut])
def list_skips(client_id: int, db: Session = Depends(get_db)):
    rows = db.execute(
        select(ScheduleSkip)
        .where(ScheduleSkip.client_id == client_id)
        .order_by(ScheduleSkip.scheduled_date, ScheduleSkip.id)
    ).scalars().all()
    return rows
