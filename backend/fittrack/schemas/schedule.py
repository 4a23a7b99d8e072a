# backend/fittrack/schemas/schedule.py
from __future__ import annotations

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


PlanType = Literal["strict", "flexible"]


# ---- Generator inputs (read snapshots) --------------------------------------

class RoutineDaySnapshot(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    day_number: int

    model_config = ConfigDict(from_attributes=True)


class RoutineSnapshot(BaseModel):
    name: str = "Unnamed Routine"
    days_per_week: Optional[int] = None
    routine_days: List[RoutineDaySnapshot] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class AssignmentSnapshot(BaseModel):
    id: int
    routine_id: int
    plan_type: PlanType
    start_date: date
    routine: RoutineSnapshot

    model_config = ConfigDict(from_attributes=True)


class SessionSnapshot(BaseModel):
    id: int
    name: str
    start_time: datetime
    end_time: Optional[datetime] = None
    routine_day_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class SkipSnapshot(BaseModel):
    scheduled_date: date
    assignment_id: int

    model_config = ConfigDict(from_attributes=True)


# ---- Derived projection -----------------------------------------------------

class ScheduledRoutineDay(BaseModel):
    id: int
    name: str
    description: Optional[str] = None


class ScheduledSession(BaseModel):
    id: int
    name: str


class AssignmentInfo(BaseModel):
    plan_type: PlanType


class ScheduleDay(BaseModel):
    id: str
    assignment_id: int
    routine_id: int
    scheduled_date: date
    is_rest_day: bool
    is_completed: bool = False
    was_skipped: bool = False
    routine_day: Optional[ScheduledRoutineDay] = None
    workout_session: Optional[ScheduledSession] = None
    assignment: AssignmentInfo
    can_skip: bool = False


class RoutineSchedule(BaseModel):
    routine_name: str
    assignment_id: int
    plan_type: PlanType
    schedule: List[ScheduleDay]


class WeekScheduleResponse(BaseModel):
    client_id: int
    week_start: date
    week_end: date
    routines: List[RoutineSchedule]
    schedule: List[ScheduleDay]


class SkipRequest(BaseModel):
    scheduled_date: date
    assignment_id: int


class SkipOut(BaseModel):
    id: int
    client_id: int
    assignment_id: int
    scheduled_date: date
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
