# backend/fittrack/schemas/assignment.py
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel
from pydantic.config import ConfigDict

from fittrack.schemas.schedule import PlanType


class AssignmentCreate(BaseModel):
    client_id: int
    routine_id: int
    plan_type: PlanType = "strict"
    start_date: Optional[date] = None  # defaults to today


class AssignmentOut(BaseModel):
    id: int
    routine_id: int
    routine_name: Optional[str] = None
    days_per_week: Optional[int] = None
    client_id: int
    plan_type: PlanType
    start_date: date
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
