# backend/fittrack/schemas/recommendation.py
from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from fittrack.schemas.schedule import PlanType

RecommendationStatus = Literal["pending", "accepted", "declined"]


class RecommendationCreate(BaseModel):
    trainer_id: int
    client_id: int
    routine_id: int
    message: Optional[str] = Field(None, max_length=1024)


class RecommendationAccept(BaseModel):
    plan_type: PlanType = "strict"
    start_date: Optional[date] = None  # defaults to today


class RecommendationOut(BaseModel):
    id: int
    trainer_id: int
    client_id: int
    routine_id: int
    routine_name: Optional[str] = None
    message: Optional[str] = None
    status: RecommendationStatus
    assignment_id: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
