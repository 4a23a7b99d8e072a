# backend/fittrack/schemas/session.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, conint, confloat
from pydantic.config import ConfigDict


class WorkoutSetIn(BaseModel):
    set_number: conint(ge=1)
    weight: Optional[confloat(ge=0)] = None
    reps: Optional[conint(ge=0)] = None
    rpe: Optional[conint(ge=1, le=10)] = None
    duration_seconds: Optional[conint(ge=0)] = None
    distance: Optional[confloat(ge=0)] = None
    completed: bool = False


class WorkoutExerciseIn(BaseModel):
    exercise_name: str = Field(..., max_length=128)
    notes: Optional[str] = None
    sets: List[WorkoutSetIn] = []


class WorkoutSessionStart(BaseModel):
    user_id: int
    # required for free-form sessions; routine-day sessions default to the day name
    name: Optional[str] = Field(None, max_length=128)
    routine_day_id: Optional[int] = None
    assignment_id: Optional[int] = None
    start_time: Optional[datetime] = None  # defaults to now
    notes: Optional[str] = None


class WorkoutSessionFinish(BaseModel):
    end_time: Optional[datetime] = None  # defaults to now
    notes: Optional[str] = None
    # logged with the finish; blank exercises and empty sets are dropped
    exercises: List[WorkoutExerciseIn] = []


class WorkoutSetOut(BaseModel):
    id: int
    set_number: int
    weight: Optional[float] = None
    reps: Optional[int] = None
    rpe: Optional[int] = None
    duration_seconds: Optional[int] = None
    distance: Optional[float] = None
    completed: bool

    model_config = ConfigDict(from_attributes=True)


class WorkoutExerciseOut(BaseModel):
    id: int
    session_id: int
    exercise_name: str
    notes: Optional[str] = None
    order_index: int
    sets: List[WorkoutSetOut]

    model_config = ConfigDict(from_attributes=True)


class WorkoutSessionOut(BaseModel):
    id: int
    user_id: int
    name: str
    start_time: datetime
    end_time: Optional[datetime] = None
    notes: Optional[str] = None
    routine_id: Optional[int] = None
    routine_day_id: Optional[int] = None
    assignment_id: Optional[int] = None
    is_completed: bool

    model_config = ConfigDict(from_attributes=True)


class CompletedTodayResponse(BaseModel):
    day: str
    routine_day_ids: List[int]
