# backend/fittrack/schemas/routine.py
from __future__ import annotations
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, conint
from pydantic.config import ConfigDict
from pydantic import field_validator


class RoutineExerciseIn(BaseModel):
    exercise_name: str = Field(..., min_length=1, max_length=128)
    sets: Optional[conint(ge=1)] = None
    reps: Optional[str] = Field(None, max_length=32)
    weight_suggestion: Optional[str] = Field(None, max_length=64)
    rest_time_seconds: Optional[conint(ge=0)] = None
    notes: Optional[str] = None


class RoutineDayIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    description: Optional[str] = None
    # listed in order; order_index is assigned 0..n-1
    exercises: List[RoutineExerciseIn] = []


class RoutineCreate(BaseModel):
    user_id: int
    name: str = Field(..., min_length=1, max_length=128)
    description: Optional[str] = None
    days_per_week: Optional[conint(ge=1, le=7)] = None
    is_public: bool = False
    # listed in order; day_number is assigned 1..n
    days: List[RoutineDayIn] = []

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class RoutineUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    description: Optional[str] = None
    days_per_week: Optional[conint(ge=1, le=7)] = None
    is_public: Optional[bool] = None
    # replace the full day list if provided
    days: Optional[List[RoutineDayIn]] = None


class RoutineCopyRequest(BaseModel):
    user_id: int


class RoutineExerciseOut(BaseModel):
    id: int
    order_index: int
    exercise_name: str
    sets: Optional[int] = None
    reps: Optional[str] = None
    weight_suggestion: Optional[str] = None
    rest_time_seconds: Optional[int] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RoutineDayOut(BaseModel):
    id: int
    routine_id: int
    day_number: int
    name: str
    description: Optional[str] = None
    exercises: List[RoutineExerciseOut] = []

    model_config = ConfigDict(from_attributes=True)


class RoutineOut(BaseModel):
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    days_per_week: Optional[int] = None
    is_public: bool
    is_active: bool
    created_at: datetime
    routine_days: List[RoutineDayOut]

    model_config = ConfigDict(from_attributes=True)
