# backend/fittrack/schemas/__init__.py

# Schedule projection
from .schedule import (
    ScheduleDay,
    RoutineSchedule,
    WeekScheduleResponse,
    SkipRequest,
    SkipOut,
)

# Routines
from .routine import (
    RoutineExerciseIn,
    RoutineCreate,
    RoutineUpdate,
    RoutineOut,
)

# Assignments / recommendations / sessions
from .assignment import AssignmentCreate, AssignmentOut
from .recommendation import RecommendationCreate, RecommendationAccept, RecommendationOut
from .session import (
    WorkoutSessionStart,
    WorkoutSessionFinish,
    WorkoutSessionOut,
    WorkoutExerciseIn,
    WorkoutExerciseOut,
    WorkoutSetIn,
    WorkoutSetOut,
)

__all__ = [
    "ScheduleDay", "RoutineSchedule", "WeekScheduleResponse", "SkipRequest", "SkipOut",
    "RoutineExerciseIn", "RoutineCreate", "RoutineUpdate", "RoutineOut",
    "AssignmentCreate", "AssignmentOut",
    "RecommendationCreate", "RecommendationAccept", "RecommendationOut",
    "WorkoutSessionStart", "WorkoutSessionFinish", "WorkoutSessionOut",
    "WorkoutExerciseIn", "WorkoutExerciseOut", "WorkoutSetIn", "WorkoutSetOut",
]
