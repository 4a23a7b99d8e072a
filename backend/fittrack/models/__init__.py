# backend/fittrack/models/__init__.py
from fittrack.db import Base

# import all model modules so tables get registered on Base.metadata
from .routine import Routine
from .routine_day import RoutineDay
from .routine_exercise import RoutineExercise
from .routine_assignment import RoutineAssignment, PLAN_TYPES
from .routine_recommendation import RoutineRecommendation, RECOMMENDATION_STATUSES
from .workout_session import WorkoutSession
from .workout_exercise import WorkoutExercise, WorkoutSet
from .schedule_skip import ScheduleSkip


__all__ = [
    "Base",
    "Routine",
    "RoutineDay",
    "RoutineExercise",
    "RoutineAssignment",
    "PLAN_TYPES",
    "RoutineRecommendation",
    "RECOMMENDATION_STATUSES",
    "WorkoutSession",
    "WorkoutExercise",
    "WorkoutSet",
    "ScheduleSkip",
]
