# backend/fittrack/services/schedule.py
"""
Weekly schedule derivation.

Pure functions only: given a snapshot of active assignments, completed
sessions and the skip log, project what each calendar day of a week looks
like for every assignment. Nothing here touches the database; the same
inputs always produce the same output.
"""
from __future__ import annotations

from bisect import bisect_left
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Set, Tuple

from fittrack.schemas.schedule import (
    AssignmentInfo,
    AssignmentSnapshot,
    RoutineDaySnapshot,
    RoutineSchedule,
    ScheduleDay,
    ScheduledRoutineDay,
    ScheduledSession,
    SessionSnapshot,
    SkipSnapshot,
)


def week_bounds(day: date) -> tuple[date, date]:
    """Monday..Sunday of the week containing `day`."""
    monday = day - timedelta(days=day.isoweekday() - 1)
    return monday, monday + timedelta(days=6)


def _each_day(start: date, end: date) -> Iterable[date]:
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)


def _skip_index(skips: Iterable[SkipSnapshot]) -> tuple[Set[Tuple[date, int]], Dict[int, List[date]]]:
    """
    Returns:
      - set of (date, assignment_id) pairs that were skipped
      - {assignment_id: sorted skip dates}, used to count skips before a day
    """
    skipped: Set[Tuple[date, int]] = set()
    by_assignment: Dict[int, List[date]] = {}
    for s in skips:
        key = (s.scheduled_date, s.assignment_id)
        if key in skipped:
            continue
        skipped.add(key)
        by_assignment.setdefault(s.assignment_id, []).append(s.scheduled_date)
    for dates in by_assignment.values():
        dates.sort()
    return skipped, by_assignment


def _skips_before(skip_dates: List[date], day: date) -> int:
    # skip_dates is sorted; count entries strictly before `day`
    return bisect_left(skip_dates, day)


def _strict_routine_day(
    day: date,
    days_per_week: Optional[int],
    routine_days: List[RoutineDaySnapshot],
) -> Optional[RoutineDaySnapshot]:
    weekday = day.isoweekday()  # Monday=1 .. Sunday=7
    if weekday > (days_per_week or 0):
        return None
    if weekday > len(routine_days):
        return None
    return routine_days[weekday - 1]


def _flexible_routine_day(
    day: date,
    start_date: date,
    skipped_before: int,
    routine_days: List[RoutineDaySnapshot],
) -> Optional[RoutineDaySnapshot]:
    if not routine_days:
        return None
    days_since_start = (day - start_date).days
    return routine_days[(days_since_start - skipped_before) % len(routine_days)]


def _matching_session(
    sessions_by_day: Dict[date, List[SessionSnapshot]],
    day: date,
    routine_day_ids: Set[int],
    expected_day_id: int,
) -> Optional[SessionSnapshot]:
    """
    A session completes the day when it started on that date and, if it is tied
    to a routine day, that routine day belongs to this routine. A session for
    the exact scheduled routine day wins over any other candidate.
    """
    candidates = [
        s for s in sessions_by_day.get(day, [])
        if s.routine_day_id is None or s.routine_day_id in routine_day_ids
    ]
    if not candidates:
        return None
    for s in candidates:
        if s.routine_day_id == expected_day_id:
            return s
    return candidates[0]


def _rest_day(assignment: AssignmentSnapshot, day: date, was_skipped: bool) -> ScheduleDay:
    return ScheduleDay(
        id=f"{assignment.id}-{day.isoformat()}",
        assignment_id=assignment.id,
        routine_id=assignment.routine_id,
        scheduled_date=day,
        is_rest_day=True,
        is_completed=False,
        was_skipped=was_skipped,
        assignment=AssignmentInfo(plan_type=assignment.plan_type),
    )


def _generate_for_assignment(
    assignment: AssignmentSnapshot,
    sessions_by_day: Dict[date, List[SessionSnapshot]],
    skipped: Set[Tuple[date, int]],
    skip_dates: List[date],
    week_start: date,
    week_end: date,
    today: Optional[date],
) -> List[ScheduleDay]:
    routine = assignment.routine
    routine_days = sorted(routine.routine_days, key=lambda rd: rd.day_number)
    routine_day_ids = {rd.id for rd in routine_days}

    out: List[ScheduleDay] = []
    for day in _each_day(max(week_start, assignment.start_date), week_end):
        if (day, assignment.id) in skipped:
            out.append(_rest_day(assignment, day, was_skipped=True))
            continue

        if assignment.plan_type == "strict":
            # calendar-anchored: skips never shift a strict plan
            expected = _strict_routine_day(day, routine.days_per_week, routine_days)
        else:
            expected = _flexible_routine_day(
                day, assignment.start_date, _skips_before(skip_dates, day), routine_days
            )

        if expected is None:
            out.append(_rest_day(assignment, day, was_skipped=False))
            continue

        session = _matching_session(sessions_by_day, day, routine_day_ids, expected.id)
        sd = ScheduleDay(
            id=f"{assignment.id}-{day.isoformat()}",
            assignment_id=assignment.id,
            routine_id=assignment.routine_id,
            scheduled_date=day,
            is_rest_day=False,
            is_completed=session is not None,
            was_skipped=False,
            routine_day=ScheduledRoutineDay(
                id=expected.id, name=expected.name, description=expected.description
            ),
            workout_session=ScheduledSession(id=session.id, name=session.name) if session else None,
            assignment=AssignmentInfo(plan_type=assignment.plan_type),
        )
        if today is not None:
            sd.can_skip = can_skip_day(sd, today)
        out.append(sd)

    return out


def generate_routine_schedules(
    assignments: List[AssignmentSnapshot],
    sessions: List[SessionSnapshot],
    skips: List[SkipSnapshot],
    week_start: date,
    week_end: date,
    today: Optional[date] = None,
) -> List[RoutineSchedule]:
    """
    One RoutineSchedule per assignment (input order), each covering every day in
    [week_start, week_end] on/after the assignment's start_date, ascending by
    date. Concurrent assignments are never merged: the same date may appear
    once per assignment.

    `today` only feeds the `can_skip` flag; leave it None to get a projection
    that depends on nothing but the records passed in.
    """
    skipped, skip_dates_by_assignment = _skip_index(skips)

    sessions_by_day: Dict[date, List[SessionSnapshot]] = {}
    for s in sorted(sessions, key=lambda x: (x.start_time, x.id)):
        sessions_by_day.setdefault(s.start_time.date(), []).append(s)

    result: List[RoutineSchedule] = []
    for a in assignments:
        days = _generate_for_assignment(
            a,
            sessions_by_day,
            skipped,
            skip_dates_by_assignment.get(a.id, []),
            week_start,
            week_end,
            today,
        )
        result.append(
            RoutineSchedule(
                routine_name=a.routine.name or "Unnamed Routine",
                assignment_id=a.id,
                plan_type=a.plan_type,
                schedule=days,
            )
        )
    return result


def flatten_schedules(routine_schedules: List[RoutineSchedule]) -> List[ScheduleDay]:
    """Flat list ordered by date; same-date entries keep assignment order."""
    flat = [d for row in routine_schedules for d in row.schedule]
    # sorted() is stable, so assignment order survives within a date
    return sorted(flat, key=lambda d: d.scheduled_date)


def can_skip_day(day: ScheduleDay, today: date) -> bool:
    # only flexible, pending, non-rest days from today on can be skipped
    return (
        day.assignment.plan_type == "flexible"
        and not day.is_completed
        and not day.was_skipped
        and not day.is_rest_day
        and day.scheduled_date >= today
    )
