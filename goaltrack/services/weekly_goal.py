"""
Weekly Aggregator — goal-met status for the Monday..Sunday week of a date.

Every trigger re-sums all of the user's session minutes in the week from
work_sessions instead of applying a delta, so edits and deletes anywhere
in the week can never leave the total drifting.
"""
from __future__ import annotations

from datetime import date, timedelta

from sqlalchemy.orm import Session

from goaltrack.models.weekly_goal import WeeklyGoal
from goaltrack.services.daily_goal import (
    Hours,
    minutes_to_hours,
    quantize_hours,
    to_decimal,
)
from goaltrack.services.session_store import sum_duration_minutes


def week_bounds(day: date) -> tuple[date, date]:
    """Return (monday, sunday) of the ISO week containing `day`."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def apply_weekly(
    db: Session,
    user_id: int,
    day: date,
    weekly_goal_hours: Hours,
) -> WeeklyGoal:
    week_start, week_end = week_bounds(day)

    total_minutes = sum_duration_minutes(db, user_id, week_start, week_end)
    hours = minutes_to_hours(total_minutes)
    goal_met = hours >= to_decimal(weekly_goal_hours)

    row = (
        db.query(WeeklyGoal)
        .filter(WeeklyGoal.user_id == user_id, WeeklyGoal.week_start == week_start)
        .first()
    )
    if row is None:
        row = WeeklyGoal(
            user_id=user_id,
            week_start=week_start,
            week_end=week_end,
            goal_hours=quantize_hours(to_decimal(weekly_goal_hours)),
            actual_hours=quantize_hours(hours),
            goal_met=goal_met,
        )
        db.add(row)
    else:
        row.actual_hours = quantize_hours(hours)
        row.goal_met = goal_met

    db.flush()
    return row
