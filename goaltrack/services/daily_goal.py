"""
Daily Aggregator — goal-met status for a single user-day.

apply_daily(db, user_id, day, minutes, daily_goal_hours) -> DailyGoal

Upsert by (user_id, date):
  insert  → goal_hours snapshot + actual_hours + goal_met
  update  → actual_hours + goal_met only (goal_hours stays frozen)

Flushes, never commits; the caller owns the transaction.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from sqlalchemy.orm import Session

from goaltrack.models.daily_goal import DailyGoal

Hours = Union[Decimal, float, int]

_MINUTES_PER_HOUR = Decimal(60)
_CENTS = Decimal("0.01")


def to_decimal(value: Hours) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def minutes_to_hours(minutes: int) -> Decimal:
    """Exact hours; only quantized when stored."""
    return Decimal(minutes) / _MINUTES_PER_HOUR


def quantize_hours(hours: Decimal) -> Decimal:
    return hours.quantize(_CENTS, rounding=ROUND_HALF_UP)


def get_daily_goal(db: Session, user_id: int, day: date) -> DailyGoal | None:
    return (
        db.query(DailyGoal)
        .filter(DailyGoal.user_id == user_id, DailyGoal.day == day)
        .first()
    )


def apply_daily(
    db: Session,
    user_id: int,
    day: date,
    minutes: int,
    daily_goal_hours: Hours,
) -> DailyGoal:
    hours = minutes_to_hours(minutes)
    goal_met = hours >= to_decimal(daily_goal_hours)

    row = get_daily_goal(db, user_id, day)
    if row is None:
        row = DailyGoal(
            user_id=user_id,
            day=day,
            goal_hours=quantize_hours(to_decimal(daily_goal_hours)),
            actual_hours=quantize_hours(hours),
            goal_met=goal_met,
        )
        db.add(row)
    else:
        row.actual_hours = quantize_hours(hours)
        row.goal_met = goal_met

    db.flush()
    return row
