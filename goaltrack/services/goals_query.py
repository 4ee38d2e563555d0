"""
Read accessors over derived state. Plain projections, no derivation
beyond the summary arithmetic in get_streak_stats.

Public API
----------
get_streak(db, user_id)                        -> StreakRecord | zero-state StreakRecord
get_daily_goals(db, user_id, start, end)       -> list[DailyGoal]   (newest first)
get_weekly_goals(db, user_id, start, end)      -> list[WeeklyGoal]  (newest first)
get_streak_stats(db, user_id, days, today)     -> dict
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy.orm import Session

from goaltrack.models.daily_goal import DailyGoal
from goaltrack.models.streak import StreakRecord
from goaltrack.models.weekly_goal import WeeklyGoal
from goaltrack.services.users import get_user


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


def _round2(value: Decimal) -> float:
    return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def get_streak(db: Session, user_id: int) -> StreakRecord:
    """
    Return the user's StreakRecord. A user with no record yet gets an
    unsaved zero-state instance instead of an error.
    """
    get_user(db, user_id)
    row = db.query(StreakRecord).filter(StreakRecord.user_id == user_id).first()
    if row is None:
        return StreakRecord(
            user_id=user_id,
            current_streak=0,
            longest_streak=0,
            last_goal_met_date=None,
        )
    return row


def get_daily_goals(
    db: Session,
    user_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[DailyGoal]:
    get_user(db, user_id)
    q = db.query(DailyGoal).filter(DailyGoal.user_id == user_id)
    if start_date is not None and end_date is not None:
        q = q.filter(DailyGoal.day.between(start_date, end_date))
    return q.order_by(DailyGoal.day.desc()).all()


def get_weekly_goals(
    db: Session,
    user_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[WeeklyGoal]:
    """The range filters on week_start."""
    get_user(db, user_id)
    q = db.query(WeeklyGoal).filter(WeeklyGoal.user_id == user_id)
    if start_date is not None and end_date is not None:
        q = q.filter(WeeklyGoal.week_start.between(start_date, end_date))
    return q.order_by(WeeklyGoal.week_start.desc()).all()


def get_streak_stats(
    db: Session,
    user_id: int,
    days: int = 30,
    today: Optional[date] = None,
) -> dict:
    """
    Summarise the last `days` days: streak, daily success rate and hours,
    and weekly success rate. Rates are percentages rounded to 2 places.
    """
    end = today or _today()
    start = end - timedelta(days=days)

    streak = get_streak(db, user_id)
    daily = get_daily_goals(db, user_id, start, end)
    weekly = (
        db.query(WeeklyGoal)
        .filter(WeeklyGoal.user_id == user_id, WeeklyGoal.week_start >= start)
        .order_by(WeeklyGoal.week_start.desc())
        .all()
    )

    total_days = len(daily)
    days_goal_met = sum(1 for d in daily if d.goal_met)
    total_hours = sum((Decimal(d.actual_hours or 0) for d in daily), Decimal(0))

    if total_days:
        success_rate = Decimal(days_goal_met) * 100 / Decimal(total_days)
        average_hours = total_hours / Decimal(total_days)
    else:
        success_rate = average_hours = Decimal(0)

    total_weeks = len(weekly)
    weeks_goal_met = sum(1 for w in weekly if w.goal_met)
    weekly_rate = (
        Decimal(weeks_goal_met) * 100 / Decimal(total_weeks) if total_weeks else Decimal(0)
    )

    return {
        "streak": {
            "current": streak.current_streak,
            "longest": streak.longest_streak,
            "last_goal_met_date": (
                str(streak.last_goal_met_date) if streak.last_goal_met_date else None
            ),
        },
        "period": {
            "days": days,
            "start_date": str(start),
            "end_date": str(end),
        },
        "daily": {
            "total_days": total_days,
            "days_goal_met": days_goal_met,
            "success_rate": _round2(success_rate),
            "total_hours": _round2(total_hours),
            "average_hours_per_day": _round2(average_hours),
        },
        "weekly": {
            "total_weeks": total_weeks,
            "weeks_goal_met": weeks_goal_met,
            "success_rate": _round2(weekly_rate),
        },
    }
