"""
Streaks router — read-only projections of derived state.

GET /users/{user_id}/streak
GET /users/{user_id}/streak/daily-goals
GET /users/{user_id}/streak/weekly-goals
GET /users/{user_id}/streak/stats
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from goaltrack.core.config import settings
from goaltrack.db.base import get_db
from goaltrack.models.daily_goal import DailyGoal
from goaltrack.models.streak import StreakRecord
from goaltrack.models.weekly_goal import WeeklyGoal
from goaltrack.schemas.goals import (
    DailyGoalResponse,
    StreakResponse,
    StreakStatsResponse,
    WeeklyGoalResponse,
)
from goaltrack.services.goals_query import (
    get_daily_goals,
    get_streak,
    get_streak_stats,
    get_weekly_goals,
)

router = APIRouter(prefix="/users/{user_id}/streak", tags=["streak"])


# ---------------------------------------------------------------------------
# Serialization helpers (shared with the sessions router)
# ---------------------------------------------------------------------------

def streak_to_response(s: StreakRecord) -> StreakResponse:
    return StreakResponse(
        current_streak=s.current_streak,
        longest_streak=s.longest_streak,
        last_goal_met_date=str(s.last_goal_met_date) if s.last_goal_met_date else None,
    )


def daily_to_response(d: DailyGoal) -> DailyGoalResponse:
    return DailyGoalResponse(
        day=str(d.day),
        goal_hours=float(d.goal_hours),
        actual_hours=float(d.actual_hours),
        goal_met=d.goal_met,
    )


def weekly_to_response(w: WeeklyGoal) -> WeeklyGoalResponse:
    return WeeklyGoalResponse(
        week_start=str(w.week_start),
        week_end=str(w.week_end),
        goal_hours=float(w.goal_hours),
        actual_hours=float(w.actual_hours),
        goal_met=w.goal_met,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=StreakResponse,
    summary="Current and longest streak",
    responses={404: {"description": "Unknown user."}},
)
def read_streak(user_id: int, db: Session = Depends(get_db)):
    return streak_to_response(get_streak(db, user_id))


@router.get(
    "/daily-goals",
    response_model=list[DailyGoalResponse],
    summary="Daily goal rows, newest first",
)
def read_daily_goals(
    user_id: int,
    start_date: Optional[date] = Query(default=None, description="Inclusive range start."),
    end_date: Optional[date] = Query(default=None, description="Inclusive range end."),
    db: Session = Depends(get_db),
):
    return [daily_to_response(d) for d in get_daily_goals(db, user_id, start_date, end_date)]


@router.get(
    "/weekly-goals",
    response_model=list[WeeklyGoalResponse],
    summary="Weekly goal rows, newest first",
)
def read_weekly_goals(
    user_id: int,
    start_date: Optional[date] = Query(default=None, description="Range start on week_start."),
    end_date: Optional[date] = Query(default=None, description="Range end on week_start."),
    db: Session = Depends(get_db),
):
    return [weekly_to_response(w) for w in get_weekly_goals(db, user_id, start_date, end_date)]


@router.get(
    "/stats",
    response_model=StreakStatsResponse,
    summary="Streak plus daily/weekly success rates over a look-back window",
)
def read_streak_stats(
    user_id: int,
    days: int = Query(
        default=settings.STATS_DEFAULT_DAYS, ge=1, le=366,
        description="Look-back window in days, ending today (UTC).",
    ),
    db: Session = Depends(get_db),
):
    """
    ### Rates
    `success_rate` values are percentages (0–100) rounded to 2 decimals.
    Weekly rows count when their `week_start` falls inside the window.
    """
    return get_streak_stats(db, user_id, days=days)
