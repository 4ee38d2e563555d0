"""
Aggregation Pipeline — keeps daily, weekly and streak state in step with
work_sessions.

Core operations (flush only, caller owns the transaction)
---------------------------------------------------------
on_session_write(db, user_id, day, minutes) -> PipelineResult
on_session_delete(db, user_id, day)         -> PipelineResult

Both run Daily → Weekly → Streak, strictly in that order. The streak step
consumes the goal_met just computed by the daily step; weekly is
independent of it. A delete is a write of 0 minutes.

Session operations (one transaction each, used by the HTTP layer)
-----------------------------------------------------------------
save_session(db, user_id, data)               -> (WorkSession, PipelineResult)
update_session(db, user_id, session_id, data) -> (WorkSession, PipelineResult)
remove_session(db, user_id, session_id)       -> PipelineResult
remove_session_by_date(db, user_id, day)      -> PipelineResult

Each one validates input before touching the store, takes the user's
StreakRecord row lock, mutates work_sessions, runs the pipeline and
commits once. Any failure rolls the whole call back.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, time
from typing import Any, Callable, Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from goaltrack.core.errors import (
    MissingDateError,
    SessionNotFoundError,
    StoreError,
)
from goaltrack.models.daily_goal import DailyGoal
from goaltrack.models.streak import StreakRecord
from goaltrack.models.weekly_goal import WeeklyGoal
from goaltrack.models.work_session import WorkSession
from goaltrack.services import session_store
from goaltrack.services.daily_goal import apply_daily
from goaltrack.services.duration import require_positive_minutes, resolve_minutes
from goaltrack.services.streak import apply_streak, lock_streak
from goaltrack.services.users import get_daily_goal_hours, get_user, get_weekly_goal_hours
from goaltrack.services.weekly_goal import apply_weekly

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result / input types
# ---------------------------------------------------------------------------

@dataclass
class PipelineResult:
    """The three records touched by one pipeline run."""
    daily: DailyGoal
    weekly: WeeklyGoal
    streak: StreakRecord


@dataclass
class SessionInput:
    """Lightweight DTO so the service layer stays schema-agnostic."""
    day: Optional[date] = None
    duration_minutes: Optional[int] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    description: Optional[str] = None
    category: Optional[str] = None


# ---------------------------------------------------------------------------
# Store error boundary
# ---------------------------------------------------------------------------

def _step(name: str, fn: Callable[..., Any], *args: Any) -> Any:
    """Run one store-touching step; persistence failures become StoreError."""
    try:
        return fn(*args)
    except SQLAlchemyError as exc:
        logger.error("Store failure during %s: %s", name, exc)
        raise StoreError(message=f"Store failure during {name}.", step=name) from exc


@contextmanager
def _unit_of_work(db: Session) -> Iterator[None]:
    """Commit on success; roll back on any error and re-raise it."""
    try:
        yield
        _step("commit", db.commit)
    except Exception:
        db.rollback()
        raise


# ---------------------------------------------------------------------------
# Core pipeline
# ---------------------------------------------------------------------------

def _run(db: Session, user_id: int, day: date, minutes: int) -> PipelineResult:
    daily_goal_hours = _step("load_user", get_daily_goal_hours, db, user_id)
    weekly_goal_hours = _step("load_user", get_weekly_goal_hours, db, user_id)
    _step("lock_streak", lock_streak, db, user_id)

    daily = _step("daily", apply_daily, db, user_id, day, minutes, daily_goal_hours)
    weekly = _step("weekly", apply_weekly, db, user_id, day, weekly_goal_hours)
    streak = _step("streak", apply_streak, db, user_id, day, daily.goal_met)

    logger.info(
        "pipeline user=%s day=%s minutes=%s daily_met=%s weekly_met=%s streak=%s/%s",
        user_id, day, minutes, daily.goal_met, weekly.goal_met,
        streak.current_streak, streak.longest_streak,
    )
    return PipelineResult(daily=daily, weekly=weekly, streak=streak)


def on_session_write(db: Session, user_id: int, day: date, minutes: int) -> PipelineResult:
    """Recompute rollups after a session for `day` was created or updated."""
    if day is None:
        raise MissingDateError()
    require_positive_minutes(minutes)
    return _run(db, user_id, day, minutes)


def on_session_delete(db: Session, user_id: int, day: date) -> PipelineResult:
    """
    Recompute rollups after the session for `day` was removed.

    Treated as zero minutes on that date, so if `day` is the stored
    last_goal_met_date the current streak drops to 0 even when other
    dates are still goal-met.
    """
    if day is None:
        raise MissingDateError()
    return _run(db, user_id, day, 0)


# ---------------------------------------------------------------------------
# Session operations
# ---------------------------------------------------------------------------

def _resolve(data: SessionInput) -> int:
    minutes = resolve_minutes(data.duration_minutes, data.start_time, data.end_time)
    if minutes is None:
        # report what the client sent, e.g. duration_minutes=-5 with no times
        minutes = data.duration_minutes
    return require_positive_minutes(minutes)


def save_session(
    db: Session, user_id: int, data: SessionInput
) -> tuple[WorkSession, PipelineResult]:
    """Create or overwrite the session for data.day and run the pipeline."""
    if data.day is None:
        raise MissingDateError()
    minutes = _resolve(data)

    with _unit_of_work(db):
        _step("load_user", get_user, db, user_id)
        _step("lock_streak", lock_streak, db, user_id)
        session = _step(
            "upsert_session", session_store.upsert_session,
            db, user_id, data.day, minutes,
            data.start_time, data.end_time, data.description, data.category,
        )
        result = on_session_write(db, user_id, session.day, minutes)

    db.refresh(session)
    return session, result


def update_session(
    db: Session, user_id: int, session_id: int, data: SessionInput
) -> tuple[WorkSession, PipelineResult]:
    """Overwrite an existing session addressed by id. Its date does not move."""
    minutes = _resolve(data)

    with _unit_of_work(db):
        _step("load_user", get_user, db, user_id)
        _step("lock_streak", lock_streak, db, user_id)
        existing = _step("load_session", session_store.get_session_by_id, db, user_id, session_id)
        if existing is None:
            raise SessionNotFoundError(session_id=session_id)
        session = _step(
            "upsert_session", session_store.upsert_session,
            db, user_id, existing.day, minutes,
            data.start_time, data.end_time, data.description, data.category,
        )
        result = on_session_write(db, user_id, session.day, minutes)

    db.refresh(session)
    return session, result


def _remove(db: Session, user_id: int, lookup: Callable[[], Optional[WorkSession]],
            missing: SessionNotFoundError) -> PipelineResult:
    with _unit_of_work(db):
        _step("load_user", get_user, db, user_id)
        _step("lock_streak", lock_streak, db, user_id)
        session = _step("load_session", lookup)
        if session is None:
            raise missing
        day = _step("delete_session", session_store.delete_session, db, session)
        result = on_session_delete(db, user_id, day)
    return result


def remove_session(db: Session, user_id: int, session_id: int) -> PipelineResult:
    return _remove(
        db, user_id,
        lambda: session_store.get_session_by_id(db, user_id, session_id),
        SessionNotFoundError(session_id=session_id),
    )


def remove_session_by_date(db: Session, user_id: int, day: date) -> PipelineResult:
    return _remove(
        db, user_id,
        lambda: session_store.get_session_by_date(db, user_id, day),
        SessionNotFoundError(day=day),
    )
